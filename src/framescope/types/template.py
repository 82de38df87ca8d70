"""Immutable, validated project template."""

from __future__ import annotations

import copy
from dataclasses import dataclass, field

from .frame import Frame


@dataclass(frozen=True)
class FrameTemplate:
    """A successfully loaded JSON map.

    Built once by the schema loader and never mutated, a reload replaces the whole
    object. `build_frame` hands out the mutable buffer that PROJECT_FILE decoding
    writes into.

    Attributes
    ----------
    definition : Frame
        The validated frame definition (private copy, do not mutate).
    frame_start : bytes
        Start delimiter pushed to the transport in PROJECT_FILE mode.
    frame_end : bytes
        Finish delimiter pushed to the transport in PROJECT_FILE mode.
    source_path : str
        Absolute path the template was read from.
    """

    definition: Frame = field(compare=True)
    frame_start: bytes = b""
    frame_end: bytes = b""
    source_path: str = field(default="", compare=False)

    @classmethod
    def from_frame(cls, frame: Frame, source_path: str = "") -> FrameTemplate:
        return cls(
            definition=copy.deepcopy(frame),
            frame_start=frame.frame_start.encode("utf-8"),
            frame_end=frame.frame_end.encode("utf-8"),
            source_path=source_path,
        )

    @property
    def title(self) -> str:
        return self.definition.title

    def build_frame(self) -> Frame:
        return copy.deepcopy(self.definition)
