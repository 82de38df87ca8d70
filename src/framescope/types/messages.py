"""Notifications published by the frame builder.

Notifications are put on the builder's `notif_queue` (an `asyncio.Queue`) after
each state transition, consumers (dashboards, loggers, the CLI) drain it.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from mashumaro import DataClassDictMixin
from mashumaro.config import BaseConfig
from mashumaro.types import Discriminator

from .frame import Frame
from .modes import OperationMode


@dataclass(kw_only=True)
class Notification(DataClassDictMixin):
    """Base class for all notifications."""

    type: str

    class Config(BaseConfig):
        discriminator = Discriminator(field="type", include_subtypes=True)


@dataclass(kw_only=True)
class FrameChanged(Notification):
    """A chunk was decoded into a frame.

    In PROJECT_FILE mode `frame` is the builder's live buffer, it will be
    overwritten by the next chunk.
    """

    type: str = "frame_changed"
    frame: Frame = field(default_factory=Frame)


@dataclass(kw_only=True)
class SchemaChanged(Notification):
    """A JSON map load was attempted. `loaded` is False after a failure."""

    type: str = "schema_changed"
    filepath: str = ""
    filename: str = ""
    loaded: bool = False


@dataclass(kw_only=True)
class ModeChanged(Notification):
    type: str = "mode_changed"
    mode: OperationMode = OperationMode.QUICK_PLOT
