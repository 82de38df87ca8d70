"""Protocols for the collaborators the frame builder talks to.

The builder never depends on a concrete transport, frame parser, playback source
or message box. Anything that implements the methods below can be plugged in,
the protocols are `runtime_checkable` so the builder can reject obviously wrong
objects early.

- TransportProtocol: the byte delivery layer (serial port, socket, ...), it only
  needs to accept the start/finish delimiters of a raw frame.
- FrameParserProtocol: splits decoded frame text into fields (PROJECT_FILE mode).
  The splitting grammar lives with the project, not here.
- PlaybackProtocol: a recorded-session player, while it is replaying the chunks
  are already comma separated values.
- MessageSinkProtocol: user facing error reporting (schema load failures).

See Also
--------
framescope.util.adapters : small concrete implementations
framescope.decoder.parsers : simple frame parsers
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class TransportProtocol(Protocol):
    def set_start_sequence(self, sequence: bytes) -> None:
        """Bytes that mark the start of a raw frame (empty = none)."""
        ...

    def set_finish_sequence(self, sequence: bytes) -> None:
        """Bytes that mark the end of a raw frame (empty = none)."""
        ...


@runtime_checkable
class FrameParserProtocol(Protocol):
    def parse(self, text: str) -> list[str]:
        """Split one frame of decoded text into an ordered field list."""
        ...


@runtime_checkable
class PlaybackProtocol(Protocol):
    def is_replaying(self) -> bool: ...


@runtime_checkable
class MessageSinkProtocol(Protocol):
    def show_message(self, title: str, text: str = "", critical: bool = False) -> None:
        ...
