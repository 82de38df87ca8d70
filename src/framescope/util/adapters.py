"""Minimal concrete collaborators for the frame builder.

Real deployments plug in their own transport, player and message box, these
cover the command line tool and scripting.
"""

from __future__ import annotations

from typing import BinaryIO, Iterator

from loguru import logger


class LogMessageSink:
    """Reports user facing messages through the log instead of a dialog."""

    def show_message(self, title: str, text: str = "", critical: bool = False) -> None:
        if critical:
            logger.error("{}: {}", title, text)
        else:
            logger.warning("{}: {}", title, text)


class StaticPlayback:
    """Playback source whose replay state is fixed at construction."""

    def __init__(self, replaying: bool = False):
        self.replaying = replaying

    def is_replaying(self) -> bool:
        return self.replaying


class LineTransport:
    """Newline delimited byte stream reader.

    Records the start/finish sequences the builder pushes, and when chunking a
    stream strips them from the edges of each line (a line that only carries
    delimiters becomes empty, and is still yielded so the builder sees it).
    """

    def __init__(self):
        self.start_sequence = b""
        self.finish_sequence = b""

    def set_start_sequence(self, sequence: bytes) -> None:
        logger.debug("Start sequence set to {!r}", sequence)
        self.start_sequence = sequence

    def set_finish_sequence(self, sequence: bytes) -> None:
        logger.debug("Finish sequence set to {!r}", sequence)
        self.finish_sequence = sequence

    def extract(self, line: bytes) -> bytes:
        """Strip the line ending and any delimiters from one raw line."""
        chunk = line.rstrip(b"\r\n")
        if self.start_sequence and chunk.startswith(self.start_sequence):
            chunk = chunk[len(self.start_sequence) :]
        if self.finish_sequence and chunk.endswith(self.finish_sequence):
            chunk = chunk[: -len(self.finish_sequence)]
        return chunk

    def chunks(self, stream: BinaryIO) -> Iterator[bytes]:
        for line in stream:
            yield self.extract(line)
