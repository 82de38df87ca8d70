"""Per-chunk dispatch: one decode function per operation mode.

`FrameDecoder.decode` is called once for every chunk the transport delivers. It
never raises for bad input and never does I/O, a chunk that can't be decoded just
doesn't produce a frame (None) and the previous state is kept.
"""

from __future__ import annotations

from typing import Callable, Optional

import simplejson as json
from loguru import logger

from framescope.types import (
    DROP_REASON,
    DecoderMethod,
    Frame,
    FrameParserProtocol,
    OperationMode,
    ValidationError,
    parse_frame,
    to_operation_mode,
)

from .fields import get_fields
from .quickplot import synthesize


class FrameDecoder:
    """Turns raw chunks into frames according to the operation mode.

    Stateless, the PROJECT_FILE frame buffer is owned by the caller and passed in.
    """

    def __init__(self):
        self._handlers: dict[OperationMode, Callable[..., Optional[Frame]]] = {
            OperationMode.DEVICE_SENDS_JSON: self._decode_device_json,
            OperationMode.PROJECT_FILE: self._decode_project,
            OperationMode.QUICK_PLOT: self._decode_quick_plot,
        }

    def decode(
        self,
        data: bytes,
        mode: OperationMode | int,
        frame: Frame,
        frame_parser: Optional[FrameParserProtocol] = None,
        replaying: bool = False,
        method: DecoderMethod | int = DecoderMethod.PLAIN_TEXT,
    ) -> Optional[Frame]:
        """Decode one chunk.

        Parameters
        ----------
        data : bytes
            One raw frame from the transport.
        mode : OperationMode | int
            Active operation mode.
        frame : Frame
            The project (template derived) frame buffer. Only used, and updated
            in place, in PROJECT_FILE mode.
        frame_parser : FrameParserProtocol, optional
            Field splitter, required in PROJECT_FILE mode.
        replaying : bool
            True while a recorded session is being played back.
        method : DecoderMethod | int
            Bytes to text conversion for the frame parser.

        Returns
        -------
        Optional[Frame]
            The frame to publish, or None to publish nothing for this chunk.
        """
        if not data:
            logger.trace("Chunk dropped: {}", DROP_REASON.EMPTY_INPUT)
            return None

        handler = self._handlers.get(to_operation_mode(mode))
        if handler is None:
            logger.warning("Chunk dropped: {} ({})", DROP_REASON.UNRECOGNIZED_MODE, mode)
            return None
        return handler(data, frame, frame_parser, replaying, method)

    def _decode_device_json(self, data, frame, frame_parser, replaying, method):
        # devices stream continuously, a bad chunk is routine -> trace only
        try:
            return parse_frame(json.loads(data))
        except (
            json.JSONDecodeError,
            UnicodeDecodeError,
            RecursionError,
            ValidationError,
        ) as e:
            logger.trace("Chunk dropped: {} ({})", DROP_REASON.INVALID_FRAME, e)
            return None

    def _decode_project(self, data, frame, frame_parser, replaying, method):
        if frame_parser is None:
            logger.trace("Chunk dropped: {}", DROP_REASON.MISSING_FIELD_PARSER)
            return None

        try:
            fields = get_fields(data, method, frame_parser, replaying)
        except Exception as e:
            # the parser is user supplied, a failure only drops this chunk
            logger.warning(
                "Chunk dropped: {} (frame parser: {!r})", DROP_REASON.INVALID_FRAME, e
            )
            return None

        count = len(fields)
        for dataset in frame.iter_datasets():
            if 0 < dataset.index <= count:
                dataset.value = fields[dataset.index - 1]

        return frame

    def _decode_quick_plot(self, data, frame, frame_parser, replaying, method):
        return synthesize(data)
