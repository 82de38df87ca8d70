"""The frame builder service.

`FrameBuilder` is the single owner of all decoding state: the active JSON map, the
live project frame and the operation mode. Everything that mutates that state runs
on one asyncio event loop (the "owner"), so no locks are needed:

- transports living on other threads hand chunks over with `submit`, which
  queues them onto the owner loop (never a direct call)
- map loads and mode switches requested from other threads go through
  `submit_load` / `submit_mode` and are serialized with the chunks
- code already running on the owner loop (or a simple single threaded script)
  may call `read_data`, `load_json_map` and `set_operation_mode` directly

Notifications (`FrameChanged`, `SchemaChanged`, `ModeChanged`) are published on
`notif_queue`.

Example
-------
```python
builder = FrameBuilder(transport, Settings(), notif_queue)
builder.restore()
builder.set_frame_parser(SeparatorFrameParser(","))
task = asyncio.create_task(builder.run())
await builder.wait_started()
# ... transport thread calls builder.submit(chunk) ...
builder.stop()
await task
```
"""

from __future__ import annotations

import asyncio
import types
from typing import Any, Optional

from loguru import logger

from framescope.decoder import FrameDecoder
from framescope.types import (
    DecoderMethod,
    Frame,
    FrameChanged,
    FrameParserProtocol,
    FrameTemplate,
    MessageSinkProtocol,
    Notification,
    OperationMode,
    PlaybackProtocol,
    SchemaError,
    TransportProtocol,
    to_decoder_method,
)
from framescope.util import (
    JSON_MAP_LOCATION_KEY,
    OPERATION_MODE_KEY,
    LogMessageSink,
    Settings,
    format_error_response,
)

from .mode_controller import ModeController
from .schema_loader import SchemaLoader

# ----------------
# Owner loop work items
# ----------------

WORK = types.SimpleNamespace()
WORK.DATA = "DATA"
WORK.LOAD = "LOAD"
WORK.MODE = "MODE"
WORK.STOP = "STOP"


class FrameBuilder:
    """Owns the decoding state and turns transport chunks into frames.

    Parameters
    ----------
    transport : TransportProtocol
        Byte delivery layer, receives frame delimiters.
    settings : Settings, optional
        Persisted `json_map_location` / `operation_mode`. Defaults to the user's
        settings file.
    notif_queue : asyncio.Queue[Notification], optional
        Where notifications are published, a new queue is created if omitted.
    playback : PlaybackProtocol, optional
        Recorded session player, when it reports replaying the frame parser is
        bypassed.
    message_sink : MessageSinkProtocol, optional
        User facing error reporting, defaults to the log.
    decoder_method : DecoderMethod
        Bytes to text conversion used in PROJECT_FILE mode.
    """

    def __init__(
        self,
        transport: TransportProtocol,
        settings: Optional[Settings] = None,
        notif_queue: Optional[asyncio.Queue[Notification]] = None,
        playback: Optional[PlaybackProtocol] = None,
        message_sink: Optional[MessageSinkProtocol] = None,
        decoder_method: DecoderMethod = DecoderMethod.PLAIN_TEXT,
    ):
        if not isinstance(transport, TransportProtocol):
            raise TypeError(
                f"{type(transport).__name__} does not implement TransportProtocol"
            )
        if playback is not None and not isinstance(playback, PlaybackProtocol):
            raise TypeError(
                f"{type(playback).__name__} does not implement PlaybackProtocol"
            )

        self.settings = settings if settings is not None else Settings()
        self.notif_queue = notif_queue if notif_queue is not None else asyncio.Queue()
        self.playback = playback
        self.decoder_method = decoder_method

        self.loader = SchemaLoader(
            transport,
            self.settings,
            self.notif_queue,
            message_sink if message_sink is not None else LogMessageSink(),
            lambda: self.operation_mode,
        )
        self.modes = ModeController(
            self.loader, transport, self.settings, self.notif_queue
        )
        self.decoder = FrameDecoder()
        self._frame_parser: Optional[FrameParserProtocol] = None

        self._work_queue: asyncio.Queue[tuple[str, Any]] = asyncio.Queue()
        self._started = asyncio.Event()
        self._loop: Optional[asyncio.AbstractEventLoop] = None

    # ------------------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------------------

    @property
    def operation_mode(self) -> OperationMode:
        return self.modes.mode

    @property
    def frame(self) -> Frame:
        """Live project frame, empty when no JSON map is loaded."""
        return self.loader.frame

    @property
    def template(self) -> Optional[FrameTemplate]:
        return self.loader.template

    @property
    def json_map_filepath(self) -> str:
        return self.loader.json_map_filepath

    @property
    def json_map_filename(self) -> str:
        return self.loader.json_map_filename

    @property
    def frame_parser(self) -> Optional[FrameParserProtocol]:
        return self._frame_parser

    def set_frame_parser(self, parser: Optional[FrameParserProtocol]) -> None:
        """Register the field splitter used in PROJECT_FILE mode (None to remove)."""
        if parser is not None and not isinstance(parser, FrameParserProtocol):
            raise TypeError(
                f"{type(parser).__name__} does not implement FrameParserProtocol"
            )
        self._frame_parser = parser

    def set_decoder_method(self, method: DecoderMethod | int) -> None:
        decoder_method = to_decoder_method(method)
        if decoder_method is None:
            logger.warning("Invalid decoder method selected: {}", method)
            return
        self.decoder_method = decoder_method

    def is_replaying(self) -> bool:
        return self.playback is not None and self.playback.is_replaying()

    # ------------------------------------------------------------------------------
    # Owner loop API (call from the owner thread)
    # ------------------------------------------------------------------------------

    def restore(self) -> None:
        """Re-apply the persisted JSON map and operation mode (startup)."""
        path = self.settings.value(JSON_MAP_LOCATION_KEY, "")
        if path:
            try:
                self.loader.load(path)
            except SchemaError as e:
                logger.warning("Could not restore JSON map {}: {}", path, e)

        mode = self.settings.int_value(
            OPERATION_MODE_KEY, int(OperationMode.QUICK_PLOT)
        )
        self.modes.set_mode(mode)

    def load_json_map(self, path: str) -> None:
        """See `SchemaLoader.load`, raises `SchemaError` on failure."""
        self.loader.load(path)

    def set_operation_mode(self, mode: OperationMode | int) -> None:
        self.modes.set_mode(mode)

    def read_data(self, data: bytes) -> Optional[Frame]:
        """Decode one chunk and publish the resulting frame, if any."""
        frame = self.decoder.decode(
            data,
            self.operation_mode,
            self.loader.frame,
            frame_parser=self._frame_parser,
            replaying=self.is_replaying(),
            method=self.decoder_method,
        )
        if frame is not None:
            self.notif_queue.put_nowait(FrameChanged(frame=frame))
        return frame

    # ------------------------------------------------------------------------------
    # Thread safe hand-off
    # ------------------------------------------------------------------------------

    def submit(self, data: bytes) -> None:
        """Queue a chunk for decoding on the owner loop (any thread)."""
        self._post(WORK.DATA, bytes(data))

    def submit_load(self, path: str) -> None:
        self._post(WORK.LOAD, path)

    def submit_mode(self, mode: OperationMode | int) -> None:
        self._post(WORK.MODE, mode)

    def stop(self) -> None:
        """Ask `run` to return once the work already queued is processed."""
        self._post(WORK.STOP, None)

    def _post(self, kind: str, payload: Any) -> None:
        if self._loop is None:
            raise RuntimeError("FrameBuilder.run() has not been started.")
        self._loop.call_soon_threadsafe(self._work_queue.put_nowait, (kind, payload))

    async def wait_started(self) -> None:
        await self._started.wait()

    async def run(self) -> None:
        """Owner loop: process queued chunks, loads and mode switches in order."""
        self._loop = asyncio.get_running_loop()
        self._started.set()
        logger.info("Frame builder started.")
        try:
            while True:
                kind, payload = await self._work_queue.get()
                if kind == WORK.STOP:
                    break
                try:
                    self._process(kind, payload)
                except Exception:
                    logger.error(
                        "Work item {} failed, continuing:\n{}",
                        kind,
                        format_error_response(),
                    )
        finally:
            self._started.clear()
            self._loop = None
            logger.info("Frame builder stopped.")

    def _process(self, kind: str, payload: Any) -> None:
        match kind:
            case WORK.DATA:
                self.read_data(payload)
            case WORK.LOAD:
                try:
                    self.loader.load(payload)
                except SchemaError as e:
                    # already reported to the user by the loader
                    logger.debug("Queued JSON map load failed: {}", e)
            case WORK.MODE:
                self.modes.set_mode(payload)
            case _:
                logger.warning("Unknown work item: {}", kind)
