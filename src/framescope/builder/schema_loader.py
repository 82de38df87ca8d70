"""Loading of JSON maps (project files).

The loader owns the active `FrameTemplate` slot, the path it came from and the
live project frame built from it. A load either installs a complete new template
or leaves the loader with no template at all, there is no half loaded state.
"""

from __future__ import annotations

import asyncio
import os
from typing import Callable, Optional

import simplejson as json
from loguru import logger

from framescope.types import (
    FileIOError,
    Frame,
    FrameTemplate,
    JsonParseError,
    MessageSinkProtocol,
    Notification,
    OperationMode,
    SchemaChanged,
    SchemaError,
    SchemaValidationError,
    TransportProtocol,
    ValidationError,
    parse_frame,
)
from framescope.util import JSON_MAP_LOCATION_KEY, Settings


class SchemaLoader:
    """Validates and installs JSON maps.

    Parameters
    ----------
    transport : TransportProtocol
        Receives the template's delimiters after a successful load, but only
        while in PROJECT_FILE mode.
    settings : Settings
        Stores the path of the last valid map under `json_map_location`.
    notif_queue : asyncio.Queue[Notification]
        Receives one `SchemaChanged` per load attempt.
    message_sink : MessageSinkProtocol
        Reports load failures to the user.
    operation_mode : Callable[[], OperationMode]
        Returns the current operation mode.
    """

    def __init__(
        self,
        transport: TransportProtocol,
        settings: Settings,
        notif_queue: asyncio.Queue[Notification],
        message_sink: MessageSinkProtocol,
        operation_mode: Callable[[], OperationMode],
    ):
        self.transport = transport
        self.settings = settings
        self.notif_queue = notif_queue
        self.message_sink = message_sink
        self._operation_mode = operation_mode

        self._template: Optional[FrameTemplate] = None
        self._path = ""
        self._frame = Frame()

    @property
    def template(self) -> Optional[FrameTemplate]:
        return self._template

    @property
    def frame(self) -> Frame:
        """The live project frame (updated in place by PROJECT_FILE decoding)."""
        return self._frame

    @property
    def json_map_filepath(self) -> str:
        return self._path

    @property
    def json_map_filename(self) -> str:
        return os.path.basename(self._path) if self._path else ""

    def load(self, path: str) -> None:
        """Open, validate and install the JSON map at `path`.

        An empty path is ignored. Any other call clears the current frame, and
        publishes exactly one `SchemaChanged` once the attempt is over.

        Raises
        ------
        FileIOError
            The file can't be read.
        JsonParseError
            The file isn't valid JSON.
        SchemaValidationError
            The JSON doesn't describe a frame.
        """
        if not path:
            return

        path = os.path.abspath(path)
        self._frame.clear()
        try:
            template = self._read_template(path)
        except SchemaError as e:
            self._reset()
            logger.error("Failed to load JSON map {}: {}", path, e)
            self.message_sink.show_message(e.title, str(e), critical=True)
            raise
        else:
            self._install(template)
        finally:
            self.notif_queue.put_nowait(
                SchemaChanged(
                    filepath=self.json_map_filepath,
                    filename=self.json_map_filename,
                    loaded=self._template is not None,
                )
            )

    def reload(self) -> None:
        """Load the current map again (no-op when none is loaded)."""
        self.load(self._path)

    def _read_template(self, path: str) -> FrameTemplate:
        try:
            with open(path, "rb") as f:
                data = f.read()
        except OSError as e:
            raise FileIOError(
                "Please check file permissions & location", path=path
            ) from e

        try:
            document = json.loads(data)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise JsonParseError(str(e), path=path) from e
        except RecursionError as e:
            raise JsonParseError("JSON document is nested too deeply", path=path) from e

        try:
            frame = parse_frame(document)
        except ValidationError as e:
            raise SchemaValidationError(str(e), path=path) from e

        return FrameTemplate.from_frame(frame, source_path=path)

    def _install(self, template: FrameTemplate) -> None:
        self._template = template
        self._path = template.source_path
        self._frame = template.build_frame()
        self.settings.set_value(JSON_MAP_LOCATION_KEY, self._path)
        logger.info(
            "Loaded JSON map {} ({} groups, {} datasets)",
            self.json_map_filename,
            self._frame.group_count(),
            self._frame.dataset_count(),
        )

        if self._operation_mode() == OperationMode.PROJECT_FILE:
            self.transport.set_finish_sequence(template.frame_end)
            self.transport.set_start_sequence(template.frame_start)

    def _reset(self) -> None:
        self._template = None
        self._path = ""
        self._frame.clear()
        self.settings.set_value(JSON_MAP_LOCATION_KEY, "")
