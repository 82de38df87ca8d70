"""
Frame model, notifications, protocols and errors.

The framescope.types package is the foundation the decoders and the builder sit
on:

1. Frame model
    - `Frame` -> `Group` -> `Dataset` dataclasses (mashumaro), which are also
      the JSON document shape of projects and device frames
    - `FrameTemplate`, the immutable result of loading a project

2. Modes
    - `OperationMode` selects the decoding algorithm
    - `DecoderMethod` selects how bytes become text for the frame parser

3. Notifications
    - `FrameChanged`, `SchemaChanged`, `ModeChanged`, published on an
      `asyncio.Queue`

4. Protocols
    - transport, frame parser, playback and message sink capabilities

Examples
--------
Reading a project document:
```python
from framescope.types import parse_frame
frame = parse_frame({"title": "T", "groups": [{"title": "G", "datasets": []}]})
```

Handling notifications:
```python
from framescope.types import FrameChanged
notif = notif_queue.get_nowait()
if isinstance(notif, FrameChanged):
    print(notif.frame.title)
```
"""

from __future__ import annotations

from .frame import UNSET_GROUP_ID, Dataset, Frame, Group
from .messages import (
    FrameChanged,
    ModeChanged,
    Notification,
    SchemaChanged,
)
from .modes import (
    DROP_REASON,
    DecoderMethod,
    OperationMode,
    to_decoder_method,
    to_operation_mode,
)
from .protocols import (
    FrameParserProtocol,
    MessageSinkProtocol,
    PlaybackProtocol,
    TransportProtocol,
)
from .template import FrameTemplate
from .validation import (
    ValidationError,
    parse_frame,
    validate_dataset,
    validate_frame,
    validate_group,
)


# Exceptions
class SchemaError(Exception):
    """Base exception for JSON map (schema) load failures.

    Carries the user facing `title`, the message text is the exception message.
    """

    title: str = "Schema error"

    def __init__(self, message: str = "", path: str = ""):
        super().__init__(message)
        self.path = path


class FileIOError(SchemaError):
    """Raised when the JSON map file can't be opened or read."""

    title = "Cannot read JSON file"


class JsonParseError(SchemaError):
    """Raised when the JSON map is not well formed JSON."""

    title = "JSON parse error"


class SchemaValidationError(SchemaError):
    """Raised when the JSON map parses but doesn't describe a frame."""

    title = "Invalid JSON project format"


__all__ = [
    "Dataset",
    "Group",
    "Frame",
    "FrameTemplate",
    "UNSET_GROUP_ID",
    "Notification",
    "FrameChanged",
    "SchemaChanged",
    "ModeChanged",
    "OperationMode",
    "DecoderMethod",
    "DROP_REASON",
    "to_operation_mode",
    "to_decoder_method",
    "TransportProtocol",
    "FrameParserProtocol",
    "PlaybackProtocol",
    "MessageSinkProtocol",
    "ValidationError",
    "parse_frame",
    "validate_frame",
    "validate_group",
    "validate_dataset",
    "SchemaError",
    "FileIOError",
    "JsonParseError",
    "SchemaValidationError",
]
