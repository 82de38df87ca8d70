"""Operation modes, decoder methods and per-chunk drop reasons."""

from __future__ import annotations

import types
from enum import IntEnum


class OperationMode(IntEnum):
    """Selects which algorithm interprets incoming bytes.

    Values are persisted as integers, keep the numbering stable.

    - PROJECT_FILE: a JSON map describes the frame, fields come from a frame parser
    - DEVICE_SENDS_JSON: each chunk is a self-describing JSON frame
    - QUICK_PLOT: no map, each chunk is a comma separated list of values
    """

    PROJECT_FILE = 0
    DEVICE_SENDS_JSON = 1
    QUICK_PLOT = 2


class DecoderMethod(IntEnum):
    """How raw bytes are rendered to text before the frame parser sees them."""

    PLAIN_TEXT = 0
    HEXADECIMAL = 1
    BASE64 = 2


def to_operation_mode(value) -> OperationMode | None:
    """Coerce `value` (enum member, int or numeric string) to an OperationMode.

    Returns None for anything that isn't a known mode.
    """
    if isinstance(value, OperationMode):
        return value
    if isinstance(value, bool):
        return None
    try:
        return OperationMode(int(value))
    except (TypeError, ValueError):
        return None


def to_decoder_method(value) -> DecoderMethod | None:
    if isinstance(value, DecoderMethod):
        return value
    try:
        return DecoderMethod(int(value))
    except (TypeError, ValueError):
        return None


# ----------------
# Drop reasons
# ----------------
# Per-chunk conditions that suppress emission. These are never raised, only logged.

DROP_REASON = types.SimpleNamespace()
DROP_REASON.EMPTY_INPUT = "EMPTY_INPUT"
DROP_REASON.MISSING_FIELD_PARSER = "MISSING_FIELD_PARSER"
DROP_REASON.INVALID_FRAME = "INVALID_FRAME"
DROP_REASON.UNRECOGNIZED_MODE = "UNRECOGNIZED_MODE"
