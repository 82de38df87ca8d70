"""Raw bytes -> field list, for PROJECT_FILE mode."""

from __future__ import annotations

import base64

from loguru import logger

from framescope.types import DecoderMethod, FrameParserProtocol


def decode_text(data: bytes, method: DecoderMethod | int) -> str:
    """Render a raw frame as text according to the project's decoder method.

    Parameters
    ----------
    data : bytes
        One raw frame, delimiters already removed by the transport.
    method : DecoderMethod | int
        PLAIN_TEXT interprets the bytes as UTF-8 (invalid sequences are replaced),
        HEXADECIMAL and BASE64 render the bytes in that form. Anything else falls
        back to plain text.

    Returns
    -------
    str
        Text handed to the frame parser.
    """
    match method:
        case DecoderMethod.PLAIN_TEXT:
            return data.decode("utf-8", errors="replace")
        case DecoderMethod.HEXADECIMAL:
            return data.hex()
        case DecoderMethod.BASE64:
            return base64.b64encode(data).decode("ascii")
        case _:
            logger.trace("Unknown decoder method {}, using plain text", method)
            return data.decode("utf-8", errors="replace")


def split_recorded(data: bytes) -> list[str]:
    """Split a replayed (CSV) row into fields.

    Whitespace is simplified (trimmed, inner runs collapsed to one space) before
    splitting on commas.
    """
    text = " ".join(data.decode("utf-8", errors="replace").split())
    return text.split(",")


def get_fields(
    data: bytes,
    method: DecoderMethod | int,
    frame_parser: FrameParserProtocol,
    replaying: bool = False,
) -> list[str]:
    # recorded values are already comma separated text, skip decoding and parser
    if replaying:
        return split_recorded(data)
    return list(frame_parser.parse(decode_text(data, method)))
