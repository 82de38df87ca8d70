"""Per-chunk decoding.

- `fields`: bytes -> text -> field list (PROJECT_FILE mode)
- `quickplot`: the schema-less quick plot layout
- `frame_decoder`: the mode dispatcher
- `parsers`: simple frame parsers
"""

from .fields import decode_text, get_fields, split_recorded
from .frame_decoder import FrameDecoder
from .parsers import FunctionFrameParser, SeparatorFrameParser
from .quickplot import synthesize

__all__ = [
    "FrameDecoder",
    "FunctionFrameParser",
    "SeparatorFrameParser",
    "decode_text",
    "get_fields",
    "split_recorded",
    "synthesize",
]
