"""Simple frame parsers.

Projects normally bring their own parser, these cover plain delimited data and
wrapping an existing function.
"""

from __future__ import annotations

from typing import Callable


class SeparatorFrameParser:
    """Splits frame text on a fixed separator."""

    def __init__(self, separator: str = ",", strip: bool = True):
        if not separator:
            raise ValueError("Separator must not be empty")
        self.separator = separator
        self.strip = strip

    def parse(self, text: str) -> list[str]:
        fields = text.split(self.separator)
        if self.strip:
            fields = [f.strip() for f in fields]
        return fields

    def __repr__(self):
        return f"SeparatorFrameParser(separator={self.separator!r})"


class FunctionFrameParser:
    """Adapts a plain `text -> list[str]` callable to the parser protocol."""

    def __init__(self, func: Callable[[str], list[str]]):
        self.func = func

    def parse(self, text: str) -> list[str]:
        return [str(f) for f in self.func(text)]
