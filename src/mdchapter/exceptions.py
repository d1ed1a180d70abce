"""Custom exceptions for mdchapter."""

from __future__ import annotations


class MdchapterError(Exception):
    """Base exception for mdchapter operations."""


class ParseError(MdchapterError):
    """Error during chapter parsing.

    Carries the 1-based line number and the 0-based character offset of the
    offending input.
    """

    def __init__(self, message: str, *, line: int, offset: int) -> None:
        super().__init__(f"{message} (line {line}, offset {offset})")
        self.message = message
        self.line = line
        self.offset = offset


class MalformedFence(ParseError):
    """Code fence is unterminated or nested inside another fence."""


class UnsupportedHeadingLevel(ParseError):
    """Heading marker run exceeds the supported depth."""


class OrphanBlock(ParseError):
    """Content appears before any heading while preamble is disallowed."""


class ConversionError(MdchapterError):
    """Error during format conversion."""
