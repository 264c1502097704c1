"""
elfscope Exceptions
====================

A single exception hierarchy for everything that can go wrong while
decoding an ELF file.  Stream errors (:class:`OSError`) and text decode
errors (:class:`UnicodeDecodeError`) raised by the standard library are
converted into these types at the point where they occur, so callers only
ever need to catch :class:`ElfParseError`.
"""

from __future__ import annotations

from typing import Optional

from elfscope.core.models import LoadPhase


class ElfParseError(Exception):
    """Base class for all decode failures.

    Attributes:
        phase: The loader phase that was running when the error was raised,
            or ``None`` when a parser was called directly.
    """

    def __init__(self, message: str, *, phase: Optional[LoadPhase] = None) -> None:
        super().__init__(message)
        self.phase: Optional[LoadPhase] = phase


class IoFailure(ElfParseError):
    """A read or seek on the underlying stream failed."""

    pass


class TruncatedInput(IoFailure):
    """The stream ended before a field or record was complete."""

    def __init__(self, expected: int, actual: int) -> None:
        super().__init__(
            f"Unexpected end of input: wanted {expected} bytes, got {actual}"
        )
        self.expected = expected
        self.actual = actual


class OutOfRange(IoFailure):
    """A section index, link or string offset points outside its table."""

    pass


class BadMagic(ElfParseError):
    """The first four bytes are not ``\\x7fELF``."""

    def __init__(self, actual: bytes) -> None:
        super().__init__(f"Invalid Magic Bytes: {actual!r}")
        self.actual = actual


class UnsupportedVersion(ElfParseError):
    """The ident version byte is not ``EV_CURRENT``."""

    def __init__(self, actual: int) -> None:
        super().__init__(f"Unsupported ELF Version: {actual}")
        self.actual = actual


class TextDecodeFailure(ElfParseError):
    """A string table entry is not valid UTF-8."""

    pass
