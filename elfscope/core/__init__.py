"""
elfscope Core Module
=====================

Contains the loader, the data models and the exception hierarchy.
"""

from elfscope.core.errors import (
    BadMagic,
    ElfParseError,
    IoFailure,
    OutOfRange,
    TextDecodeFailure,
    TruncatedInput,
    UnsupportedVersion,
)
from elfscope.core.loader import ElfFile, ElfLoader
from elfscope.core.models import (
    FileHeader,
    LoadPhase,
    ProgramHeader,
    Section,
    SectionHeader,
    Symbol,
)

__all__ = [
    "BadMagic",
    "ElfFile",
    "ElfLoader",
    "ElfParseError",
    "FileHeader",
    "IoFailure",
    "LoadPhase",
    "OutOfRange",
    "ProgramHeader",
    "Section",
    "SectionHeader",
    "Symbol",
    "TextDecodeFailure",
    "TruncatedInput",
    "UnsupportedVersion",
]
