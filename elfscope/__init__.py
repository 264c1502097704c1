"""
elfscope -- ELF Object File Decoder
====================================

Decodes ELF object files (executables, shared objects, relocatable objects
and core files, 32- or 64-bit, either byte order) into immutable Python
models: the file header, the program header table, and the named sections
with their content.  Symbols are decoded on demand from symbol-table
sections.

Usage::

    from elfscope import ElfFile

    elf = ElfFile.open_path("a.out")
    text = elf.get_section(".text")
    for table in elf.symbol_tables():
        for sym in elf.get_symbols(table):
            print(sym.name)

References:
    - System V Application Binary Interface, Edition 4.1.
    - TIS Committee. (1995). ELF Specification, Version 1.2.
"""

from elfscope.core import (
    BadMagic,
    ElfFile,
    ElfLoader,
    ElfParseError,
    IoFailure,
    LoadPhase,
    OutOfRange,
    Section,
    Symbol,
    TextDecodeFailure,
    TruncatedInput,
    UnsupportedVersion,
)

__version__ = "0.1.0"
__all__ = [
    "BadMagic",
    "ElfFile",
    "ElfLoader",
    "ElfParseError",
    "IoFailure",
    "LoadPhase",
    "OutOfRange",
    "Section",
    "Symbol",
    "TextDecodeFailure",
    "TruncatedInput",
    "UnsupportedVersion",
]
