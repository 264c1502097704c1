"""
Symbol Table Decoder
=====================

Decodes ``SHT_SYMTAB`` / ``SHT_DYNSYM`` records.  The two classes store the
same fields in a different physical order::

    Elf32_Sym (16 bytes)       Elf64_Sym (24 bytes)
    st_name   4                st_name   4
    st_value  4                st_info   1
    st_size   4                st_other  1
    st_info   1                st_shndx  2
    st_other  1                st_value  8
    st_shndx  2                st_size   8

``st_info`` packs the binding (high nibble) and type (low nibble);
visibility is the low two bits of ``st_other``.
"""

from __future__ import annotations

import io
from typing import BinaryIO

from elfscope.core.errors import TruncatedInput
from elfscope.core.models import Symbol
from elfscope.parsers import gabi
from elfscope.parsers.primitives import read_u8, read_u16, read_u32, read_u64
from elfscope.parsers.strtab import get_string


def symbol_size(elf_class: int) -> int:
    """Size in bytes of one symbol record for *elf_class*."""
    if elf_class == gabi.ELFCLASS32:
        return gabi.ELF32_SYM_SIZE
    return gabi.ELF64_SYM_SIZE


def parse_symbol(
    stream: BinaryIO, strtab: bytes, elf_class: int, endian: int
) -> Symbol:
    """Decode one symbol record and resolve its name in *strtab*."""
    if elf_class == gabi.ELFCLASS32:
        name = read_u32(stream, endian)
        value = read_u32(stream, endian)
        size = read_u32(stream, endian)
        info = read_u8(stream)
        other = read_u8(stream)
        shndx = read_u16(stream, endian)
    else:
        name = read_u32(stream, endian)
        info = read_u8(stream)
        other = read_u8(stream)
        shndx = read_u16(stream, endian)
        value = read_u64(stream, endian)
        size = read_u64(stream, endian)

    return Symbol(
        name=get_string(strtab, name),
        value=value,
        size=size,
        shndx=shndx,
        symtype=info & 0xF,
        bind=info >> 4,
        vis=other & 0x3,
    )


def parse_symbols(
    data: bytes, strtab: bytes, elf_class: int, endian: int
) -> list[Symbol]:
    """Decode every record in a symbol table's content.

    Raises:
        TruncatedInput: *data* does not end on a whole record.
        OutOfRange / TextDecodeFailure: A name cannot be resolved.
    """
    record_size = symbol_size(elf_class)
    stream = io.BytesIO(data)
    symbols: list[Symbol] = []
    while stream.tell() < len(data):
        remaining = len(data) - stream.tell()
        if remaining < record_size:
            raise TruncatedInput(record_size, remaining)
        symbols.append(parse_symbol(stream, strtab, elf_class, endian))
    return symbols
