"""
File Header Decoder
====================

Decodes the part of the ELF file header that follows the ident.  Field
widths depend on the class byte and byte order on the data byte, both
taken from the already-validated ident::

    e_type       2      e_flags      4
    e_machine    2      e_ehsize     2
    e_version    4      e_phentsize  2
    e_entry      4|8    e_phnum      2
    e_phoff      4|8    e_shentsize  2
    e_shoff      4|8    e_shnum      2
                        e_shstrndx   2

No field is checked against the stream length here; a bad offset or count
surfaces later as a failed seek or read.
"""

from __future__ import annotations

from typing import BinaryIO

from elfscope.core.models import FileHeader
from elfscope.parsers import gabi
from elfscope.parsers.primitives import read_addr, read_u16, read_u32


def parse_file_header(stream: BinaryIO, ident: bytes) -> FileHeader:
    """Decode the file header from *stream*, positioned just after the ident.

    Args:
        stream: Binary stream positioned at offset 16.
        ident: The 16 validated ident bytes.

    Raises:
        TruncatedInput: The stream ends before the header is complete.
    """
    elf_class = ident[gabi.EI_CLASS]
    endian = ident[gabi.EI_DATA]

    elftype = read_u16(stream, endian)
    arch = read_u16(stream, endian)
    version = read_u32(stream, endian)

    entry = read_addr(stream, elf_class, endian)
    phoff = read_addr(stream, elf_class, endian)
    shoff = read_addr(stream, elf_class, endian)

    flags = read_u32(stream, endian)
    ehsize = read_u16(stream, endian)
    phentsize = read_u16(stream, endian)
    phnum = read_u16(stream, endian)
    shentsize = read_u16(stream, endian)
    shnum = read_u16(stream, endian)
    shstrndx = read_u16(stream, endian)

    return FileHeader(
        elf_class=elf_class,
        endianness=endian,
        version=version,
        elftype=elftype,
        arch=arch,
        osabi=ident[gabi.EI_OSABI],
        abiversion=ident[gabi.EI_ABIVERSION],
        e_entry=entry,
        e_phoff=phoff,
        e_shoff=shoff,
        e_flags=flags,
        e_ehsize=ehsize,
        e_phentsize=phentsize,
        e_phnum=phnum,
        e_shentsize=shentsize,
        e_shnum=shnum,
        e_shstrndx=shstrndx,
    )
