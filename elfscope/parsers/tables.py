"""
Record Table Decoder
=====================

Decodes the program header and section header tables.  Both follow the
same pattern: seek once to the table offset named in the file header, then
decode ``count`` fixed-layout records back to back.

Program header layouts::

    Elf32_Phdr                 Elf64_Phdr
    p_type    4                p_type    4
    p_offset  4                p_flags   4
    p_vaddr   4                p_offset  8
    p_paddr   4                p_vaddr   8
    p_filesz  4                p_paddr   8
    p_memsz   4                p_filesz  8
    p_flags   4                p_memsz   8
    p_align   4                p_align   8

Section header layout (``*`` fields are 4 bytes in ELF32, 8 in ELF64)::

    sh_name 4, sh_type 4, sh_flags*, sh_addr*, sh_offset*, sh_size*,
    sh_link 4, sh_info 4, sh_addralign*, sh_entsize*

Records are decoded at the natural record size; ``e_phentsize`` and
``e_shentsize`` are not consulted.
"""

from __future__ import annotations

from typing import BinaryIO, Callable, TypeVar

from elfscope.core.models import FileHeader, ProgramHeader, SectionHeader
from elfscope.parsers import gabi
from elfscope.parsers.primitives import read_addr, read_u32, seek

_T = TypeVar("_T")


def read_table(
    stream: BinaryIO,
    offset: int,
    count: int,
    decode: Callable[[BinaryIO], _T],
) -> tuple[_T, ...]:
    """Seek to *offset* and decode *count* consecutive records.

    The result grows one record at a time, so an inflated *count* fails on
    the first short read rather than allocating up front.  Any failure
    aborts the whole table.
    """
    seek(stream, offset)
    records: list[_T] = []
    for _ in range(count):
        records.append(decode(stream))
    return tuple(records)


def parse_program_header(
    stream: BinaryIO, elf_class: int, endian: int
) -> ProgramHeader:
    """Decode one program header at the current stream position."""
    if elf_class == gabi.ELFCLASS32:
        p_type = read_u32(stream, endian)
        p_offset = read_u32(stream, endian)
        p_vaddr = read_u32(stream, endian)
        p_paddr = read_u32(stream, endian)
        p_filesz = read_u32(stream, endian)
        p_memsz = read_u32(stream, endian)
        p_flags = read_u32(stream, endian)
        p_align = read_u32(stream, endian)
    else:
        p_type = read_u32(stream, endian)
        p_flags = read_u32(stream, endian)
        p_offset = read_addr(stream, elf_class, endian)
        p_vaddr = read_addr(stream, elf_class, endian)
        p_paddr = read_addr(stream, elf_class, endian)
        p_filesz = read_addr(stream, elf_class, endian)
        p_memsz = read_addr(stream, elf_class, endian)
        p_align = read_addr(stream, elf_class, endian)

    return ProgramHeader(
        p_type=p_type,
        p_flags=p_flags,
        p_offset=p_offset,
        p_vaddr=p_vaddr,
        p_paddr=p_paddr,
        p_filesz=p_filesz,
        p_memsz=p_memsz,
        p_align=p_align,
    )


def parse_section_header(
    stream: BinaryIO, elf_class: int, endian: int
) -> SectionHeader:
    """Decode one section header at the current stream position."""
    return SectionHeader(
        sh_name=read_u32(stream, endian),
        sh_type=read_u32(stream, endian),
        sh_flags=read_addr(stream, elf_class, endian),
        sh_addr=read_addr(stream, elf_class, endian),
        sh_offset=read_addr(stream, elf_class, endian),
        sh_size=read_addr(stream, elf_class, endian),
        sh_link=read_u32(stream, endian),
        sh_info=read_u32(stream, endian),
        sh_addralign=read_addr(stream, elf_class, endian),
        sh_entsize=read_addr(stream, elf_class, endian),
    )


def read_program_headers(
    stream: BinaryIO, header: FileHeader
) -> tuple[ProgramHeader, ...]:
    """Decode the ``e_phnum`` program headers at ``e_phoff``."""
    return read_table(
        stream,
        header.e_phoff,
        header.e_phnum,
        lambda s: parse_program_header(s, header.elf_class, header.endianness),
    )


def read_section_headers(
    stream: BinaryIO, header: FileHeader
) -> tuple[SectionHeader, ...]:
    """Decode the ``e_shnum`` section headers at ``e_shoff``."""
    return read_table(
        stream,
        header.e_shoff,
        header.e_shnum,
        lambda s: parse_section_header(s, header.elf_class, header.endianness),
    )
