"""
elfscope Data Models
=====================

Pydantic models for the decoded structures of an ELF file.  All models are
frozen: once the loader has built them nothing can be reassigned, so a
loaded file can be shared between readers without locking.

Cross references between sections (the section-name string table, a symbol
table's linked string table) are kept as plain integer indices into the
owning file's section tuple and resolved at query time.

References:
    - System V Application Binary Interface, Edition 4.1, chapter 4.
    - Pydantic v2 documentation. https://docs.pydantic.dev/latest/
"""

from __future__ import annotations

import enum

from pydantic import BaseModel, ConfigDict, Field

from elfscope.parsers import gabi


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------

class LoadPhase(str, enum.Enum):
    """Strictly ordered stages of :class:`~elfscope.core.loader.ElfLoader`."""
    VALIDATE_IDENT = "validate_ident"
    DECODE_HEADER = "decode_header"
    DECODE_SEGMENTS = "decode_segments"
    DECODE_SECTION_HEADERS = "decode_section_headers"
    LOAD_SECTION_CONTENT = "load_section_content"
    RESOLVE_SECTION_NAMES = "resolve_section_names"
    READY = "ready"


# ---------------------------------------------------------------------------
# File header
# ---------------------------------------------------------------------------

class FileHeader(BaseModel):
    """The ELF file header, including the fields taken from the ident.

    ``elf_class`` and ``endianness`` hold the raw ident bytes.  Decoders
    read address fields as 4 bytes only when the class is ``ELFCLASS32``
    and little-endian only when the data byte is ``ELFDATA2LSB``; any other
    value falls through to the 64-bit / big-endian branch.

    Address-sized fields of 32-bit files are zero-extended.
    """
    model_config = ConfigDict(frozen=True)

    elf_class: int
    endianness: int
    version: int
    elftype: int
    arch: int
    osabi: int
    abiversion: int
    e_entry: int
    e_phoff: int
    e_shoff: int
    e_flags: int
    e_ehsize: int
    e_phentsize: int
    e_phnum: int
    e_shentsize: int
    e_shnum: int
    e_shstrndx: int

    @property
    def is_64bit(self) -> bool:
        return self.elf_class != gabi.ELFCLASS32

    @property
    def is_little_endian(self) -> bool:
        return self.endianness == gabi.ELFDATA2LSB


# ---------------------------------------------------------------------------
# Segments and sections
# ---------------------------------------------------------------------------

class ProgramHeader(BaseModel):
    """A program header (segment descriptor)."""
    model_config = ConfigDict(frozen=True)

    p_type: int
    p_flags: int
    p_offset: int
    p_vaddr: int
    p_paddr: int
    p_filesz: int
    p_memsz: int
    p_align: int


class SectionHeader(BaseModel):
    """A section header table entry.

    ``sh_name`` is an offset into the section-name string table (the
    section at ``e_shstrndx``), not into ``.strtab``.  ``sh_link`` is the
    index of an auxiliary section; for symbol tables it is the string table
    holding the symbol names.
    """
    model_config = ConfigDict(frozen=True)

    sh_name: int
    sh_type: int
    sh_flags: int
    sh_addr: int
    sh_offset: int
    sh_size: int
    sh_link: int
    sh_info: int
    sh_addralign: int
    sh_entsize: int


class Section(BaseModel):
    """A section header together with its resolved name and content.

    ``data`` is empty for ``SHT_NOBITS`` sections, whatever their declared
    size.
    """
    model_config = ConfigDict(frozen=True)

    name: str
    header: SectionHeader
    data: bytes = b""

    @property
    def sh_type(self) -> int:
        return self.header.sh_type

    @property
    def is_symbol_table(self) -> bool:
        return self.header.sh_type in (gabi.SHT_SYMTAB, gabi.SHT_DYNSYM)


# ---------------------------------------------------------------------------
# Symbols
# ---------------------------------------------------------------------------

class Symbol(BaseModel):
    """A decoded symbol table entry.

    Attributes:
        name: Name resolved through the symbol table's linked string table.
        value: Symbol value (usually an address).
        size: Size of the object the symbol refers to.
        shndx: Index of the section the symbol is defined in.
        symtype: Low four bits of ``st_info``.
        bind: High four bits of ``st_info``.
        vis: Low two bits of ``st_other``.
    """
    model_config = ConfigDict(frozen=True)

    name: str
    value: int
    size: int
    shndx: int
    symtype: int
    bind: int
    vis: int


# ---------------------------------------------------------------------------
# Serialisable summaries (report output)
# ---------------------------------------------------------------------------

class SectionSummary(BaseModel):
    """Section metadata without its content, for reports."""
    index: int
    name: str
    type: str
    flags: str
    addr: int
    offset: int
    size: int
    link: int
    loaded_bytes: int


class SymbolTableSummary(BaseModel):
    """All symbols of one symbol-table section, for reports."""
    section: str
    symbols: list[Symbol] = Field(default_factory=list)
