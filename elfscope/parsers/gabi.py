"""
ELF Generic ABI Constants
==========================

Immutable lookup tables for the values defined by the System V generic ABI:
ident layout, magic bytes, class and data encodings, OS/ABI identifiers,
object file types, machines, section and segment types, and symbol
type/binding/visibility codes.

The ``describe_*`` helpers turn a raw code into a readable name; codes that
are not in the table are rendered as hexadecimal rather than rejected.

References:
    - System V Application Binary Interface, Edition 4.1, chapter 4.
    - Linux man page: elf(5).
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping


# ---------------------------------------------------------------------------
# Ident layout
# ---------------------------------------------------------------------------

EI_NIDENT: int = 16

EI_CLASS: int = 4
EI_DATA: int = 5
EI_VERSION: int = 6
EI_OSABI: int = 7
EI_ABIVERSION: int = 8

ELFMAG0: int = 0x7F
ELFMAG1: int = ord("E")
ELFMAG2: int = ord("L")
ELFMAG3: int = ord("F")
ELFMAGIC: bytes = bytes((ELFMAG0, ELFMAG1, ELFMAG2, ELFMAG3))

EV_NONE: int = 0
EV_CURRENT: int = 1

# Class (address width)
ELFCLASSNONE: int = 0
ELFCLASS32: int = 1
ELFCLASS64: int = 2

# Data encoding (byte order)
ELFDATANONE: int = 0
ELFDATA2LSB: int = 1
ELFDATA2MSB: int = 2

# OS/ABI identification
ELFOSABI_NONE: int = 0
ELFOSABI_SYSV: int = 0
ELFOSABI_HPUX: int = 1
ELFOSABI_NETBSD: int = 2
ELFOSABI_LINUX: int = 3
ELFOSABI_SOLARIS: int = 6
ELFOSABI_AIX: int = 7
ELFOSABI_IRIX: int = 8
ELFOSABI_FREEBSD: int = 9
ELFOSABI_TRU64: int = 10
ELFOSABI_MODESTO: int = 11
ELFOSABI_OPENBSD: int = 12
ELFOSABI_OPENVMS: int = 13
ELFOSABI_NSK: int = 14
ELFOSABI_AROS: int = 15
ELFOSABI_FENIXOS: int = 16
ELFOSABI_CLOUDABI: int = 17
ELFOSABI_STANDALONE: int = 255

# Object file type
ET_NONE: int = 0
ET_REL: int = 1
ET_EXEC: int = 2
ET_DYN: int = 3
ET_CORE: int = 4

# Machines
EM_NONE: int = 0
EM_SPARC: int = 2
EM_386: int = 3
EM_68K: int = 4
EM_MIPS: int = 8
EM_PPC: int = 20
EM_PPC64: int = 21
EM_S390: int = 22
EM_ARM: int = 40
EM_SH: int = 42
EM_SPARCV9: int = 43
EM_IA_64: int = 50
EM_X86_64: int = 62
EM_AVR: int = 83
EM_MSP430: int = 105
EM_AARCH64: int = 183
EM_RISCV: int = 243
EM_BPF: int = 247
EM_LOONGARCH: int = 258

# Section header types
SHT_NULL: int = 0
SHT_PROGBITS: int = 1
SHT_SYMTAB: int = 2
SHT_STRTAB: int = 3
SHT_RELA: int = 4
SHT_HASH: int = 5
SHT_DYNAMIC: int = 6
SHT_NOTE: int = 7
SHT_NOBITS: int = 8
SHT_REL: int = 9
SHT_SHLIB: int = 10
SHT_DYNSYM: int = 11
SHT_INIT_ARRAY: int = 14
SHT_FINI_ARRAY: int = 15
SHT_PREINIT_ARRAY: int = 16
SHT_GROUP: int = 17
SHT_SYMTAB_SHNDX: int = 18
SHT_GNU_HASH: int = 0x6FFFFFF6
SHT_GNU_VERDEF: int = 0x6FFFFFFD
SHT_GNU_VERNEED: int = 0x6FFFFFFE
SHT_GNU_VERSYM: int = 0x6FFFFFFF

# Section header flags
SHF_WRITE: int = 0x1
SHF_ALLOC: int = 0x2
SHF_EXECINSTR: int = 0x4

# Special section indices
SHN_UNDEF: int = 0
SHN_ABS: int = 0xFFF1
SHN_COMMON: int = 0xFFF2

# Program header types
PT_NULL: int = 0
PT_LOAD: int = 1
PT_DYNAMIC: int = 2
PT_INTERP: int = 3
PT_NOTE: int = 4
PT_SHLIB: int = 5
PT_PHDR: int = 6
PT_TLS: int = 7
PT_GNU_EH_FRAME: int = 0x6474E550
PT_GNU_STACK: int = 0x6474E551
PT_GNU_RELRO: int = 0x6474E552

# Program header flags
PF_X: int = 0x1
PF_W: int = 0x2
PF_R: int = 0x4

# Symbol types
STT_NOTYPE: int = 0
STT_OBJECT: int = 1
STT_FUNC: int = 2
STT_SECTION: int = 3
STT_FILE: int = 4
STT_COMMON: int = 5
STT_TLS: int = 6
STT_GNU_IFUNC: int = 10

# Symbol binding
STB_LOCAL: int = 0
STB_GLOBAL: int = 1
STB_WEAK: int = 2
STB_GNU_UNIQUE: int = 10

# Symbol visibility
STV_DEFAULT: int = 0
STV_INTERNAL: int = 1
STV_HIDDEN: int = 2
STV_PROTECTED: int = 3

# Record sizes
ELF32_SYM_SIZE: int = 16
ELF64_SYM_SIZE: int = 24


# ---------------------------------------------------------------------------
# Name tables
# ---------------------------------------------------------------------------

CLASS_NAMES: Mapping[int, str] = MappingProxyType({
    ELFCLASSNONE: "NONE",
    ELFCLASS32: "ELF32",
    ELFCLASS64: "ELF64",
})

DATA_NAMES: Mapping[int, str] = MappingProxyType({
    ELFDATANONE: "NONE",
    ELFDATA2LSB: "2's complement, little endian",
    ELFDATA2MSB: "2's complement, big endian",
})

OSABI_NAMES: Mapping[int, str] = MappingProxyType({
    ELFOSABI_SYSV: "UNIX - System V",
    ELFOSABI_HPUX: "UNIX - HP-UX",
    ELFOSABI_NETBSD: "UNIX - NetBSD",
    ELFOSABI_LINUX: "UNIX - GNU/Linux",
    ELFOSABI_SOLARIS: "UNIX - Solaris",
    ELFOSABI_AIX: "UNIX - AIX",
    ELFOSABI_IRIX: "UNIX - IRIX",
    ELFOSABI_FREEBSD: "UNIX - FreeBSD",
    ELFOSABI_TRU64: "UNIX - TRU64",
    ELFOSABI_MODESTO: "Novell - Modesto",
    ELFOSABI_OPENBSD: "UNIX - OpenBSD",
    ELFOSABI_OPENVMS: "VMS - OpenVMS",
    ELFOSABI_NSK: "HP - Non-Stop Kernel",
    ELFOSABI_AROS: "AROS",
    ELFOSABI_FENIXOS: "FenixOS",
    ELFOSABI_CLOUDABI: "Nuxi CloudABI",
    ELFOSABI_STANDALONE: "Standalone App",
})

ET_NAMES: Mapping[int, str] = MappingProxyType({
    ET_NONE: "NONE (No file type)",
    ET_REL: "REL (Relocatable file)",
    ET_EXEC: "EXEC (Executable file)",
    ET_DYN: "DYN (Shared object file)",
    ET_CORE: "CORE (Core file)",
})

EM_NAMES: Mapping[int, str] = MappingProxyType({
    EM_NONE: "None",
    EM_SPARC: "SPARC",
    EM_386: "Intel 80386",
    EM_68K: "Motorola 68000",
    EM_MIPS: "MIPS R3000",
    EM_PPC: "PowerPC",
    EM_PPC64: "PowerPC64",
    EM_S390: "IBM S/390",
    EM_ARM: "ARM",
    EM_SH: "Renesas / SuperH SH",
    EM_SPARCV9: "SPARC v9 64-bit",
    EM_IA_64: "Intel IA-64",
    EM_X86_64: "Advanced Micro Devices X86-64",
    EM_AVR: "Atmel AVR 8-bit microcontroller",
    EM_MSP430: "Texas Instruments msp430 microcontroller",
    EM_AARCH64: "AArch64",
    EM_RISCV: "RISC-V",
    EM_BPF: "Linux BPF",
    EM_LOONGARCH: "LoongArch",
})

SHT_NAMES: Mapping[int, str] = MappingProxyType({
    SHT_NULL: "NULL",
    SHT_PROGBITS: "PROGBITS",
    SHT_SYMTAB: "SYMTAB",
    SHT_STRTAB: "STRTAB",
    SHT_RELA: "RELA",
    SHT_HASH: "HASH",
    SHT_DYNAMIC: "DYNAMIC",
    SHT_NOTE: "NOTE",
    SHT_NOBITS: "NOBITS",
    SHT_REL: "REL",
    SHT_SHLIB: "SHLIB",
    SHT_DYNSYM: "DYNSYM",
    SHT_INIT_ARRAY: "INIT_ARRAY",
    SHT_FINI_ARRAY: "FINI_ARRAY",
    SHT_PREINIT_ARRAY: "PREINIT_ARRAY",
    SHT_GROUP: "GROUP",
    SHT_SYMTAB_SHNDX: "SYMTAB_SHNDX",
    SHT_GNU_HASH: "GNU_HASH",
    SHT_GNU_VERDEF: "VERDEF",
    SHT_GNU_VERNEED: "VERNEED",
    SHT_GNU_VERSYM: "VERSYM",
})

PT_NAMES: Mapping[int, str] = MappingProxyType({
    PT_NULL: "NULL",
    PT_LOAD: "LOAD",
    PT_DYNAMIC: "DYNAMIC",
    PT_INTERP: "INTERP",
    PT_NOTE: "NOTE",
    PT_SHLIB: "SHLIB",
    PT_PHDR: "PHDR",
    PT_TLS: "TLS",
    PT_GNU_EH_FRAME: "GNU_EH_FRAME",
    PT_GNU_STACK: "GNU_STACK",
    PT_GNU_RELRO: "GNU_RELRO",
})

STT_NAMES: Mapping[int, str] = MappingProxyType({
    STT_NOTYPE: "NOTYPE",
    STT_OBJECT: "OBJECT",
    STT_FUNC: "FUNC",
    STT_SECTION: "SECTION",
    STT_FILE: "FILE",
    STT_COMMON: "COMMON",
    STT_TLS: "TLS",
    STT_GNU_IFUNC: "IFUNC",
})

STB_NAMES: Mapping[int, str] = MappingProxyType({
    STB_LOCAL: "LOCAL",
    STB_GLOBAL: "GLOBAL",
    STB_WEAK: "WEAK",
    STB_GNU_UNIQUE: "UNIQUE",
})

STV_NAMES: Mapping[int, str] = MappingProxyType({
    STV_DEFAULT: "DEFAULT",
    STV_INTERNAL: "INTERNAL",
    STV_HIDDEN: "HIDDEN",
    STV_PROTECTED: "PROTECTED",
})


# ---------------------------------------------------------------------------
# Describe helpers
# ---------------------------------------------------------------------------

def _lookup(table: Mapping[int, str], code: int) -> str:
    return table.get(code, f"0x{code:x}")


def describe_class(code: int) -> str:
    return _lookup(CLASS_NAMES, code)


def describe_data(code: int) -> str:
    return _lookup(DATA_NAMES, code)


def describe_osabi(code: int) -> str:
    return _lookup(OSABI_NAMES, code)


def describe_type(code: int) -> str:
    return _lookup(ET_NAMES, code)


def describe_machine(code: int) -> str:
    return _lookup(EM_NAMES, code)


def describe_section_type(code: int) -> str:
    return _lookup(SHT_NAMES, code)


def describe_segment_type(code: int) -> str:
    return _lookup(PT_NAMES, code)


def describe_symbol_type(code: int) -> str:
    return _lookup(STT_NAMES, code)


def describe_symbol_bind(code: int) -> str:
    return _lookup(STB_NAMES, code)


def describe_symbol_vis(code: int) -> str:
    return _lookup(STV_NAMES, code)


def describe_shndx(shndx: int) -> str:
    """Render a symbol's section index the way ``readelf -s`` does."""
    if shndx == SHN_UNDEF:
        return "UND"
    if shndx == SHN_ABS:
        return "ABS"
    if shndx == SHN_COMMON:
        return "COM"
    return str(shndx)


def section_flags_str(flags: int) -> str:
    """Convert a section flags bitmask to a string like ``"WAX"``."""
    parts: list[str] = []
    if flags & SHF_WRITE:
        parts.append("W")
    if flags & SHF_ALLOC:
        parts.append("A")
    if flags & SHF_EXECINSTR:
        parts.append("X")
    return "".join(parts) if parts else "-"


def segment_flags_str(flags: int) -> str:
    """Convert program header flags to a string like ``"RWX"``."""
    parts: list[str] = []
    if flags & PF_R:
        parts.append("R")
    if flags & PF_W:
        parts.append("W")
    if flags & PF_X:
        parts.append("X")
    return "".join(parts) if parts else "-"
