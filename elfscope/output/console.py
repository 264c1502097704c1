"""
elfscope Console Output
========================

Rich-powered terminal display of a decoded :class:`ElfFile`, laid out
after ``readelf``: file header, program headers, section headers and one
table per symbol table.
"""

from __future__ import annotations

from elfscope.shared.config import DisplayConfig
from elfscope.shared.console import ScopeConsole

from elfscope.core.loader import ElfFile
from elfscope.core.models import FileHeader, ProgramHeader, Section, Symbol
from elfscope.parsers import gabi


def _hex(value: int, width: int) -> str:
    return f"0x{value:0{width}x}"


class ElfConsoleOutput:
    """Render decoded ELF structures through a :class:`ScopeConsole`.

    Usage::

        output = ElfConsoleOutput(console=ScopeConsole())
        output.display(elf)
    """

    def __init__(
        self,
        console: ScopeConsole | None = None,
        display: DisplayConfig | None = None,
    ) -> None:
        self._console = console or ScopeConsole()
        self._display = display or DisplayConfig()

    def display(self, elf: ElfFile, *, symbols_for: str | None = None) -> None:
        """Render *elf*.

        Args:
            elf: The decoded file.
            symbols_for: Only render symbols of the section with this name.
                ``None`` renders every symbol table when symbols are enabled.
        """
        self.show_header(elf.header)
        if self._display.show_segments:
            self.show_segments(elf.header, elf.segments)
        if self._display.show_sections:
            self.show_sections(elf)

        if symbols_for is not None:
            section = elf.get_section(symbols_for)
            if section is None:
                self._console.warning(f"No section named {symbols_for}")
            else:
                self.show_symbols(section, elf.get_symbols(section))
        elif self._display.show_symbols:
            for table in elf.symbol_tables():
                self.show_symbols(table, elf.get_symbols(table))

    # ------------------------------------------------------------------ #
    #  Individual tables
    # ------------------------------------------------------------------ #

    def show_header(self, header: FileHeader) -> None:
        width = 16 if header.is_64bit else 8
        rows = [
            ("Class", gabi.describe_class(header.elf_class)),
            ("Data", gabi.describe_data(header.endianness)),
            ("Version", str(header.version)),
            ("OS/ABI", gabi.describe_osabi(header.osabi)),
            ("ABI Version", str(header.abiversion)),
            ("Type", gabi.describe_type(header.elftype)),
            ("Machine", gabi.describe_machine(header.arch)),
            ("Entry point address", _hex(header.e_entry, width)),
            ("Start of program headers", f"{header.e_phoff} (bytes into file)"),
            ("Start of section headers", f"{header.e_shoff} (bytes into file)"),
            ("Flags", _hex(header.e_flags, 1)),
            ("Size of this header", f"{header.e_ehsize} (bytes)"),
            ("Size of program headers", f"{header.e_phentsize} (bytes)"),
            ("Number of program headers", str(header.e_phnum)),
            ("Size of section headers", f"{header.e_shentsize} (bytes)"),
            ("Number of section headers", str(header.e_shnum)),
            ("Section header string table index", str(header.e_shstrndx)),
        ]
        self._console.section("ELF Header")
        self._console.table(
            "ELF Header", ["Field", "Value"], rows,
            styles=["bold", "bright_white"],
        )

    def show_segments(
        self, header: FileHeader, segments: tuple[ProgramHeader, ...]
    ) -> None:
        width = 16 if header.is_64bit else 8
        rows = [
            (
                gabi.describe_segment_type(ph.p_type),
                _hex(ph.p_offset, 6),
                _hex(ph.p_vaddr, width),
                _hex(ph.p_paddr, width),
                _hex(ph.p_filesz, 6),
                _hex(ph.p_memsz, 6),
                gabi.segment_flags_str(ph.p_flags),
                _hex(ph.p_align, 1),
            )
            for ph in segments
        ]
        self._console.section("Program Headers")
        if not rows:
            self._console.info("There are no program headers in this file.")
            return
        self._console.table(
            "Program Headers",
            ["Type", "Offset", "VirtAddr", "PhysAddr", "FileSiz", "MemSiz", "Flg", "Align"],
            rows,
        )

    def show_sections(self, elf: ElfFile) -> None:
        width = 16 if elf.header.is_64bit else 8
        rows = [
            (
                idx,
                section.name,
                gabi.describe_section_type(section.header.sh_type),
                _hex(section.header.sh_addr, width),
                _hex(section.header.sh_offset, 6),
                _hex(section.header.sh_size, 6),
                gabi.section_flags_str(section.header.sh_flags),
                section.header.sh_link,
                len(section.data),
            )
            for idx, section in enumerate(elf.sections)
        ]
        self._console.section("Section Headers")
        if not rows:
            self._console.info("There are no sections in this file.")
            return
        self._console.table(
            "Section Headers",
            ["Nr", "Name", "Type", "Address", "Off", "Size", "Flg", "Lk", "Loaded"],
            rows,
            styles=["dim", "bold bright_white"],
        )

    def show_symbols(self, section: Section, symbols: list[Symbol]) -> None:
        limit = self._display.max_symbol_rows
        shown = symbols[:limit] if limit > 0 else symbols
        rows = [
            (
                num,
                _hex(sym.value, 16),
                sym.size,
                gabi.describe_symbol_type(sym.symtype),
                gabi.describe_symbol_bind(sym.bind),
                gabi.describe_symbol_vis(sym.vis),
                gabi.describe_shndx(sym.shndx),
                sym.name,
            )
            for num, sym in enumerate(shown)
        ]
        caption = None
        if len(shown) < len(symbols):
            caption = f"{len(symbols) - len(shown)} more symbols not shown"

        self._console.section(f"Symbol table '{section.name}'")
        self._console.table(
            f"Symbol table '{section.name}' contains {len(symbols)} entries",
            ["Num", "Value", "Size", "Type", "Bind", "Vis", "Ndx", "Name"],
            rows,
            caption=caption,
        )
