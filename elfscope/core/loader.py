"""
ELF File Loader
================

Builds an :class:`ElfFile` from a seekable binary stream in one forward
pass.  The pipeline is a fixed sequence of phases, each depending on the
data produced by the one before it:

    1. ``VALIDATE_IDENT``          -- magic and ident version
    2. ``DECODE_HEADER``           -- file header (class/byte-order aware)
    3. ``DECODE_SEGMENTS``         -- program header table at ``e_phoff``
    4. ``DECODE_SECTION_HEADERS``  -- section header table at ``e_shoff``
    5. ``LOAD_SECTION_CONTENT``    -- section bytes (skipped for NOBITS)
    6. ``RESOLVE_SECTION_NAMES``   -- names from the table at ``e_shstrndx``
    7. ``READY``

The first error aborts the load.  It is tagged with the phase it occurred
in (``error.phase``) and re-raised; no partially built file is returned.

Class and data bytes are not validated, and declared counts, offsets and
sizes are not checked against the stream length up front.  Malformed input
fails at the read that runs off the end of the stream.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, BinaryIO, Callable, Optional, TypeVar

from pydantic import BaseModel, ConfigDict

from elfscope.shared.config import ScopeConfig
from elfscope.shared.logger import ScopeLogger

from elfscope.core.errors import ElfParseError, IoFailure, OutOfRange
from elfscope.core.models import (
    FileHeader,
    LoadPhase,
    ProgramHeader,
    Section,
    SectionHeader,
    Symbol,
)
from elfscope.parsers import gabi
from elfscope.parsers.content import load_section_data
from elfscope.parsers.header import parse_file_header
from elfscope.parsers.ident import parse_ident
from elfscope.parsers.strtab import get_string
from elfscope.parsers.symbols import parse_symbols
from elfscope.parsers.tables import read_program_headers, read_section_headers

_T = TypeVar("_T")


# ---------------------------------------------------------------------------
# ElfFile
# ---------------------------------------------------------------------------

class ElfFile(BaseModel):
    """A fully decoded, immutable ELF file.

    Usage::

        elf = ElfFile.open_path("/bin/true")
        symtab = elf.get_section(".symtab")
        if symtab is not None:
            for sym in elf.get_symbols(symtab):
                print(sym.name, hex(sym.value))
    """
    model_config = ConfigDict(frozen=True)

    header: FileHeader
    segments: tuple[ProgramHeader, ...] = ()
    sections: tuple[Section, ...] = ()

    # ------------------------------------------------------------------ #
    #  Construction
    # ------------------------------------------------------------------ #

    @classmethod
    def open_path(
        cls,
        path: str | Path,
        *,
        config: ScopeConfig | None = None,
        logger: ScopeLogger | None = None,
    ) -> ElfFile:
        """Open *path* and decode it.

        Raises:
            IoFailure: The file cannot be opened.
            ElfParseError: Any decode failure (see :meth:`ElfLoader.load`).
        """
        try:
            fh = open(path, "rb")
        except OSError as exc:
            raise IoFailure(f"Cannot open {path}: {exc}") from exc
        with fh:
            return cls.open_stream(fh, config=config, logger=logger)

    @classmethod
    def open_stream(
        cls,
        stream: BinaryIO,
        *,
        config: ScopeConfig | None = None,
        logger: ScopeLogger | None = None,
    ) -> ElfFile:
        """Decode an ELF file from a seekable binary stream."""
        return ElfLoader(config=config, logger=logger).load(stream)

    # ------------------------------------------------------------------ #
    #  Queries
    # ------------------------------------------------------------------ #

    def get_section(self, name: str) -> Optional[Section]:
        """Return the first section named exactly *name*, or ``None``."""
        for section in self.sections:
            if section.name == name:
                return section
        return None

    def section_index(self, name: str) -> Optional[int]:
        """Return the table index of the first section named *name*."""
        for idx, section in enumerate(self.sections):
            if section.name == name:
                return idx
        return None

    def symbol_tables(self) -> list[Section]:
        """Return the ``SHT_SYMTAB`` and ``SHT_DYNSYM`` sections in table order."""
        return [s for s in self.sections if s.is_symbol_table]

    def get_symbols(self, section: Section) -> list[Symbol]:
        """Decode the symbols held in *section*.

        Sections that are not symbol tables yield an empty list.  Nothing
        is cached; every call decodes the section content again.

        Raises:
            OutOfRange: ``sh_link`` does not name a section of this file,
                or a name offset lies outside the linked string table.
            TruncatedInput: The content does not end on a whole record.
            TextDecodeFailure: A symbol name is not valid UTF-8.
        """
        if not section.is_symbol_table:
            return []

        link = section.header.sh_link
        if link >= len(self.sections):
            raise OutOfRange(
                f"Section '{section.name}' links to section {link}, "
                f"but the file has {len(self.sections)} sections"
            )
        strtab = self.sections[link].data
        return parse_symbols(
            section.data, strtab, self.header.elf_class, self.header.endianness
        )


# ---------------------------------------------------------------------------
# ElfLoader
# ---------------------------------------------------------------------------

class ElfLoader:
    """Runs the decode pipeline and assembles an :class:`ElfFile`.

    Args:
        config: Decoder settings; defaults are used if not provided.
        logger: Logger instance; if not provided, records go to the
            ``elfscope.loader`` logger as the caller configured it.
    """

    def __init__(
        self,
        config: ScopeConfig | None = None,
        logger: ScopeLogger | None = None,
    ) -> None:
        self._config: ScopeConfig = config or ScopeConfig()
        self._logger: ScopeLogger = logger or ScopeLogger.quiet("loader")
        self._phase: LoadPhase = LoadPhase.VALIDATE_IDENT

    @property
    def phase(self) -> LoadPhase:
        """The phase the most recent :meth:`load` reached."""
        return self._phase

    def load(self, stream: BinaryIO) -> ElfFile:
        """Decode *stream* into an :class:`ElfFile`.

        Raises:
            ElfParseError: The first failure in pipeline order, with
                ``phase`` set to the phase that raised it.
        """
        with self._logger.timed("ELF load"):
            self._enter(LoadPhase.VALIDATE_IDENT)
            ident = self._run(parse_ident, stream)

            self._enter(LoadPhase.DECODE_HEADER)
            header = self._run(parse_file_header, stream, ident)
            self._logger.debug(
                "class=%s data=%s type=%s machine=%s phnum=%d shnum=%d",
                gabi.describe_class(header.elf_class),
                gabi.describe_data(header.endianness),
                gabi.describe_type(header.elftype),
                gabi.describe_machine(header.arch),
                header.e_phnum,
                header.e_shnum,
            )

            self._enter(LoadPhase.DECODE_SEGMENTS)
            segments = self._run(read_program_headers, stream, header)

            self._enter(LoadPhase.DECODE_SECTION_HEADERS)
            shdrs = self._run(read_section_headers, stream, header)

            self._enter(LoadPhase.LOAD_SECTION_CONTENT)
            contents = self._run(self._load_contents, stream, shdrs)

            self._enter(LoadPhase.RESOLVE_SECTION_NAMES)
            names = self._run(self._resolve_names, header, shdrs, contents)

            sections = tuple(
                Section(name=name, header=shdr, data=data)
                for name, shdr, data in zip(names, shdrs, contents)
            )
            self._enter(LoadPhase.READY)

        self._logger.info(
            "Loaded ELF: %d segments, %d sections", len(segments), len(sections)
        )
        return ElfFile(header=header, segments=segments, sections=sections)

    # ------------------------------------------------------------------ #
    #  Phases
    # ------------------------------------------------------------------ #

    def _enter(self, phase: LoadPhase) -> None:
        self._phase = phase
        with self._logger.phase(phase.value):
            self._logger.debug("Entering phase %s", phase.value)

    def _run(self, step: Callable[..., _T], *args: Any) -> _T:
        """Call *step* with the current phase bound to logs and errors."""
        with self._logger.phase(self._phase.value):
            try:
                return step(*args)
            except ElfParseError as exc:
                exc.phase = self._phase
                self._logger.debug("Phase %s failed: %s", self._phase.value, exc)
                raise

    def _load_contents(
        self, stream: BinaryIO, shdrs: tuple[SectionHeader, ...]
    ) -> list[bytes]:
        chunk_size = self._config.decoder.read_chunk_size
        return [load_section_data(stream, shdr, chunk_size) for shdr in shdrs]

    @staticmethod
    def _resolve_names(
        header: FileHeader,
        shdrs: tuple[SectionHeader, ...],
        contents: list[bytes],
    ) -> list[str]:
        if not shdrs:
            return []
        if header.e_shstrndx >= len(shdrs):
            raise OutOfRange(
                f"e_shstrndx {header.e_shstrndx} outside section table "
                f"of {len(shdrs)} entries"
            )
        shstrtab = contents[header.e_shstrndx]
        return [get_string(shstrtab, shdr.sh_name) for shdr in shdrs]
