"""
elfscope Report Generator
==========================

Serialises a decoded :class:`ElfFile` to JSON.  Section content is not
embedded; each section reports how many bytes were loaded instead.
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from elfscope.core.loader import ElfFile
from elfscope.core.models import SectionSummary, SymbolTableSummary
from elfscope.parsers import gabi


class ElfReportGenerator:
    """Build JSON reports for decoded ELF files.

    Usage::

        gen = ElfReportGenerator()
        data = gen.build(elf, source="a.out")
        gen.generate_json(elf, "report.json", source="a.out")
    """

    def build(
        self,
        elf: ElfFile,
        *,
        source: str = "",
        include_symbols: bool = True,
    ) -> dict[str, Any]:
        """Return the report as a JSON-compatible dictionary."""
        header = elf.header
        report: dict[str, Any] = {
            "generated_at": datetime.now(timezone.utc).isoformat(),
            "source": source,
            "header": {
                **header.model_dump(mode="json"),
                "class_name": gabi.describe_class(header.elf_class),
                "data_name": gabi.describe_data(header.endianness),
                "osabi_name": gabi.describe_osabi(header.osabi),
                "type_name": gabi.describe_type(header.elftype),
                "machine_name": gabi.describe_machine(header.arch),
            },
            "segments": [
                {
                    **ph.model_dump(mode="json"),
                    "type_name": gabi.describe_segment_type(ph.p_type),
                    "flags_str": gabi.segment_flags_str(ph.p_flags),
                }
                for ph in elf.segments
            ],
            "sections": [
                SectionSummary(
                    index=idx,
                    name=section.name,
                    type=gabi.describe_section_type(section.header.sh_type),
                    flags=gabi.section_flags_str(section.header.sh_flags),
                    addr=section.header.sh_addr,
                    offset=section.header.sh_offset,
                    size=section.header.sh_size,
                    link=section.header.sh_link,
                    loaded_bytes=len(section.data),
                ).model_dump(mode="json")
                for idx, section in enumerate(elf.sections)
            ],
        }

        if include_symbols:
            report["symbol_tables"] = [
                SymbolTableSummary(
                    section=table.name,
                    symbols=elf.get_symbols(table),
                ).model_dump(mode="json")
                for table in elf.symbol_tables()
            ]

        return report

    def generate_json(
        self,
        elf: ElfFile,
        output_path: str | Path,
        *,
        source: str = "",
        include_symbols: bool = True,
    ) -> Path:
        """Write the JSON report to *output_path* and return the path."""
        path = Path(output_path)
        path.parent.mkdir(parents=True, exist_ok=True)
        data = self.build(elf, source=source, include_symbols=include_symbols)
        path.write_text(json.dumps(data, indent=2, default=str), encoding="utf-8")
        return path
