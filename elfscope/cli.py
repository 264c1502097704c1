"""
elfscope CLI
=============

Click-based command-line interface for decoding and displaying ELF files.

Usage::

    # Header, segments, sections and all symbol tables
    elfscope /path/to/binary

    # Only the symbols of one section
    elfscope /path/to/binary --section .dynsym

    # JSON to stdout, or to a file
    elfscope /path/to/binary --json
    elfscope /path/to/binary --output report.json

References:
    - Click documentation: https://click.palletsprojects.com/
"""

from __future__ import annotations

import json
import sys

import click

from elfscope.shared.config import ScopeConfig
from elfscope.shared.console import ScopeConsole
from elfscope.shared.logger import ScopeLogger

from elfscope.core.errors import ElfParseError
from elfscope.core.loader import ElfFile
from elfscope.output.console import ElfConsoleOutput
from elfscope.output.report import ElfReportGenerator


@click.command("elfscope")
@click.argument("path", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--symbols/--no-symbols",
    default=None,
    help="Show or hide symbol tables (default: from config).",
)
@click.option(
    "--section", "-s",
    "section_name",
    default=None,
    help="Only show the symbols of the section with this name.",
)
@click.option(
    "--json", "json_output",
    is_flag=True,
    default=False,
    help="Print the decoded file as JSON to stdout.",
)
@click.option(
    "--output", "-o",
    "output_path",
    type=click.Path(dir_okay=False),
    default=None,
    help="Write a JSON report to this path.",
)
@click.option(
    "--config", "-c",
    "config_path",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="TOML configuration file.",
)
@click.option(
    "--verbose", "-v",
    is_flag=True,
    default=False,
    help="Log every decode phase to stderr.",
)
def elfscope_cli(
    path: str,
    symbols: bool | None,
    section_name: str | None,
    json_output: bool,
    output_path: str | None,
    config_path: str | None,
    verbose: bool,
) -> None:
    """Decode an ELF object file and display its structure.

    PATH is the ELF file to decode.
    """
    console = ScopeConsole()
    try:
        config = ScopeConfig.load(config_path)
    except ValueError as exc:
        console.error(f"Invalid configuration {config_path}: {exc}")
        sys.exit(1)
    settings = config.global_settings

    log_level = "DEBUG" if verbose else settings.log_level
    logger = ScopeLogger(
        "loader",
        log_level=log_level,
        log_file=settings.log_file,
        json_logs=settings.log_json,
        console_output=verbose,
    )

    if symbols is not None:
        config.display.show_symbols = symbols

    try:
        elf = ElfFile.open_path(path, config=config, logger=logger)
    except ElfParseError as exc:
        phase = f" during {exc.phase.value}" if exc.phase is not None else ""
        console.error(f"Failed to decode {path}{phase}: {exc}")
        sys.exit(1)

    report_gen = ElfReportGenerator()
    try:
        if json_output:
            data = report_gen.build(
                elf, source=path, include_symbols=config.display.show_symbols
            )
            click.echo(json.dumps(data, indent=2, default=str))
        else:
            ElfConsoleOutput(console=console, display=config.display).display(
                elf, symbols_for=section_name
            )

        if output_path:
            report_path = report_gen.generate_json(
                elf, output_path, source=path,
                include_symbols=config.display.show_symbols,
            )
            if not json_output:
                console.success(f"JSON report saved: {report_path}")
    except ElfParseError as exc:
        console.error(f"Failed to decode symbols in {path}: {exc}")
        sys.exit(1)


def main() -> None:
    """Entry point for the ``elfscope`` console script."""
    elfscope_cli()


if __name__ == "__main__":
    main()
