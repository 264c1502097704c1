"""
elfscope Console Interface
===========================

Rich-powered console abstraction used by the command-line interface.

Wraps :class:`rich.console.Console` and adds helpers for section headers,
status-coloured messages and tables, all with consistent styling.

References:
    - Rich library: https://github.com/Textualize/rich
"""

from __future__ import annotations

from typing import Any, Sequence

from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.theme import Theme

_SCOPE_THEME = Theme(
    {
        "scope.section": "bold bright_magenta",
        "scope.success": "bold green",
        "scope.warning": "bold yellow",
        "scope.error": "bold red",
        "scope.info": "bold bright_blue",
        "scope.dim": "dim white",
        "scope.highlight": "bold bright_white",
    }
)


class ScopeConsole:
    """Unified console interface for elfscope output.

    Usage::

        con = ScopeConsole()
        con.section("Section Headers")
        con.table("Sections", ["#", "Name"], rows)
        con.success("Loaded")
    """

    def __init__(
        self,
        *,
        quiet: bool = False,
        record: bool = False,
        width: int | None = None,
    ) -> None:
        """Initialise the console.

        Args:
            quiet:  Suppress all output (library / test mode).
            record: Enable Rich recording for text export.
            width:  Fixed console width; ``None`` lets Rich detect it.
        """
        self._console = Console(
            theme=_SCOPE_THEME,
            quiet=quiet,
            record=record,
            highlight=False,
            width=width,
        )

    @property
    def rich(self) -> Console:
        """Direct access to the underlying Rich Console instance."""
        return self._console

    # ------------------------------------------------------------------ #
    #  Section header
    # ------------------------------------------------------------------ #

    def section(self, title: str) -> None:
        """Print a prominent section header."""
        self._console.rule(
            f"  {escape(title)}  ",
            style="scope.section",
            characters="─",
        )
        self._console.print()

    # ------------------------------------------------------------------ #
    #  Message helpers
    # ------------------------------------------------------------------ #

    def success(self, message: str) -> None:
        self._console.print(
            f"[scope.success][✔] SUCCESS:[/scope.success] {escape(message)}"
        )

    def warning(self, message: str) -> None:
        self._console.print(
            f"[scope.warning][⚠] WARNING:[/scope.warning] {escape(message)}"
        )

    def error(self, message: str) -> None:
        self._console.print(
            f"[scope.error][✘] ERROR:[/scope.error] {escape(message)}"
        )

    def info(self, message: str) -> None:
        self._console.print(
            f"[scope.info][ℹ] INFO:[/scope.info] {escape(message)}"
        )

    # ------------------------------------------------------------------ #
    #  Table display
    # ------------------------------------------------------------------ #

    def table(
        self,
        title: str,
        columns: Sequence[str],
        rows: Sequence[Sequence[Any]],
        *,
        caption: str | None = None,
        styles: Sequence[str] | None = None,
    ) -> None:
        """Render a styled Rich table.

        Args:
            title:    Table title.
            columns:  Column header labels.
            rows:     Row tuples; each element is stringified.
            caption:  Optional footer caption.
            styles:   Optional per-column Rich style strings.
        """
        tbl = Table(
            title=escape(title),
            caption=escape(caption) if caption is not None else None,
            border_style="bright_cyan",
            header_style="bold bright_magenta",
            padding=(0, 1),
        )
        for idx, col_name in enumerate(columns):
            style = styles[idx] if styles and idx < len(styles) else ""
            tbl.add_column(col_name, style=style)

        for row in rows:
            tbl.add_row(*(escape(str(cell)) for cell in row))

        self._console.print(tbl)

    # ------------------------------------------------------------------ #
    #  Utility
    # ------------------------------------------------------------------ #

    def print(self, *args: Any, **kwargs: Any) -> None:
        """Proxy to :meth:`rich.console.Console.print`."""
        self._console.print(*args, **kwargs)

    def blank(self, count: int = 1) -> None:
        for _ in range(count):
            self._console.print()

    def export_text(self) -> str:
        """Export recorded console output as plain text (requires ``record=True``)."""
        return self._console.export_text()
