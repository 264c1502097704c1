"""
elfscope Output
================

Console tables and JSON reports for decoded ELF files.
"""

from elfscope.output.console import ElfConsoleOutput
from elfscope.output.report import ElfReportGenerator

__all__ = ["ElfConsoleOutput", "ElfReportGenerator"]
