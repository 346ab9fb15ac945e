"""Result rendering."""

from asyncunit.report.console import ConsoleResultPainter, LiveResultPainter

__all__ = ["ConsoleResultPainter", "LiveResultPainter"]
