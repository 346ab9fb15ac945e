"""Terminal rendering of test results using rich."""

from typing import Optional

from rich.console import Console, Group
from rich.table import Table
from rich.text import Text

from asyncunit.core.engine import TestEngine
from asyncunit.core.results import AsyncSetUpState, TestDescription, TestResult
from asyncunit.core.selection import format_selector

STATE_STYLES = {
    AsyncSetUpState.SETTING_UP: "yellow",
    AsyncSetUpState.DONE: "green",
    AsyncSetUpState.FAILED: "red",
}


def describe_test(description: TestDescription) -> str:
    """Label a record as ``test()`` or ``test(parameter set: N)``."""
    if description.test_name is None:
        return "(async set up)"
    if description.parameter_set_index is None:
        return f"{description.test_name}()"
    return f"{description.test_name}(parameter set: {description.parameter_set_index})"


class ConsoleResultPainter:
    """Builds a rich renderable from a TestResult."""

    def render(self, result: TestResult) -> Group:
        heading = Text("Test Passed", style="bold green") if result.all_passed else Text("Test Failed", style="bold red")
        summary = Text.assemble(
            f"Total tests: {result.total}. ",
            ("Passed tests: ", ""),
            (str(len(result.passes)), "green"),
            ". Failed tests: ",
            (str(len(result.errors)), "red"),
            ".",
        )

        parts = [heading, summary]
        if result.errors:
            parts.append(self._records_table("Errors", result.errors, "red"))
        if result.passes:
            parts.append(self._records_table("Passing Tests", result.passes, "green"))
        if result.async_set_up:
            parts.append(self._async_set_up_table(result))
        parts.append(Text("Run all tests: clear the selector", style="dim"))
        return Group(*parts)

    def show(self, console: Console, result: TestResult) -> None:
        console.print(self.render(result))

    def _records_table(self, title: str, records: list[TestDescription], style: str) -> Table:
        table = Table(title=title, title_style=style)
        table.add_column("Group", style="cyan")
        table.add_column("Test")
        table.add_column("Message", style=style)
        table.add_column("Selector", style="dim")

        for record in records:
            table.add_row(
                record.group_name,
                describe_test(record),
                record.message,
                format_selector(record.group_name, record.test_name, record.parameter_set_index),
            )
        return table

    def _async_set_up_table(self, result: TestResult) -> Table:
        table = Table(title="Async set up")
        table.add_column("Group", style="cyan")
        table.add_column("State")
        table.add_column("Error")

        for group_name, info in result.async_set_up.items():
            state = Text(info.state.name, style=STATE_STYLES[info.state])
            table.add_row(group_name, state, info.error_message)
        return table


class LiveResultPainter:
    """Repaints the full result on every engine update."""

    def __init__(self, engine: TestEngine, console: Optional[Console] = None):
        self.engine = engine
        self.console = console or Console()
        self.painter = ConsoleResultPainter()
        engine.on_result_change = self._repaint

    def _repaint(self, result: TestResult) -> None:
        self.painter.show(self.console, result)
