"""Rich rendering of application views."""

from rich.console import Console
from rich.table import Table
from rich.text import Text

from tasktree.application import DotIndicator, EditorView, FilterView, SideBarSection, TextIndicator
from tasktree.application.editor import PickerComponent
from tasktree.domain.task import (
    DropIndicatorView,
    DropTargetView,
    FilterBarView,
    TaskListSection,
    TaskView,
)
from tasktree.interfaces.cli.common import format_filter

COLORS: dict[str, str] = {
    "red": "red",
    "green": "green",
    "orange": "dark_orange",
    "grey": "grey50",
    "project": "magenta",
}

console = Console()


def _task_line(row: TaskView) -> Text:
    line = Text("  " * row.indentation)
    line.append("[x] " if row.done else "[ ] ")

    style = "dim" if row.paused or row.archived else ""
    if row.done:
        style += " strike"
    if row.project:
        style += " bold"
    line.append(row.title or "(untitled)", style=style.strip())

    for badge in row.badges:
        line.append(" ")
        line.append(f"[{badge.label}]", style=COLORS.get(badge.color, ""))
    line.append(f"  {row.id}", style="dim")
    return line


def render_task_list(sections: list[TaskListSection]) -> None:
    """Print task list sections, one line per row."""
    if not any(section.rows for section in sections):
        console.print("No tasks.", style="dim")
        return

    for section in sections:
        if section.title is not None:
            console.print(Text(section.title, style="bold underline"))
        for row in section.rows:
            if isinstance(row, TaskView):
                console.print(_task_line(row))
            elif isinstance(row, DropTargetView):
                after = row.handle.location.previous_sibling or "start"
                console.print(
                    Text(f"{'  ' * row.indentation}. drop after {after} at {row.indentation}", style="dim")
                )
            elif isinstance(row, DropIndicatorView):
                console.print(Text("  " * row.indentation + "-" * 20, style="blue"))


def _indicator(filter_view: FilterView) -> Text:
    indicator = filter_view.indicator
    if isinstance(indicator, TextIndicator):
        return Text(indicator.text, style=COLORS.get(indicator.color, ""))
    if isinstance(indicator, DotIndicator):
        return Text("*", style=COLORS["orange"])
    return Text("")


def render_side_bar(sections: list[SideBarSection]) -> None:
    """Print each sidebar section as a table."""
    for section in sections:
        table = Table(title=section.title, title_justify="left", show_header=False, box=None)
        table.add_column("selected", width=1)
        table.add_column("label")
        table.add_column("indicator", justify="right")
        table.add_column("filter", style="dim")
        for entry in section.filters:
            table.add_row(
                ">" if entry.selected else "",
                entry.label,
                _indicator(entry),
                format_filter(entry.filter),
            )
        console.print(table)


def render_filter_bar(filter_bar: FilterBarView) -> None:
    if not filter_bar.filters:
        console.print("No filter bar entries apply.", style="dim")
        return
    table = Table(show_header=True, box=None)
    table.add_column("id")
    table.add_column("label")
    table.add_column("state")
    for entry in filter_bar.filters:
        table.add_row(entry.id, entry.label, entry.state)
    console.print(table)


def render_editor(editor: EditorView) -> None:
    """Print the editor form as a property table."""
    table = Table(show_header=False, box=None)
    table.add_column("property", style="bold")
    table.add_column("value")
    for groups in editor.sections:
        for group in groups:
            for component in group.components:
                if isinstance(component, PickerComponent):
                    value = " / ".join(
                        f"[{option.label}]" if option.active else option.label for option in component.options
                    )
                else:
                    value = component.value or "-"
                table.add_row(group.title, Text(value))
    console.print(table)
