"""View CLI commands.

Read-only commands printing the task list, the sidebar, the filter bar
and the editor form for a task.
"""

import json
from enum import Enum
from typing import Optional

import typer

from tasktree.application import FilterBarEvent, SelectEditingTaskEvent
from tasktree.domain.task import filter_title
from tasktree.interfaces.cli.common import FilterOption, StoreOption, TodayOption, parse_filter, print_info
from tasktree.interfaces.cli.render import render_editor, render_filter_bar, render_side_bar, render_task_list
from tasktree.interfaces.cli.session import Session

app = typer.Typer(help="View commands")


class SubtaskChoice(str, Enum):
    PAUSED = "paused"
    DONE = "done"
    READY = "ready"


def _open(
    store: str | None,
    today: str | None,
    filter_name: str | None,
    include: list[SubtaskChoice] | None = None,
    exclude: list[SubtaskChoice] | None = None,
) -> Session:
    session = Session(store, today)
    session.select_filter(parse_filter(filter_name) if filter_name else None)
    for choice in include or []:
        session.send(FilterBarEvent(id=choice.value, state="include"))
    for choice in exclude or []:
        session.send(FilterBarEvent(id=choice.value, state="exclude"))
    return session


@app.command("list")
def list_tasks(
    filter_name: FilterOption = None,
    include: Optional[list[SubtaskChoice]] = typer.Option(
        None, "--include", help="Only keep rows with this kind of subtask"
    ),
    exclude: Optional[list[SubtaskChoice]] = typer.Option(
        None, "--exclude", help="Drop rows that only hold this kind of subtask"
    ),
    as_json: bool = typer.Option(False, "--json", help="Print the task list view as JSON"),
    store: StoreOption = None,
    today: TodayOption = None,
) -> None:
    """Show the task list for a filter."""
    session = _open(store, today, filter_name, include, exclude)
    sections = session.view().task_list

    if as_json:
        typer.echo(json.dumps([section.model_dump(mode="json") for section in sections], indent=2))
        return

    print_info(filter_title(session.state.tasks, session.state.filter))
    render_task_list(sections)


@app.command("sidebar")
def sidebar(
    filter_name: FilterOption = None,
    store: StoreOption = None,
    today: TodayOption = None,
) -> None:
    """Show sidebar sections with their counters."""
    session = _open(store, today, filter_name)
    render_side_bar(session.view().side_bar)


@app.command("filter-bar")
def filter_bar(
    filter_name: FilterOption = None,
    include: Optional[list[SubtaskChoice]] = typer.Option(None, "--include"),
    exclude: Optional[list[SubtaskChoice]] = typer.Option(None, "--exclude"),
    store: StoreOption = None,
    today: TodayOption = None,
) -> None:
    """Show the filter bar entries that apply to a filter."""
    session = _open(store, today, filter_name, include, exclude)
    render_filter_bar(session.view().filter_bar)


@app.command("show")
def show(
    task_id: str = typer.Argument(..., help="Task id"),
    store: StoreOption = None,
    today: TodayOption = None,
) -> None:
    """Show the editor form for a task."""
    session = Session(store, today)
    session.require_task(task_id)
    session.send(SelectEditingTaskEvent(id=task_id))
    editor = session.view().editor
    if editor is not None:
        render_editor(editor)
