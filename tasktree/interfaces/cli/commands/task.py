"""Task CLI commands.

Commands that change tasks: adding, checking, editing and moving them.
Each command sends the same events the graphical interface would.
"""

from typing import Optional

import typer

from tasktree.application import (
    CheckEvent,
    DragTaskEvent,
    DropEvent,
    EditorEvent,
    HoverEvent,
    SelectEditingTaskEvent,
    TextFieldEdit,
    TextFieldSubmit,
    parse_date_input,
)
from tasktree.application.editor import ComponentId, EditorProperty
from tasktree.domain.forest import ListInsertLocation
from tasktree.domain.shared import Err
from tasktree.domain.task import (
    DropTargetHandle,
    DropTargetView,
    FilterDropId,
    ListDropId,
    SectionFilter,
    TaskKind,
    TaskStatus,
)
from tasktree.interfaces.cli.common import (
    FilterOption,
    StoreOption,
    TodayOption,
    format_filter,
    parse_filter,
    print_error,
    print_success,
    print_warning,
)
from tasktree.interfaces.cli.render import render_editor
from tasktree.interfaces.cli.session import Session

app = typer.Typer(help="Task commands")


@app.command("add")
def add(
    title: str = typer.Argument(..., help="Title of the new task"),
    filter_name: FilterOption = None,
    store: StoreOption = None,
    today: TodayOption = None,
) -> None:
    """Add a task to the selected filter."""
    session = Session(store, today)
    session.select_filter(parse_filter(filter_name) if filter_name else None)

    before = set(session.state.tasks.data)
    session.send(TextFieldEdit(field="addTitle", value=title))
    session.send(TextFieldSubmit(field="addTitle"))

    added = next(h for h in session.state.tasks.data if h not in before)
    print_success(f"Added {added}: {title}")


@app.command("check")
def check(
    task_id: str = typer.Argument(..., help="Task id"),
    store: StoreOption = None,
    today: TodayOption = None,
) -> None:
    """Toggle a task between done and active."""
    session = Session(store, today)
    session.require_task(task_id)
    session.send(CheckEvent(id=task_id))

    if session.state.tasks.data[task_id].status == TaskStatus.DONE:
        print_success(f"Completed {task_id}")
    else:
        print_success(f"Reopened {task_id}")


def _check_date(name: str, value: str | None) -> None:
    if value is not None and isinstance(parse_date_input(value), Err):
        raise typer.BadParameter(f"Expected YYYY-MM-DD or an empty string, got {value!r}", param_hint=f"--{name}")


@app.command("edit")
def edit(
    task_id: str = typer.Argument(..., help="Task id"),
    title: Optional[str] = typer.Option(None, "--title", help="New title"),
    status: Optional[TaskStatus] = typer.Option(None, "--status", help="New status"),
    kind: Optional[TaskKind] = typer.Option(None, "--type", help="Task or project"),
    actionable: Optional[bool] = typer.Option(
        None, "--actionable/--not-actionable", help="Whether the task is a next action"
    ),
    planned: Optional[str] = typer.Option(None, "--planned", help="Planned date, '' to clear"),
    wait: Optional[str] = typer.Option(None, "--wait", help="Wait until date, '' to clear"),
    due: Optional[str] = typer.Option(None, "--due", help="Due date, '' to clear"),
    store: StoreOption = None,
    today: TodayOption = None,
) -> None:
    """Edit task properties; without options, show them."""
    for name, value in (("planned", planned), ("wait", wait), ("due", due)):
        _check_date(name, value)

    session = Session(store, today)
    session.require_task(task_id)
    session.send(SelectEditingTaskEvent(id=task_id))

    values: list[tuple[EditorProperty, str | None]] = [
        ("title", title),
        ("status", status.value if status else None),
        ("kind", kind.value if kind else None),
        ("actionable", None if actionable is None else ("yes" if actionable else "no")),
        ("planned", planned),
        ("wait", wait),
        ("due", due),
    ]
    for prop, value in values:
        if value is not None:
            session.send(EditorEvent(component=ComponentId(task_id=task_id, property=prop), value=value))

    editor = session.view().editor
    if editor is not None:
        render_editor(editor)


@app.command("move")
def move(
    task_id: str = typer.Argument(..., help="Task id"),
    after: Optional[str] = typer.Option(
        None, "--after", "-a", help="Task to follow in the displayed list; omit to move to the top"
    ),
    indent: int = typer.Option(0, "--indent", "-i", help="Indentation in the displayed list"),
    filter_name: FilterOption = None,
    store: StoreOption = None,
    today: TodayOption = None,
) -> None:
    """Drag a task to a position of the list shown for a filter."""
    session = Session(store, today)
    session.require_task(task_id)
    session.select_filter(parse_filter(filter_name) if filter_name else None)
    if isinstance(session.state.filter, SectionFilter):
        print_error("Pick one of the section's filters to move within")
        raise typer.Exit(1)

    target = DropTargetHandle(
        location=ListInsertLocation(previous_sibling=after, indentation=indent),
        filter=session.state.filter,
    )

    session.send(DragTaskEvent(id=task_id))
    valid = [
        row.handle
        for section in session.view().task_list
        for row in section.rows
        if isinstance(row, DropTargetView)
    ]
    if target not in valid:
        session.send(DropEvent())
        print_error(
            f"Cannot drop {task_id} after {after or 'the start'} at indentation {indent} "
            f"in {format_filter(target.filter)}"
        )
        raise typer.Exit(1)

    session.send(HoverEvent(target=ListDropId(target=target)))
    session.send(DropEvent())
    print_success(f"Moved {task_id}")


@app.command("to-filter")
def to_filter(
    task_id: str = typer.Argument(..., help="Task id"),
    filter_name: str = typer.Argument(..., metavar="FILTER", help="Filter to drop the task on"),
    store: StoreOption = None,
    today: TodayOption = None,
) -> None:
    """Drop a task on a sidebar filter."""
    filter_id = parse_filter(filter_name)
    session = Session(store, today)
    session.require_task(task_id)

    before = session.state.tasks
    session.send(DragTaskEvent(id=task_id))
    session.send(HoverEvent(target=FilterDropId(id=filter_id)))
    session.send(DropEvent())

    if session.state.tasks == before:
        print_warning(f"{task_id} is already in {format_filter(filter_id)}")
    else:
        print_success(f"Moved {task_id} to {format_filter(filter_id)}")
