"""CLI interface for tasktree using Typer.

This module provides the command-line interface for tasktree, an
outliner-style task manager.

Usage:
    tasktree add "Write report"     # Add a task to the ready list
    tasktree list -f today          # Show what is planned for today
    tasktree check a1b2c3d4         # Mark a task done
    tasktree sidebar                # Show filters and counters

The CLI is structured as:
- app: Main Typer application
- commands/: Individual command groups (task, view, storage)
- common.py: Shared options and output helpers
- session.py: Loads state and feeds events to the reducer
- render.py: Rich rendering of views
- main.py: Entry point that runs the app
"""

import logging
from pathlib import Path
from typing import Optional

import typer
from pydantic import ValidationError

from tasktree import __version__
from tasktree.application import parse_event
from tasktree.interfaces.cli.commands import storage, task, view
from tasktree.interfaces.cli.common import FilterOption, StoreOption, TodayOption, print_error, print_success
from tasktree.interfaces.cli.session import Session

# Create the main Typer application
app = typer.Typer(
    name="tasktree",
    help="Outliner-style task manager",
    add_completion=False,
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"tasktree version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        "-V",
        help="Show version and exit",
        callback=version_callback,
        is_eager=True,
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log what the application does"),
) -> None:
    """tasktree - Outliner-style task manager.

    Organize tasks and projects in a tree, plan them, and let the ready,
    stalled and today lists tell you what to do next.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


# =============================================================================
# Register Command Groups
# =============================================================================

app.add_typer(task.app, name="task")
app.add_typer(view.app, name="view")
app.add_typer(storage.app, name="storage")


# =============================================================================
# Top-Level Shortcuts for Common Commands
# =============================================================================


@app.command("list")
def list_tasks(
    filter_name: FilterOption = None,
    as_json: bool = typer.Option(False, "--json", help="Print the task list view as JSON"),
    store: StoreOption = None,
    today: TodayOption = None,
) -> None:
    """Show the task list (shortcut for 'view list')."""
    view.list_tasks(filter_name=filter_name, include=None, exclude=None, as_json=as_json, store=store, today=today)


@app.command("sidebar")
def sidebar(filter_name: FilterOption = None, store: StoreOption = None, today: TodayOption = None) -> None:
    """Show the sidebar (shortcut for 'view sidebar')."""
    view.sidebar(filter_name=filter_name, store=store, today=today)


@app.command("add")
def add(
    title: str = typer.Argument(..., help="Title of the new task"),
    filter_name: FilterOption = None,
    store: StoreOption = None,
    today: TodayOption = None,
) -> None:
    """Add a task (shortcut for 'task add')."""
    task.add(title=title, filter_name=filter_name, store=store, today=today)


@app.command("check")
def check(
    task_id: str = typer.Argument(..., help="Task id"),
    store: StoreOption = None,
    today: TodayOption = None,
) -> None:
    """Toggle done (shortcut for 'task check')."""
    task.check(task_id=task_id, store=store, today=today)


@app.command("to-filter")
def to_filter(
    task_id: str = typer.Argument(..., help="Task id"),
    filter_name: str = typer.Argument(..., metavar="FILTER", help="Filter to drop the task on"),
    store: StoreOption = None,
    today: TodayOption = None,
) -> None:
    """Drop a task on a filter (shortcut for 'task to-filter')."""
    task.to_filter(task_id=task_id, filter_name=filter_name, store=store, today=today)


@app.command("save")
def save(
    out: Optional[Path] = typer.Option(None, "--out", "-o", help="Directory to save into (default: current)"),
    store: StoreOption = None,
    today: TodayOption = None,
) -> None:
    """Save tasks to a file (shortcut for 'storage save')."""
    storage.save(out=out, store=store, today=today)


@app.command("load")
def load(
    path: Path = typer.Argument(..., help="Task file to load"),
    store: StoreOption = None,
    today: TodayOption = None,
) -> None:
    """Load tasks from a file (shortcut for 'storage load')."""
    storage.load(path=path, store=store, today=today)


# `edit` and `move` take many options; register the group commands directly.
app.command("edit")(task.edit)
app.command("move")(task.move)


@app.command("event")
def event(
    raw: str = typer.Argument(..., help='Event as JSON, e.g. \'{"tag": "check", "id": "a1b2c3d4"}\''),
    store: StoreOption = None,
    today: TodayOption = None,
) -> None:
    """Send one raw event to the application."""
    try:
        parsed = parse_event(raw)
    except ValidationError as e:
        print_error(f"Invalid event: {e}")
        raise typer.Exit(1) from None

    session = Session(store, today)
    session.send(parsed)
    print_success(f"Handled {parsed.tag} event")


__all__ = ["app"]
