"""Storage CLI commands: exporting tasks to a file and loading them back."""

from pathlib import Path
from typing import Optional

import typer

from tasktree.application import ClickLoadButton, ClickSaveButton
from tasktree.domain.shared import Err
from tasktree.domain.task import load_string
from tasktree.infrastructure import JsonStorage
from tasktree.interfaces.cli.common import StoreOption, TodayOption, print_error, print_success
from tasktree.interfaces.cli.session import Session

app = typer.Typer(help="Save and load task files")


@app.command("save")
def save(
    out: Optional[Path] = typer.Option(None, "--out", "-o", help="Directory to save into (default: current)"),
    store: StoreOption = None,
    today: TodayOption = None,
) -> None:
    """Save all tasks to a file for download."""
    session = Session(store, today, export_dir=out)
    session.send(ClickSaveButton())
    print_success(f"Saved tasks to {session.platform.export_dir / session.config.export_name}")


@app.command("load")
def load(
    path: Path = typer.Argument(..., help="Task file to load"),
    store: StoreOption = None,
    today: TodayOption = None,
) -> None:
    """Replace all tasks with the contents of a file."""
    contents = JsonStorage().read_text(path)
    if isinstance(contents, Err):
        print_error(contents.error)
        raise typer.Exit(1)
    parsed = load_string(contents.value)
    if isinstance(parsed, Err):
        print_error(f"Cannot load {path}: {parsed.error}")
        raise typer.Exit(1)

    session = Session(store, today)
    session.platform.upload_file = path
    session.send(ClickLoadButton())
    print_success(f"Loaded {len(session.state.tasks)} tasks from {path}")
