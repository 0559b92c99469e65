"""CLI command groups for tasktree.

This package contains individual command groups that are registered
with the main Typer app. Each module provides a set of related commands.

Command groups:
- task: Changing tasks (add, check, edit, move, to-filter)
- view: Read-only views (list, sidebar, filter-bar, show)
- storage: File export and import (save, load)

Each command group is a Typer app that gets registered
with the main app using app.add_typer().
"""

from tasktree.interfaces.cli.commands import storage, task, view

__all__ = ["task", "view", "storage"]
