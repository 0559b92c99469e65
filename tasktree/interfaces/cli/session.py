"""A CLI session: state loaded from the store, events fed to the reducer.

Each command builds a session, sends the events that correspond to what a
user would do in the interface, and lets the platform perform the
resulting effects.
"""

import logging
from datetime import date
from pathlib import Path

import typer

from tasktree.application import AppState, Event, SelectFilterEvent, View, dispatch, view
from tasktree.domain.shared import Err
from tasktree.domain.task import FilterId
from tasktree.global_config import AppConfig, get_global_config, get_store_file
from tasktree.infrastructure import Platform, TaskRepository
from tasktree.interfaces.cli.common import parse_today, print_error

logger = logging.getLogger(__name__)


class Session:
    """Application state plus the platform that persists it."""

    def __init__(
        self,
        store: str | None = None,
        today: str | None = None,
        export_dir: Path | None = None,
        config: AppConfig | None = None,
    ) -> None:
        self.config = config or get_global_config()
        self.today: date = parse_today(today)

        store_file = Path(store) if store else get_store_file(self.config)
        self.repository = TaskRepository(store_file)
        self.platform = Platform(self.repository, export_dir=export_dir or Path.cwd())

        loaded = self.repository.load()
        if isinstance(loaded, Err):
            print_error(loaded.error)
            raise typer.Exit(1)
        self.state = AppState(tasks=loaded.value, filter=self.config.default_filter)

    def send(self, event: Event) -> AppState:
        """Dispatch an event and perform its effects.

        Events produced by effects (a completed upload) are dispatched in
        turn.

        Raises:
            typer.Exit: If an effect fails.
        """
        self.state, effects = dispatch(self.state, event, self.today, self.config.export_name)
        result = self.platform.execute_all(effects)
        if isinstance(result, Err):
            print_error(result.error)
            raise typer.Exit(1)
        for follow_up in result.value:
            self.send(follow_up)
        return self.state

    def select_filter(self, filter_id: FilterId | None) -> None:
        if filter_id is not None:
            self.send(SelectFilterEvent(filter=filter_id))

    def require_task(self, task_id: str) -> None:
        """Exit with an error unless the task exists."""
        if task_id not in self.state.tasks:
            print_error(f"No task with id {task_id}")
            raise typer.Exit(1)

    def view(self) -> View:
        return view(self.state, self.today)
