"""Repository for the persisted task forest."""

import logging
from pathlib import Path

from tasktree.domain.forest import empty
from tasktree.domain.shared import Ok, Result, flat_map
from tasktree.domain.task import Tasks, load_string, save_string
from tasktree.infrastructure.storage.json_storage import JsonStorage

logger = logging.getLogger(__name__)


class TaskRepository:
    """Task forest persistence in a single JSON file.

    This file plays the part of the browser's local storage: the
    application saves into it after every change and reads it on start.
    """

    def __init__(self, store_file: Path, storage: JsonStorage | None = None) -> None:
        """Initialize the repository.

        Args:
            store_file: File holding the serialized forest.
            storage: JsonStorage instance to use. Creates new one if not provided.
        """
        self.store_file = store_file
        self._storage = storage or JsonStorage()

    def exists(self) -> bool:
        return self.store_file.exists()

    def load(self) -> Result[Tasks, str]:
        """Load the task forest.

        Returns:
            Ok(Tasks) if successful (an empty forest when nothing has been
            saved yet), Err(str) if the file cannot be read or parsed.
        """
        if not self.exists():
            logger.debug(f"No task store at {self.store_file}, starting empty")
            return Ok(empty())
        return flat_map(self._storage.read_text(self.store_file), load_string)

    def save(self, tasks: Tasks) -> Result[None, str]:
        """Serialize and save the task forest."""
        return self.save_string(save_string(tasks))

    def save_string(self, contents: str) -> Result[None, str]:
        """Save an already serialized forest."""
        logger.debug(f"Saving tasks to {self.store_file}")
        return self._storage.write_text(self.store_file, contents)
