"""Storage infrastructure for tasktree.

Provides file persistence for the task forest, using Result monads for
explicit error handling.
"""

from tasktree.infrastructure.storage.json_storage import JsonStorage
from tasktree.infrastructure.storage.repositories import TaskRepository

__all__ = [
    "JsonStorage",
    "TaskRepository",
]
