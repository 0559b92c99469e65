"""Infrastructure layer for tasktree.

This module provides the I/O side of the application: file persistence of
the task forest and the platform that executes reducer effects, both
returning Result monads for explicit error handling.

Exports:
    Storage:
        - JsonStorage: Low-level text and JSON file I/O
        - TaskRepository: Task forest persistence

    Platform:
        - Platform: Effect executor
"""

from tasktree.infrastructure.platform import Platform
from tasktree.infrastructure.storage import JsonStorage, TaskRepository

__all__ = [
    # Storage
    "JsonStorage",
    "TaskRepository",
    # Platform
    "Platform",
]
