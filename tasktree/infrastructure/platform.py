"""Effect executor.

Performs the effects the reducer describes against the local file system:
downloads become files in an export directory, uploads read a file chosen
up front, and local storage is the task repository.
"""

import logging
from collections.abc import Iterable
from pathlib import Path

from tasktree.application import Effect, FileDownload, FileUpload, LoadFile, SaveLocalStorage
from tasktree.domain.shared import Err, Ok, Result
from tasktree.infrastructure.storage import JsonStorage, TaskRepository

logger = logging.getLogger(__name__)


class Platform:
    """Executes effects and reports the events they produce."""

    def __init__(
        self,
        repository: TaskRepository,
        export_dir: Path,
        upload_file: Path | None = None,
        storage: JsonStorage | None = None,
    ) -> None:
        """Initialize the platform.

        Args:
            repository: Where ``SaveLocalStorage`` writes.
            export_dir: Directory receiving ``FileDownload`` files.
            upload_file: File returned for ``FileUpload``; uploads are
                cancelled when not set.
            storage: JsonStorage instance to use. Creates new one if not provided.
        """
        self.repository = repository
        self.export_dir = export_dir
        self.upload_file = upload_file
        self._storage = storage or JsonStorage()

    def execute(self, effect: Effect) -> Result[list[LoadFile], str]:
        """Perform one effect.

        Returns:
            Ok(events) with the events the effect produced (a ``LoadFile``
            for a completed upload), Err(str) if the effect failed.
        """
        if isinstance(effect, FileDownload):
            target = self.export_dir / effect.name
            logger.info(f"Exporting tasks to {target}")
            result = self._storage.write_text(target, effect.contents)
            return result if isinstance(result, Err) else Ok([])

        if isinstance(effect, FileUpload):
            if self.upload_file is None:
                logger.debug("No file to upload, upload cancelled")
                return Ok([])
            contents = self._storage.read_text(self.upload_file)
            if isinstance(contents, Err):
                return contents
            return Ok([LoadFile(name=self.upload_file.name, contents=contents.value)])

        if isinstance(effect, SaveLocalStorage):
            result = self.repository.save_string(effect.value)
            return result if isinstance(result, Err) else Ok([])

        return Err(f"Unknown effect: {effect!r}")

    def execute_all(self, effects: Iterable[Effect]) -> Result[list[LoadFile], str]:
        """Perform effects in order, stopping at the first failure."""
        events: list[LoadFile] = []
        for effect in effects:
            result = self.execute(effect)
            if isinstance(result, Err):
                logger.error(f"Effect {effect.type} failed: {result.error}")
                return result
            events.extend(result.value)
        return Ok(events)
