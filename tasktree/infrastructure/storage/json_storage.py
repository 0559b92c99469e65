"""File storage with Result-based error handling.

Provides a thin wrapper around file I/O for text and JSON documents,
returning Result types instead of raising exceptions.
"""

import json
from pathlib import Path
from typing import Any

from tasktree.domain.shared import Err, Ok, Result


class JsonStorage:
    """Low-level file I/O with Result-based error handling.

    This class only reads and writes files. Parsing task data is the
    business of the repositories built on top of it.

    Example:
        storage = JsonStorage()
        result = storage.load_json(Path("config.json"))
        if isinstance(result, Ok):
            data = result.value
        else:
            print(f"Error: {result.error}")
    """

    def read_text(self, path: Path) -> Result[str, str]:
        """Read a UTF-8 text file.

        Args:
            path: Path to the file to read.

        Returns:
            Ok(str) with the contents, Err(str) with error message if failed.
        """
        try:
            if not path.exists():
                return Err(f"File not found: {path}")
            return Ok(path.read_text(encoding="utf-8"))

        except PermissionError:
            return Err(f"Permission denied reading {path}")
        except OSError as e:
            return Err(f"Error reading {path}: {e}")

    def write_text(self, path: Path, content: str) -> Result[None, str]:
        """Write a UTF-8 text file, creating parent directories as needed.

        Args:
            path: Path to the file to write.
            content: Text to write.

        Returns:
            Ok(None) if successful, Err(str) with error message if failed.
        """
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content, encoding="utf-8")
            return Ok(None)

        except PermissionError:
            return Err(f"Permission denied writing {path}")
        except OSError as e:
            return Err(f"Error writing {path}: {e}")

    def load_json(self, path: Path) -> Result[Any, str]:
        """Load JSON data from a file.

        Args:
            path: Path to the JSON file to read.

        Returns:
            Ok(data) if successful, Err(str) with error message if failed.
        """
        result = self.read_text(path)
        if isinstance(result, Err):
            return result
        try:
            return Ok(json.loads(result.value))
        except json.JSONDecodeError as e:
            return Err(f"Invalid JSON in {path}: {e}")

    def save_json(self, path: Path, data: Any, indent: int = 2) -> Result[None, str]:
        """Save JSON data to a file.

        Args:
            path: Path to the JSON file to write.
            data: Value to serialize as JSON.
            indent: JSON indentation level (default 2).

        Returns:
            Ok(None) if successful, Err(str) with error message if failed.
        """
        try:
            content = json.dumps(data, indent=indent)
        except TypeError as e:
            return Err(f"Data not JSON serializable: {e}")
        return self.write_text(path, content)
