"""Global configuration storage for tasktree.

Stores user preferences in ~/.tasktree/config.json. The directory can be
moved with the TASKTREE_HOME environment variable.
"""

import logging
import os
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ValidationError

from tasktree.domain.shared import Err
from tasktree.domain.task import FilterId
from tasktree.infrastructure.storage import JsonStorage

logger = logging.getLogger(__name__)

HOME_ENV_VAR = "TASKTREE_HOME"
STORE_FILE_NAME = "tasks.json"


class AppConfig(BaseModel):
    """User preferences.

    Attributes:
        store_file: Where the task forest is kept; defaults to tasks.json
            in the config directory.
        export_name: File name used when saving tasks for download.
        default_filter: Filter selected when the application starts.
    """

    store_file: Optional[Path] = None
    export_name: str = "tasks.json"
    default_filter: FilterId = "ready"


def get_config_dir() -> Path:
    """Get the tasktree config directory."""
    override = os.environ.get(HOME_ENV_VAR)
    config_dir = Path(override) if override else Path.home() / ".tasktree"
    config_dir.mkdir(parents=True, exist_ok=True)
    return config_dir


def get_global_config() -> AppConfig:
    """Load global configuration, falling back to defaults."""
    config_file = get_config_dir() / "config.json"
    if not config_file.exists():
        return AppConfig()

    result = JsonStorage().load_json(config_file)
    if isinstance(result, Err):
        logger.warning(f"Ignoring config: {result.error}")
        return AppConfig()
    try:
        return AppConfig.model_validate(result.value)
    except ValidationError as e:
        logger.warning(f"Ignoring invalid config in {config_file}: {e}")
        return AppConfig()


def save_global_config(config: AppConfig) -> None:
    """Save global configuration."""
    config_file = get_config_dir() / "config.json"
    result = JsonStorage().save_json(config_file, config.model_dump(mode="json"))
    if isinstance(result, Err):
        logger.error(f"Could not save config: {result.error}")


def get_store_file(config: AppConfig) -> Path:
    """The task store file configured, or the default one."""
    return config.store_file or get_config_dir() / STORE_FILE_NAME
