"""Tests for global configuration."""

from pathlib import Path

import pytest

from tasktree.domain.task import ProjectFilter
from tasktree.global_config import (
    HOME_ENV_VAR,
    AppConfig,
    get_config_dir,
    get_global_config,
    get_store_file,
    save_global_config,
)


@pytest.fixture
def home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    config_home = tmp_path / "home"
    monkeypatch.setenv(HOME_ENV_VAR, str(config_home))
    return config_home


class TestGlobalConfig:
    """Tests for loading and saving preferences."""

    def test_config_dir_override(self, home: Path) -> None:
        """Test that the environment variable moves the config directory."""
        assert get_config_dir() == home
        assert home.is_dir()

    def test_defaults_without_file(self, home: Path) -> None:
        """Test the defaults when nothing is saved."""
        config = get_global_config()

        assert config == AppConfig()
        assert config.default_filter == "ready"
        assert get_store_file(config) == home / "tasks.json"

    def test_save_and_load(self, home: Path, tmp_path: Path) -> None:
        """Test that saved preferences load back."""
        config = AppConfig(
            store_file=tmp_path / "store.json",
            export_name="backup.json",
            default_filter=ProjectFilter(project="abc"),
        )

        save_global_config(config)

        assert get_global_config() == config
        assert get_store_file(get_global_config()) == tmp_path / "store.json"

    @pytest.mark.parametrize("contents", ["{not json", '{"default_filter": "someday"}'])
    def test_invalid_file_falls_back_to_defaults(self, home: Path, contents: str) -> None:
        """Test that a broken config file is ignored."""
        home.mkdir(parents=True)
        (home / "config.json").write_text(contents, encoding="utf-8")

        assert get_global_config() == AppConfig()
