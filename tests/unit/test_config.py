"""Unit tests for configuration loading."""

import os
from pathlib import Path
from textwrap import dedent
from unittest.mock import patch

import pytest

from ticketctl.config import (
    DEFAULT_STORE_PATH,
    ConfigError,
    find_config,
    load_config,
    resolve_config,
)


@pytest.fixture
def temp_config(tmp_path: Path) -> Path:
    """Create a temporary config file."""
    config_content = dedent("""
        store:
          path: data/tickets.json

        logging:
          dir: data/logs
          level: debug
          max_bytes: 2048
          backup_count: 1
    """).strip()

    config_path = tmp_path / "ticketctl.yaml"
    config_path.write_text(config_content)
    return config_path


@pytest.mark.unit
class TestLoadConfig:
    """Tests for load_config function."""

    def test_load_store_config(self, temp_config: Path) -> None:
        config = load_config(temp_config)

        assert config.store.path == "data/tickets.json"

    def test_load_logging_config(self, temp_config: Path) -> None:
        config = load_config(temp_config)

        assert config.logging.dir == "data/logs"
        assert config.logging.level == "debug"
        assert config.logging.max_bytes == 2048
        assert config.logging.backup_count == 1

    def test_paths_resolve_against_config_dir(self, temp_config: Path) -> None:
        config = load_config(temp_config)

        with patch.dict(os.environ, clear=True):
            assert config.get_store_path() == (temp_config.parent / "data/tickets.json").resolve()
            assert config.get_log_dir() == (temp_config.parent / "data/logs").resolve()

    def test_absolute_store_path_kept(self, tmp_path: Path) -> None:
        target = tmp_path / "elsewhere" / "t.json"
        config_path = tmp_path / "ticketctl.yaml"
        config_path.write_text(f"store:\n  path: {target}\n")

        config = load_config(config_path)

        with patch.dict(os.environ, clear=True):
            assert config.get_store_path() == target.resolve()

    def test_empty_file_uses_defaults(self, tmp_path: Path) -> None:
        config_path = tmp_path / "ticketctl.yaml"
        config_path.write_text("")

        config = load_config(config_path)

        assert config.store.path == DEFAULT_STORE_PATH
        assert config.logging.level == "INFO"

    def test_env_overrides(self, temp_config: Path, tmp_path: Path) -> None:
        config = load_config(temp_config)
        env = {
            "TICKETCTL_STORE": str(tmp_path / "env.json"),
            "TICKETCTL_LOG_DIR": str(tmp_path / "envlogs"),
            "TICKETCTL_LOG_LEVEL": "ERROR",
        }

        with patch.dict(os.environ, env):
            assert config.get_store_path() == (tmp_path / "env.json").resolve()
            assert config.get_log_dir() == (tmp_path / "envlogs").resolve()
            assert config.get_log_level() == "ERROR"

    def test_missing_file_raises(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError, match="not found"):
            load_config(tmp_path / "nope.yaml")

    def test_invalid_yaml_raises(self, tmp_path: Path) -> None:
        config_path = tmp_path / "ticketctl.yaml"
        config_path.write_text("store: [unclosed")

        with pytest.raises(ConfigError, match="Invalid YAML"):
            load_config(config_path)

    def test_non_mapping_raises(self, tmp_path: Path) -> None:
        config_path = tmp_path / "ticketctl.yaml"
        config_path.write_text("- just\n- a list\n")

        with pytest.raises(ConfigError, match="mapping"):
            load_config(config_path)

    def test_section_must_be_mapping(self, tmp_path: Path) -> None:
        config_path = tmp_path / "ticketctl.yaml"
        config_path.write_text("store: tickets.json\n")

        with pytest.raises(ConfigError, match="'store'"):
            load_config(config_path)

    @pytest.mark.parametrize("value", ["0", '""', "false", "[]"])
    def test_falsy_section_must_be_mapping(self, tmp_path: Path, value: str) -> None:
        config_path = tmp_path / "ticketctl.yaml"
        config_path.write_text(f"logging: {value}\n")

        with pytest.raises(ConfigError, match="'logging'"):
            load_config(config_path)

    def test_bare_section_uses_defaults(self, tmp_path: Path) -> None:
        config_path = tmp_path / "ticketctl.yaml"
        config_path.write_text("store:\nlogging:\n")

        config = load_config(config_path)

        assert config.store.path == DEFAULT_STORE_PATH
        assert config.logging.level == "INFO"

    def test_wrong_value_type_raises(self, tmp_path: Path) -> None:
        config_path = tmp_path / "ticketctl.yaml"
        config_path.write_text("logging:\n  max_bytes: lots\n")

        with pytest.raises(ConfigError, match="max_bytes"):
            load_config(config_path)


@pytest.mark.unit
class TestFindConfig:
    """Tests for find_config function."""

    def test_finds_in_start_dir(self, temp_config: Path) -> None:
        assert find_config(temp_config.parent) == temp_config.resolve()

    def test_finds_in_parent_dir(self, temp_config: Path) -> None:
        nested = temp_config.parent / "a" / "b"
        nested.mkdir(parents=True)

        assert find_config(nested) == temp_config.resolve()

    def test_returns_none_when_absent(self, tmp_path: Path) -> None:
        empty = tmp_path / "empty"
        empty.mkdir()

        # Guard against a stray config somewhere above tmp_path
        found = find_config(empty)
        assert found is None or not found.is_relative_to(tmp_path)


@pytest.mark.unit
class TestResolveConfig:
    """Tests for resolve_config function."""

    def test_explicit_path(self, temp_config: Path) -> None:
        config = resolve_config(temp_config)

        assert config.store.path == "data/tickets.json"

    def test_defaults_rooted_at_cwd(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.chdir(tmp_path)
        monkeypatch.setattr("ticketctl.config.find_config", lambda: None)
        monkeypatch.delenv("TICKETCTL_STORE", raising=False)

        config = resolve_config()

        assert config.root_path == Path.cwd()
        assert config.get_store_path() == (tmp_path / DEFAULT_STORE_PATH).resolve()
