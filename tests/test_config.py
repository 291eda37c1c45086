"""Tests for config file loading, paths and interval parsing."""

from pathlib import Path

import pytest
import yaml

from prdash.columns import DEFAULT_COLUMNS, WIDE_COLUMNS, Column
from prdash.config import (
    DashboardConfig,
    get_config_path,
    get_log_path,
    load_config,
    parse_interval,
)
from prdash.exceptions import ConfigError, UnknownColumn
from prdash.models import QueryFilters


def _write_config(path: Path, content) -> Path:
    path.write_text(yaml.dump(content))
    return path


class TestPaths:

    def test_config_path_uses_xdg_config_home(self, monkeypatch, tmp_path):
        monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
        assert get_config_path() == tmp_path / "prdash" / "config.yaml"

    def test_config_path_falls_back_to_home(self, monkeypatch, tmp_path):
        monkeypatch.delenv("XDG_CONFIG_HOME", raising=False)
        monkeypatch.setenv("HOME", str(tmp_path))
        assert get_config_path() == tmp_path / ".config" / "prdash" / "config.yaml"

    def test_log_path_uses_xdg_state_home(self, monkeypatch, tmp_path):
        monkeypatch.setenv("XDG_STATE_HOME", str(tmp_path))
        assert get_log_path() == tmp_path / "prdash" / "prdash.log"

    def test_log_path_falls_back_to_home(self, monkeypatch, tmp_path):
        monkeypatch.delenv("XDG_STATE_HOME", raising=False)
        monkeypatch.setenv("HOME", str(tmp_path))
        assert get_log_path() == tmp_path / ".local" / "state" / "prdash" / "prdash.log"


class TestParseInterval:

    @pytest.mark.parametrize("value,expected", [
        (None, None),
        ("", None),
        (0, None),
        ("0s", None),
        (30, 30.0),
        (1.5, 1.5),
        ("45", 45.0),
        ("90s", 90.0),
        ("5m", 300.0),
        ("1h30m", 5400.0),
        (" 2M ", 120.0),
    ])
    def test_valid(self, value, expected):
        assert parse_interval(value) == expected

    @pytest.mark.parametrize("value", ["soon", "5x", "5m later", -1, "-10", True])
    def test_invalid(self, value):
        with pytest.raises(ConfigError, match="invalid interval"):
            parse_interval(value)


class TestLoadConfig:

    def test_missing_file_gives_defaults(self, tmp_path):
        config = load_config(tmp_path / "absent.yaml")
        assert config == DashboardConfig()
        assert config.view_columns.default == DEFAULT_COLUMNS
        assert config.view_columns.wide == WIDE_COLUMNS

    def test_missing_required_file_raises(self, tmp_path):
        with pytest.raises(ConfigError, match="not found"):
            load_config(tmp_path / "absent.yaml", required=True)

    def test_default_location(self, monkeypatch, tmp_path):
        monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
        (tmp_path / "prdash").mkdir()
        _write_config(tmp_path / "prdash" / "config.yaml", {"include_drafts": True})
        assert load_config().include_drafts is True

    def test_expands_environment_variables(self, monkeypatch, tmp_path):
        monkeypatch.setenv("PRDASH_TEST_DIR", str(tmp_path))
        _write_config(tmp_path / "dash.yaml", {"include_closed": True})
        assert load_config(Path("$PRDASH_TEST_DIR/dash.yaml")).include_closed is True

    def test_full_config(self, tmp_path):
        path = _write_config(tmp_path / "config.yaml", {
            "include_drafts": True,
            "include_closed": False,
            "interval": "2m",
            "repositories": ["octo-org/one", "octo-org/two"],
            "default_view": ["title", "Author", " updatedAt "],
            "wide_view": ["title", "url"],
        })
        config = load_config(path)

        assert config.interval == 120.0
        assert config.filters == QueryFilters(
            include_drafts=True,
            repositories=("octo-org/one", "octo-org/two"),
        )
        assert config.view_columns.default == (Column.TITLE, Column.AUTHOR, Column.UPDATED_AT)
        assert config.view_columns.wide == (Column.TITLE, Column.URL)

    def test_empty_view_keeps_default(self, tmp_path):
        path = _write_config(tmp_path / "config.yaml", {"default_view": []})
        assert load_config(path).view_columns.default == DEFAULT_COLUMNS

    def test_empty_file_gives_defaults(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("")
        assert load_config(path) == DashboardConfig()

    def test_unknown_column_names_valid_columns(self, tmp_path):
        path = _write_config(tmp_path / "config.yaml", {"default_view": ["title", "bogus"]})
        with pytest.raises(UnknownColumn) as exc_info:
            load_config(path)
        assert exc_info.value.name == "bogus"
        assert "title" in str(exc_info.value)

    def test_invalid_yaml_raises(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("include_drafts: [unclosed\n")
        with pytest.raises(ConfigError, match="failed to load"):
            load_config(path)

    def test_top_level_list_raises(self, tmp_path):
        path = _write_config(tmp_path / "config.yaml", ["not", "a", "mapping"])
        with pytest.raises(ConfigError, match="mapping"):
            load_config(path)

    def test_repositories_must_be_list(self, tmp_path):
        path = _write_config(tmp_path / "config.yaml", {"repositories": "octo-org/one"})
        with pytest.raises(ConfigError, match="repositories"):
            load_config(path)

    def test_view_must_be_list(self, tmp_path):
        path = _write_config(tmp_path / "config.yaml", {"wide_view": "title"})
        with pytest.raises(ConfigError, match="wide_view"):
            load_config(path)

    @pytest.mark.parametrize("value", ["false", "yes", 0, 1])
    def test_flags_must_be_booleans(self, tmp_path, value):
        path = _write_config(tmp_path / "config.yaml", {"include_drafts": value})
        with pytest.raises(ConfigError, match="include_drafts must be true or false"):
            load_config(path)

    def test_null_flag_is_false(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("include_closed:\n")
        assert load_config(path).include_closed is False
