"""Tests for the prdash command line entry point."""

from unittest.mock import patch

import pytest
import yaml

from prdash.cli import build_parser, main, resolve_config, setup_logging
from prdash.models import PanelKind


@pytest.fixture(autouse=True)
def isolated_dirs(monkeypatch, tmp_path):
    """Keep config lookups and log files inside tmp_path."""
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.setenv("XDG_STATE_HOME", str(tmp_path / "state"))
    return tmp_path


class TestParser:

    def test_defaults(self):
        args = build_parser().parse_args([])
        assert args.tab == "prs"
        assert args.include_drafts is False
        assert args.include_closed is False
        assert args.watch is None
        assert args.config is None
        assert args.debug is False

    def test_flags(self):
        args = build_parser().parse_args(["requests", "-d", "-c", "-w", "5m", "-f", "x.yaml"])
        assert args.tab == "requests"
        assert args.include_drafts and args.include_closed
        assert args.watch == "5m"
        assert args.config == "x.yaml"

    def test_unknown_tab_rejected(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["everything"])


class TestResolveConfig:

    def test_flags_override_file(self, tmp_path):
        path = tmp_path / "dash.yaml"
        path.write_text(yaml.dump({"interval": 600, "repositories": ["a/b"]}))
        args = build_parser().parse_args(["-d", "-w", "30s", "-f", str(path)])

        config = resolve_config(args)

        assert config.include_drafts is True
        assert config.include_closed is False
        assert config.interval == 30.0
        assert config.repositories == ["a/b"]

    def test_file_values_kept_without_flags(self, tmp_path):
        path = tmp_path / "dash.yaml"
        path.write_text(yaml.dump({"include_closed": True, "interval": "1m"}))
        config = resolve_config(build_parser().parse_args(["-f", str(path)]))
        assert config.include_closed is True
        assert config.interval == 60.0


def test_setup_logging_creates_log_dir(isolated_dirs):
    with patch("prdash.cli.logging.basicConfig") as mock_basic:
        log_path = setup_logging(debug=True)
    assert log_path == isolated_dirs / "state" / "prdash" / "prdash.log"
    assert log_path.parent.is_dir()
    assert mock_basic.call_args.kwargs["filename"] == str(log_path)


class TestMain:

    @patch("prdash.cli.setup_logging")
    def test_bad_config_exits_2(self, mock_logging, tmp_path, capsys):
        path = tmp_path / "dash.yaml"
        path.write_text(yaml.dump({"default_view": ["nope"]}))

        assert main(["-f", str(path)]) == 2

        err = capsys.readouterr().err
        assert err.startswith("ERROR: failed to load options:")
        assert "unknown column: nope" in err

    @patch("prdash.cli.setup_logging")
    def test_missing_explicit_config_exits_2(self, mock_logging, tmp_path, capsys):
        assert main(["-f", str(tmp_path / "absent.yaml")]) == 2
        assert "not found" in capsys.readouterr().err

    @patch("prdash.cli.setup_logging")
    def test_bad_watch_interval_exits_2(self, mock_logging):
        assert main(["-w", "often"]) == 2

    @patch("prdash.cli.setup_logging")
    @patch("prdash.app.PRDashApp")
    def test_runs_app_on_requested_tab(self, mock_app, mock_logging):
        assert main(["all", "-c"]) == 0

        config = mock_app.call_args[0][0]
        assert config.include_closed is True
        assert mock_app.call_args.kwargs["start_tab"] is PanelKind.ALL_PRS
        mock_app.return_value.run.assert_called_once()

    @patch("prdash.cli.setup_logging")
    @patch("prdash.app.PRDashApp")
    def test_crash_is_logged_and_reraised(self, mock_app, mock_logging):
        mock_app.return_value.run.side_effect = RuntimeError("terminal went away")
        with patch("prdash.cli.logger") as mock_logger:
            with pytest.raises(RuntimeError):
                main([])
        mock_logger.exception.assert_called_once()
