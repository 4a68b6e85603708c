"""
Tests for the flyover-watch command line.
"""

from unittest.mock import patch

import pytest

from flyover.cli import main, build_parser


@pytest.fixture
def env(monkeypatch, tmp_path):
    for name in ["TELEGRAM_BOT_TOKEN", "TELEGRAM_CHAT_ID", "GEMINI_API_KEY", "GEMINI_API_URL"]:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("LATITUDE", "40.0")
    monkeypatch.setenv("LONGITUDE", "29.05")
    return tmp_path


class TestCli:
    """Tests for the main entry point."""

    def test_parser_defaults(self):
        args = build_parser().parse_args([])

        assert args.config == "config.yaml"
        assert args.env_file == ".env"
        assert not args.once

    def test_missing_location(self, monkeypatch, tmp_path, capsys):
        monkeypatch.delenv("LATITUDE", raising=False)
        monkeypatch.delenv("LONGITUDE", raising=False)

        code = main(["--config", str(tmp_path / "none.yaml"), "--env-file", str(tmp_path / "none.env")])

        assert code == 1
        assert "Configuration error" in capsys.readouterr().out

    @patch("flyover.cli.FlightWatcher")
    def test_once(self, mock_watcher, env):
        code = main(["--config", str(env / "none.yaml"), "--env-file", str(env / "none.env"), "--once"])

        assert code == 0
        _, kwargs = mock_watcher.call_args
        assert kwargs["narrator"] is None
        mock_watcher.return_value.run.assert_called_once_with(max_iterations=1)

    @patch("flyover.cli.FlightWatcher")
    def test_narration_enabled(self, mock_watcher, env, monkeypatch):
        monkeypatch.setenv("GEMINI_API_KEY", "secret")
        monkeypatch.setenv("GEMINI_API_URL", "https://example.invalid/generate")

        main(["--config", str(env / "none.yaml"), "--env-file", str(env / "none.env")])

        _, kwargs = mock_watcher.call_args
        assert kwargs["narrator"] is not None
        mock_watcher.return_value.run.assert_called_once_with(max_iterations=None)

    @patch("flyover.cli.FlightWatcher")
    def test_fatal_error(self, mock_watcher, env):
        mock_watcher.return_value.run.side_effect = RuntimeError("boom")

        code = main(["--config", str(env / "none.yaml"), "--env-file", str(env / "none.env")])

        assert code == 1
