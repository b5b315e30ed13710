"""
Unit Tests for run.py Entry Script.

Tests individual functions with mocked dependencies.
"""

import sys
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest
from click.testing import CliRunner

sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from run import main, validate_project_root


class TestValidateProjectRoot:
    """Tests for validate_project_root function."""

    def test_succeeds_when_marker_exists(self, tmp_path):
        (tmp_path / ".project_root").touch()

        with patch("run.PROJECT_ROOT", tmp_path):
            assert validate_project_root() == tmp_path

    def test_exits_when_marker_missing(self, tmp_path):
        with patch("run.PROJECT_ROOT", tmp_path):
            with pytest.raises(SystemExit) as exc_info:
                validate_project_root()
            assert exc_info.value.code == 1


class TestMainCLI:
    """Tests for main CLI entry point."""

    @pytest.fixture
    def runner(self):
        return CliRunner()

    @pytest.fixture(autouse=True)
    def quiet_logging(self):
        with patch("run.setup_logging"):
            yield

    def test_help_displays_usage(self, runner):
        result = runner.invoke(main, ["--help"])

        assert result.exit_code == 0
        assert "Endorse Me entry point" in result.output
        assert "--action" in result.output

    def test_info_lists_actions(self, runner):
        result = runner.invoke(main, ["--action", "info"])

        assert result.exit_code == 0
        assert "Endorse Me" in result.output
        assert "--action server" in result.output

    def test_config_reports_valid_environment(self, runner):
        result = runner.invoke(main, ["--action", "config"])

        assert result.exit_code == 0
        assert "All required variables set" in result.output

    def test_config_reports_missing_variables(self, runner, missing_telegram_env):
        result = runner.invoke(main, ["--action", "config"])

        assert result.exit_code == 0
        assert "Missing environment variables: TELEGRAM_BOT_USERNAME, TELEGRAM_WEBAPP_URL" in result.output

    def test_health_fails_on_missing_configuration(self, runner, missing_telegram_env):
        result = runner.invoke(main, ["--action", "health"])

        assert result.exit_code == 1
        assert "Telegram environment" in result.output

    def test_server_builds_uvicorn_command(self, runner):
        with patch("run.subprocess.run", return_value=MagicMock(returncode=0)) as run_mock:
            result = runner.invoke(main, ["--action", "server", "--port", "9000", "--reload"])

        assert result.exit_code == 0
        cmd = run_mock.call_args.args[0]
        assert "endorseme.backend.main:app" in cmd
        assert cmd[cmd.index("--port") + 1] == "9000"
        assert "--reload" in cmd

    def test_test_action_selects_suite(self, runner):
        with patch("run.subprocess.run", return_value=MagicMock(returncode=0)) as run_mock:
            result = runner.invoke(main, ["--action", "test", "--test-type", "unit"])

        assert result.exit_code == 0
        assert "tests/unit" in run_mock.call_args.args[0]
