"""
Unit Tests for run.py Entry Script.

Tests the click entry point with the real YAML configuration.
"""

import sys
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest
from click.testing import CliRunner

sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from run import main, validate_project_root


@pytest.fixture
def runner():
    """Create Click test runner."""
    return CliRunner()


class TestValidateProjectRoot:
    """Tests for validate_project_root function."""

    def test_succeeds_when_marker_exists(self, tmp_path):
        """Should return path when .project_root exists."""
        (tmp_path / ".project_root").touch()

        with patch("run.PROJECT_ROOT", tmp_path):
            assert validate_project_root() == tmp_path

    def test_exits_when_marker_missing(self, tmp_path):
        """Should exit with error when .project_root is missing."""
        with patch("run.PROJECT_ROOT", tmp_path):
            with pytest.raises(SystemExit) as exc_info:
                validate_project_root()
        assert exc_info.value.code == 1


class TestMainCLI:
    """Tests for main CLI entry point."""

    def test_help_displays_usage(self, runner):
        result = runner.invoke(main, ["--help"])

        assert result.exit_code == 0
        assert "Notevault Entry Point" in result.output
        for option in ("--action", "--verbose", "--debug", "--host", "--port", "--test-type"):
            assert option in result.output

    def test_info_action_displays_app_info(self, runner):
        result = runner.invoke(main, ["--action", "info"])

        assert result.exit_code == 0
        assert "Name: notevault" in result.output
        assert "--action migrate" in result.output

    def test_verbose_flag_sets_info_logging(self, runner):
        with patch("run.setup_logging") as mock_setup, patch("run.validate_project_root"):
            runner.invoke(main, ["--action", "info", "--verbose"])

        mock_setup.assert_called_once_with(level="INFO", format_type="console")

    def test_debug_flag_sets_debug_logging(self, runner):
        with patch("run.setup_logging") as mock_setup, patch("run.validate_project_root"):
            runner.invoke(main, ["--action", "info", "-d"])

        mock_setup.assert_called_once_with(level="DEBUG", format_type="console")

    def test_config_action_shows_all_sections(self, runner):
        result = runner.invoke(main, ["--action", "config"])

        assert result.exit_code == 0
        for section in (
            "Application Settings",
            "Database Settings",
            "Logging Settings",
            "Feature Flags",
            "Event Streams",
        ):
            assert section in result.output
        assert "events_publish_enabled" in result.output

    def test_health_action_runs_checks(self, runner):
        result = runner.invoke(main, ["--action", "health"])

        assert result.exit_code == 0
        assert "Health Check Results" in result.output
        assert "Core imports" in result.output
        assert "Database models" in result.output

    def test_invalid_action_shows_error(self, runner):
        result = runner.invoke(main, ["--action", "invalid"])

        assert result.exit_code != 0
        assert "Invalid value" in result.output


class TestSubprocessActions:
    """Actions that shell out are checked without running the command."""

    def test_server_uses_configured_host_and_port(self, runner):
        with patch("run.subprocess.run") as mock_run:
            result = runner.invoke(main, ["--action", "server"])

        assert result.exit_code == 0
        cmd = mock_run.call_args.args[0]
        assert "notevault.main:app" in cmd
        assert cmd[cmd.index("--host") + 1] == "127.0.0.1"
        assert cmd[cmd.index("--port") + 1] == "8000"

    def test_server_options_override_config(self, runner):
        with patch("run.subprocess.run") as mock_run:
            runner.invoke(main, ["--action", "server", "--port", "9001", "--reload"])

        cmd = mock_run.call_args.args[0]
        assert cmd[cmd.index("--port") + 1] == "9001"
        assert "--reload" in cmd

    def test_migrate_runs_alembic_upgrade(self, runner):
        with patch("run.subprocess.run", return_value=MagicMock(returncode=0)) as mock_run:
            result = runner.invoke(main, ["--action", "migrate"])

        assert result.exit_code == 0
        assert mock_run.call_args.args[0][-3:] == ["alembic", "upgrade", "head"]

    def test_unit_tests_target_unit_directory(self, runner):
        with patch("run.subprocess.run", return_value=MagicMock(returncode=0)) as mock_run:
            result = runner.invoke(main, ["--action", "test", "--test-type", "unit", "--coverage"])

        assert result.exit_code == 0
        cmd = mock_run.call_args.args[0]
        assert "tests/unit" in cmd
        assert "--cov=notevault" in cmd
