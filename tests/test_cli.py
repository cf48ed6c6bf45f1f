"""
Tests for CLI commands — update, plan, and global options.
"""

import json

import pytest
from click.testing import CliRunner

from sysup.adapters.mock import MockExecutor
from sysup.core.services.detection import DetectionError, PlatformInfo
from sysup.main import cli


@pytest.fixture
def mock_executor(monkeypatch) -> MockExecutor:
    """Route every CLI run through a mock executor."""
    mock = MockExecutor()
    monkeypatch.setattr("sysup.core.use_cases.update.SubprocessExecutor", lambda: mock)
    return mock


@pytest.fixture
def on_platform(monkeypatch):
    """Pretend to be running on the given platform."""

    def _set(platform: str, distribution: str | None = None) -> None:
        monkeypatch.setattr(
            "sysup.core.use_cases.update.detect_platform",
            lambda **kwargs: PlatformInfo(platform=platform, distribution=distribution),
        )

    return _set


class TestCLIGlobal:
    def test_help(self):
        runner = CliRunner()
        result = runner.invoke(cli, ["--help"])
        assert result.exit_code == 0
        assert "update every package manager" in result.output

    def test_version(self):
        runner = CliRunner()
        result = runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert "0.1.0" in result.output

    def test_no_subcommand_runs_update(self, mock_executor, on_platform):
        on_platform("macos")
        runner = CliRunner()
        result = runner.invoke(cli, [])
        assert result.exit_code == 0
        assert mock_executor.displays[0] == "brew update"
        assert "Update complete" in result.output


class TestUpdateCommand:
    def test_banners_printed(self, mock_executor, on_platform):
        on_platform("linux", "ubuntu")
        runner = CliRunner()
        result = runner.invoke(cli, ["update"])
        assert result.exit_code == 0
        assert "$ sudo apt-get update" in result.output
        assert "========================" in result.output

    def test_cargo_skip_notice(self, mock_executor, on_platform):
        on_platform("macos")
        mock_executor.set_result(
            "cargo install --list",
            stdout=b"dev v1.2.0 (/home/user/src/dev):\n    dev\nbat v0.24.0:\n    bat\n",
        )
        runner = CliRunner()
        result = runner.invoke(cli, ["update"])
        assert result.exit_code == 0
        assert "Skipping dev (local install)" in result.output
        assert "cargo install bat" in mock_executor.displays

    def test_unsupported_distribution_exits_1(self, mock_executor, on_platform):
        on_platform("linux", "fedora")
        runner = CliRunner()
        result = runner.invoke(cli, ["update"])
        assert result.exit_code == 1
        assert "not sure what OS this is: fedora" in result.output
        assert mock_executor.call_count == 0

    def test_detection_failure_exits_1(self, mock_executor, monkeypatch):
        def _fail(**kwargs):
            raise DetectionError("not sure what OS this is")

        monkeypatch.setattr("sysup.core.use_cases.update.detect_platform", _fail)
        runner = CliRunner()
        result = runner.invoke(cli, ["update"])
        assert result.exit_code == 1
        assert "not sure what OS this is" in result.output

    def test_required_failure_exits_1(self, mock_executor, on_platform):
        on_platform("macos")
        mock_executor.set_missing("brew")
        runner = CliRunner()
        result = runner.invoke(cli, ["update"])
        assert result.exit_code == 1
        assert "brew update failed" in result.output

    def test_best_effort_failure_exits_0(self, mock_executor, on_platform):
        on_platform("macos")
        mock_executor.set_missing("rustup")
        runner = CliRunner()
        result = runner.invoke(cli, ["update"])
        assert result.exit_code == 0
        assert "rustup not found" in result.output

    def test_config_option(self, mock_executor, on_platform, tmp_path):
        on_platform("macos")
        config = tmp_path / "config.yml"
        config.write_text("skip: [brew, nvim]\n")
        runner = CliRunner()
        result = runner.invoke(cli, ["--config", str(config), "update"])
        assert result.exit_code == 0
        assert "brew update" not in mock_executor.displays
        assert mock_executor.displays[0] == "rustup update"

    def test_bad_config_exits_1(self, mock_executor, on_platform, tmp_path):
        on_platform("macos")
        runner = CliRunner()
        result = runner.invoke(cli, ["--config", str(tmp_path / "missing.yml"), "update"])
        assert result.exit_code == 1
        assert "Config file not found" in result.output
        assert mock_executor.call_count == 0


class TestPlanCommand:
    def test_plan_text(self, mock_executor, on_platform):
        on_platform("linux", "arch")
        runner = CliRunner()
        result = runner.invoke(cli, ["plan"])
        assert result.exit_code == 0
        assert "linux/arch" in result.output
        assert "pacman-orphans" in result.output
        assert "$ pacman -Qtdq" in result.output
        assert mock_executor.call_count == 0

    def test_plan_json(self, mock_executor, on_platform):
        on_platform("macos")
        runner = CliRunner()
        result = runner.invoke(cli, ["plan", "--json"])
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["plan"]["platform"] == "macos"
        assert data["plan"]["steps"][0]["commands"] == [
            "brew update",
            "brew upgrade",
            "brew cleanup",
        ]
        assert mock_executor.call_count == 0

    def test_plan_error(self, on_platform):
        on_platform("linux", None)
        runner = CliRunner()
        result = runner.invoke(cli, ["plan"])
        assert result.exit_code == 1
        assert "not sure what OS this is" in result.output

    def test_plan_json_error(self, on_platform):
        on_platform("linux", "gentoo")
        runner = CliRunner()
        result = runner.invoke(cli, ["plan", "--json"])
        assert result.exit_code == 1
        assert json.loads(result.output) == {"error": "not sure what OS this is: gentoo"}
