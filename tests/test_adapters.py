"""
Tests for executors — mock and real subprocess.
"""

import shutil

import pytest

from sysup.adapters.base import (
    CommandError,
    ProgramNotFoundError,
    SpawnError,
    WaitError,
)
from sysup.adapters.mock import MockCall, MockExecutor
from sysup.adapters.shell.command import SubprocessExecutor
from sysup.core.models.command import CommandSpec

# ── Error Hierarchy Tests ────────────────────────────────────────────


class TestCommandErrors:
    def test_is_os_error(self):
        err = SpawnError(CommandSpec.of("apt"), "boom")
        assert isinstance(err, OSError)
        assert isinstance(err, CommandError)

    def test_not_found_is_spawn_error(self):
        err = ProgramNotFoundError(CommandSpec.of("yay"))
        assert isinstance(err, SpawnError)
        assert err.spec == CommandSpec.of("yay")
        assert "yay" in str(err)
        assert "not found" in str(err)

    def test_wait_error_keeps_detail(self):
        err = WaitError(CommandSpec.of("brew", "update"), "interrupted")
        assert err.detail == "interrupted"
        assert str(err) == "brew: interrupted"


# ── Mock Executor Tests ──────────────────────────────────────────────


class TestMockExecutor:
    def test_default_success(self):
        mock = MockExecutor()
        assert mock.run_to_completion(CommandSpec.of("brew", "update")) == 0
        result = mock.run_and_capture(CommandSpec.of("pacman", "-Qtdq"))
        assert result.exit_status == 0
        assert result.stdout == b""
        assert mock.call_count == 2

    def test_call_log(self):
        mock = MockExecutor()
        mock.run_to_completion(CommandSpec.of("a"))
        mock.run_and_capture(CommandSpec.of("b", "x"))
        assert mock.call_log == [
            MockCall(operation="run", spec=CommandSpec.of("a")),
            MockCall(operation="capture", spec=CommandSpec.of("b", "x")),
        ]
        assert mock.displays == ["a ", "b x"]

    def test_result_by_program(self):
        mock = MockExecutor()
        mock.set_result("pacman", stdout=b"foo\n", exit_status=1)
        result = mock.run_and_capture(CommandSpec.of("pacman", "-Qtdq"))
        assert result.stdout == b"foo\n"
        assert result.exit_status == 1

    def test_display_wins_over_program(self):
        mock = MockExecutor()
        mock.set_result("cargo", stdout=b"program")
        mock.set_result("cargo install --list", stdout=b"display")
        assert mock.run_and_capture(CommandSpec.of("cargo", "install", "--list")).stdout == b"display"
        assert mock.run_and_capture(CommandSpec.of("cargo", "install", "bat")).stdout == b"program"

    def test_missing_program(self):
        mock = MockExecutor()
        mock.set_missing("rustup")
        with pytest.raises(ProgramNotFoundError) as exc_info:
            mock.run_to_completion(CommandSpec.of("rustup", "update"))
        assert exc_info.value.spec == CommandSpec.of("rustup", "update")
        assert mock.call_count == 1

    def test_spawn_failure(self):
        mock = MockExecutor()
        mock.set_spawn_failure("sudo apt-get update", detail="permission denied")
        with pytest.raises(SpawnError) as exc_info:
            mock.run_to_completion(CommandSpec.of("sudo", "apt-get", "update"))
        assert exc_info.value.detail == "permission denied"
        assert not isinstance(exc_info.value, ProgramNotFoundError)

    def test_wait_failure(self):
        mock = MockExecutor()
        mock.set_wait_failure("brew")
        with pytest.raises(WaitError):
            mock.run_and_capture(CommandSpec.of("brew", "update"))

    def test_reset(self):
        mock = MockExecutor()
        mock.set_missing("yay")
        mock.run_to_completion(CommandSpec.of("brew"))
        mock.reset()
        assert mock.call_count == 0
        assert mock.run_to_completion(CommandSpec.of("yay")) == 0

    def test_name(self):
        assert MockExecutor().name == "mock"
        assert MockExecutor(executor_name="fake").name == "fake"


# ── Subprocess Executor Tests ────────────────────────────────────────


needs_sh = pytest.mark.skipif(shutil.which("sh") is None, reason="requires sh")


@needs_sh
class TestSubprocessExecutor:
    def test_name(self):
        assert SubprocessExecutor().name == "subprocess"

    def test_run_returns_exit_status(self):
        executor = SubprocessExecutor()
        assert executor.run_to_completion(CommandSpec.of("sh", "-c", "exit 0")) == 0
        assert executor.run_to_completion(CommandSpec.of("sh", "-c", "exit 3")) == 3

    def test_capture_stdout_and_stderr(self):
        executor = SubprocessExecutor()
        result = executor.run_and_capture(
            CommandSpec.of("sh", "-c", "printf 'one\\ntwo\\n'; printf err >&2; exit 2"),
        )
        assert result.stdout == b"one\ntwo\n"
        assert result.stderr == b"err"
        assert result.exit_status == 2

    def test_arguments_passed_verbatim(self):
        executor = SubprocessExecutor()
        result = executor.run_and_capture(
            CommandSpec.of("sh", "-c", 'printf "%s|" "$@"', "sh", "+Lazy! sync", "$HOME", "a b"),
        )
        assert result.stdout == b"+Lazy! sync|$HOME|a b|"

    def test_missing_program_run(self):
        executor = SubprocessExecutor()
        with pytest.raises(ProgramNotFoundError) as exc_info:
            executor.run_to_completion(CommandSpec.of("sysup-definitely-not-installed"))
        assert exc_info.value.spec.program == "sysup-definitely-not-installed"

    def test_missing_program_capture(self):
        executor = SubprocessExecutor()
        with pytest.raises(ProgramNotFoundError):
            executor.run_and_capture(CommandSpec.of("sysup-definitely-not-installed", "--list"))

    def test_not_executable_is_spawn_error(self, tmp_path):
        script = tmp_path / "not-executable"
        script.write_text("#!/bin/sh\nexit 0\n")
        script.chmod(0o644)
        executor = SubprocessExecutor()
        with pytest.raises(SpawnError) as exc_info:
            executor.run_to_completion(CommandSpec.of(str(script)))
        assert not isinstance(exc_info.value, ProgramNotFoundError)
