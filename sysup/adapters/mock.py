"""
Mock executor — in-memory test double for process execution.

Records every call and answers from a script instead of spawning.
By default every command exits 0 with empty output. Responses and
failures can be scripted per program name or per full display form;
the display form wins when both match.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from sysup.adapters.base import (
    CommandError,
    Executor,
    ProgramNotFoundError,
    SpawnError,
    WaitError,
)
from sysup.core.models.command import CommandSpec, ExecutionResult

Operation = Literal["run", "capture"]


@dataclass(frozen=True)
class MockCall:
    """One recorded executor invocation."""

    operation: Operation
    spec: CommandSpec


class MockExecutor(Executor):
    """Scriptable executor for tests."""

    def __init__(self, executor_name: str = "mock"):
        self._name = executor_name
        self._results: dict[str, ExecutionResult] = {}
        self._errors: dict[str, tuple[type[CommandError], str]] = {}
        self._missing: set[str] = set()
        self._call_log: list[MockCall] = []

    @property
    def name(self) -> str:
        return self._name

    @property
    def call_log(self) -> list[MockCall]:
        """All calls this mock has received, in order."""
        return self._call_log

    @property
    def call_count(self) -> int:
        return len(self._call_log)

    @property
    def specs(self) -> list[CommandSpec]:
        """Specs of every call, whatever the operation."""
        return [call.spec for call in self._call_log]

    @property
    def displays(self) -> list[str]:
        return [call.spec.display for call in self._call_log]

    def set_result(
        self,
        key: str,
        stdout: bytes = b"",
        exit_status: int = 0,
        stderr: bytes = b"",
    ) -> None:
        """Script the outcome for a program name or a display form."""
        self._results[key] = ExecutionResult(
            exit_status=exit_status,
            stdout=stdout,
            stderr=stderr,
        )

    def set_missing(self, program: str) -> None:
        """Make ``program`` behave as if it is not installed."""
        self._missing.add(program)

    def set_spawn_failure(self, key: str, detail: str = "Mock spawn failure") -> None:
        self._errors[key] = (SpawnError, detail)

    def set_wait_failure(self, key: str, detail: str = "Mock wait failure") -> None:
        self._errors[key] = (WaitError, detail)

    def run_to_completion(self, spec: CommandSpec) -> int:
        return self._dispatch("run", spec).exit_status

    def run_and_capture(self, spec: CommandSpec) -> ExecutionResult:
        return self._dispatch("capture", spec)

    def reset(self) -> None:
        """Clear call log and every scripted response."""
        self._call_log.clear()
        self._results.clear()
        self._errors.clear()
        self._missing.clear()

    def _dispatch(self, operation: Operation, spec: CommandSpec) -> ExecutionResult:
        self._call_log.append(MockCall(operation=operation, spec=spec))

        if spec.program in self._missing:
            raise ProgramNotFoundError(spec)

        for key in (spec.display, spec.program):
            if key in self._errors:
                error_cls, detail = self._errors[key]
                raise error_cls(spec, detail)

        for key in (spec.display, spec.program):
            if key in self._results:
                return self._results[key]

        return ExecutionResult(exit_status=0)
