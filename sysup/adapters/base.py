"""
Executor base — the protocol contract between engine and processes.

The engine never calls ``subprocess`` directly. It talks to an
Executor, which either runs a command with the terminal attached or
runs it with output captured. Swapping in the mock executor lets the
sequencer and chainer be tested without spawning anything.

Errors raised by executors all derive from CommandError, which is an
OSError so callers that only care about "the OS said no" can catch
that instead.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from sysup.core.models.command import CommandSpec, ExecutionResult


class CommandError(OSError):
    """A command could not be started or its completion could not be observed."""

    def __init__(self, spec: CommandSpec, detail: str = ""):
        self.spec = spec
        self.detail = detail
        message = f"{spec.program}: {detail}" if detail else spec.program
        super().__init__(message)


class SpawnError(CommandError):
    """The process could not be started."""


class ProgramNotFoundError(SpawnError):
    """The program does not exist on this host."""

    def __init__(self, spec: CommandSpec, detail: str = "program not found"):
        super().__init__(spec, detail)


class WaitError(CommandError):
    """The process started but waiting for it failed."""


class Executor(ABC):
    """Abstract capability for turning a CommandSpec into a process.

    Both operations block until the process exits. Neither retries.
    Neither treats a non-zero exit status as an error; that decision
    belongs to the caller.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """The executor identifier (e.g., 'subprocess', 'mock')."""

    @abstractmethod
    def run_to_completion(self, spec: CommandSpec) -> int:
        """Run with stdin/stdout/stderr inherited and return the exit status.

        Raises:
            ProgramNotFoundError: The program is not on PATH.
            SpawnError: The process could not be started.
            WaitError: Waiting for the process failed.
        """

    @abstractmethod
    def run_and_capture(self, spec: CommandSpec) -> ExecutionResult:
        """Run with stdout/stderr captured and return everything.

        Raises the same errors as ``run_to_completion``.
        """

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} name={self.name!r}>"
