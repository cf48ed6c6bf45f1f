"""
Subprocess executor — the one place that spawns real processes.

Commands are never run through a shell: a CommandSpec's argv goes to the
OS exactly as built, so package names from probe output can't be
reinterpreted.

There is no timeout. A package manager that hangs (waiting on a lock,
a prompt we didn't answer) hangs the whole run.
"""

from __future__ import annotations

import logging
import subprocess
import time

from sysup.adapters.base import (
    Executor,
    ProgramNotFoundError,
    SpawnError,
    WaitError,
)
from sysup.core.models.command import CommandSpec, ExecutionResult

logger = logging.getLogger(__name__)


class SubprocessExecutor(Executor):
    """Run commands with :mod:`subprocess`."""

    @property
    def name(self) -> str:
        return "subprocess"

    def run_to_completion(self, spec: CommandSpec) -> int:
        logger.debug("Executing: %s", spec.argv)
        start = time.monotonic()

        proc = self._spawn(spec)
        try:
            returncode = proc.wait()
        except OSError as e:
            raise WaitError(spec, str(e)) from e

        elapsed_ms = int((time.monotonic() - start) * 1000)
        logger.debug("%s exited %d (%dms)", spec.program, returncode, elapsed_ms)
        return returncode

    def run_and_capture(self, spec: CommandSpec) -> ExecutionResult:
        logger.debug("Capturing: %s", spec.argv)
        start = time.monotonic()

        proc = self._spawn(spec, stdout=subprocess.PIPE, stderr=subprocess.PIPE)
        try:
            stdout, stderr = proc.communicate()
        except OSError as e:
            raise WaitError(spec, str(e)) from e

        elapsed_ms = int((time.monotonic() - start) * 1000)
        logger.debug(
            "%s exited %d (%dms, %d bytes stdout)",
            spec.program, proc.returncode, elapsed_ms, len(stdout),
        )
        return ExecutionResult(
            exit_status=proc.returncode,
            stdout=stdout,
            stderr=stderr,
        )

    @staticmethod
    def _spawn(spec: CommandSpec, **kwargs) -> subprocess.Popen:
        try:
            return subprocess.Popen(spec.argv, **kwargs)
        except FileNotFoundError as e:
            raise ProgramNotFoundError(spec) from e
        except OSError as e:
            raise SpawnError(spec, str(e)) from e
