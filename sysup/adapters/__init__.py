"""Adapters — process execution for the update engine.

Public re-exports for convenient access.
"""

from sysup.adapters.base import (
    CommandError,
    Executor,
    ProgramNotFoundError,
    SpawnError,
    WaitError,
)
from sysup.adapters.mock import MockExecutor
from sysup.adapters.shell.command import SubprocessExecutor

__all__ = [
    "CommandError",
    "Executor",
    "MockExecutor",
    "ProgramNotFoundError",
    "SpawnError",
    "SubprocessExecutor",
    "WaitError",
]
