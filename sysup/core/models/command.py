"""
Command models — what to run and what came back.

A CommandSpec is the unit of work: one program plus its ordered
argument list. Executors turn specs into processes and, when asked to
capture, hand back an ExecutionResult. ParsedPackageList is the shape
the cargo listing parser produces.
"""

from __future__ import annotations

from collections.abc import Iterable

from pydantic import BaseModel, ConfigDict, Field


class CommandSpec(BaseModel):
    """An external program and its arguments, not yet executed.

    Immutable and hashable. Two specs are equal when program and
    arguments match in order.
    """

    model_config = ConfigDict(frozen=True)

    program: str = Field(min_length=1)
    arguments: tuple[str, ...] = ()

    @classmethod
    def of(cls, program: str, *arguments: str) -> CommandSpec:
        """Build a spec from positional parts: ``CommandSpec.of("brew", "update")``."""
        return cls(program=program, arguments=arguments)

    @property
    def argv(self) -> list[str]:
        """The argument vector handed to the OS, order preserved."""
        return [self.program, *self.arguments]

    @property
    def display(self) -> str:
        """Banner form: program, one space, space-joined arguments."""
        return f"{self.program} {' '.join(self.arguments)}"

    def with_arguments(self, extra: Iterable[str]) -> CommandSpec:
        """Return a new spec with ``extra`` appended after the existing arguments."""
        return CommandSpec(program=self.program, arguments=(*self.arguments, *extra))

    def __str__(self) -> str:
        return self.display


class ExecutionResult(BaseModel):
    """Exit status plus the captured output of one finished process."""

    exit_status: int
    stdout: bytes = b""
    stderr: bytes = b""

    @property
    def ok(self) -> bool:
        return self.exit_status == 0


class ParsedPackageList(BaseModel):
    """Installed packages split into the ones to update and the ones left alone."""

    to_update: list[str] = Field(default_factory=list)
    skipped: list[str] = Field(default_factory=list)
