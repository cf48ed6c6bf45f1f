"""
Update plan models — the declarative form of one update run.

A plan is an ordered list of typed steps. Building a plan never
spawns a process; the engine runner interprets it afterwards.

Step kinds:
    plain       → commands run in order, any spawn failure aborts
    best_effort → one command, absence or failure only warns
    chained     → probe output becomes the follow-up's arguments
    cargo       → list installed crates, reinstall the registry ones
"""

from __future__ import annotations

from typing import Annotated, Any, Literal

from pydantic import BaseModel, Field

from sysup.core.models.command import CommandSpec


class PlainStep(BaseModel):
    """Commands that must all start; the first spawn failure ends the run."""

    kind: Literal["plain"] = "plain"
    id: str
    commands: list[CommandSpec] = Field(default_factory=list)


class BestEffortStep(BaseModel):
    """A single command whose absence or failure is only reported."""

    kind: Literal["best_effort"] = "best_effort"
    id: str
    command: CommandSpec
    description: str = ""


class ChainedStep(BaseModel):
    """Run ``probe``; feed each non-empty output line to ``follow_up`` as an argument."""

    kind: Literal["chained"] = "chained"
    id: str
    probe: CommandSpec
    follow_up: CommandSpec


class CargoStep(BaseModel):
    """Reinstall every crate from ``list_command`` that is not a local install."""

    kind: Literal["cargo"] = "cargo"
    id: str
    list_command: CommandSpec
    install_command: CommandSpec


Step = Annotated[
    PlainStep | BestEffortStep | ChainedStep | CargoStep,
    Field(discriminator="kind"),
]


class UpdatePlan(BaseModel):
    """Ordered steps selected for one platform/distribution pair."""

    platform: str
    distribution: str | None = None
    steps: list[Step] = Field(default_factory=list)

    @property
    def step_ids(self) -> list[str]:
        return [step.id for step in self.steps]

    def get_step(self, step_id: str) -> PlainStep | BestEffortStep | ChainedStep | CargoStep | None:
        """Look up a step by id."""
        for step in self.steps:
            if step.id == step_id:
                return step
        return None

    def to_dict(self) -> dict[str, Any]:
        return {
            "platform": self.platform,
            "distribution": self.distribution,
            "steps": [_step_to_dict(step) for step in self.steps],
        }


def _step_to_dict(step: PlainStep | BestEffortStep | ChainedStep | CargoStep) -> dict[str, Any]:
    """Flatten a step for JSON output, command specs shown in display form."""
    data: dict[str, Any] = {"id": step.id, "kind": step.kind}
    if isinstance(step, PlainStep):
        data["commands"] = [c.display for c in step.commands]
    elif isinstance(step, BestEffortStep):
        data["command"] = step.command.display
        data["description"] = step.description
    elif isinstance(step, ChainedStep):
        data["probe"] = step.probe.display
        data["follow_up"] = step.follow_up.display
    elif isinstance(step, CargoStep):
        data["list_command"] = step.list_command.display
        data["install_command"] = step.install_command.display
    return data
