"""
Plan runner — interpret an UpdatePlan, one step at a time.

Every step kind maps to one engine primitive:

    PlainStep      → run_all(REQUIRED)
    BestEffortStep → run_all(BEST_EFFORT)
    ChainedStep    → run_chained
    CargoStep      → capture listing, parse, run_all(REQUIRED) per crate

Errors are not caught here; a REQUIRED failure ends the run and the
caller decides how to report it.
"""

from __future__ import annotations

import logging

import click

from sysup.adapters.base import Executor
from sysup.core.engine.chainer import run_chained
from sysup.core.engine.sequencer import RunMode, run_all
from sysup.core.models.command import ParsedPackageList
from sysup.core.models.plan import (
    BestEffortStep,
    CargoStep,
    ChainedStep,
    PlainStep,
    UpdatePlan,
)
from sysup.core.services.cargo_list import parse_cargo_list

logger = logging.getLogger(__name__)


def execute_plan(plan: UpdatePlan, executor: Executor) -> None:
    """Run every step of ``plan`` in order.

    Raises:
        CommandError: A REQUIRED command could not be run.
    """
    logger.info(
        "Running plan for %s%s: %s",
        plan.platform,
        f"/{plan.distribution}" if plan.distribution else "",
        ", ".join(plan.step_ids) or "(empty)",
    )

    for step in plan.steps:
        logger.info("Step: %s (%s)", step.id, step.kind)

        if isinstance(step, PlainStep):
            run_all(executor, step.commands, mode=RunMode.REQUIRED)
        elif isinstance(step, BestEffortStep):
            run_all(
                executor,
                [step.command],
                mode=RunMode.BEST_EFFORT,
                description=step.description,
            )
        elif isinstance(step, ChainedStep):
            run_chained(executor, step.probe, step.follow_up)
        elif isinstance(step, CargoStep):
            run_cargo_updates(executor, step)
        else:
            raise TypeError(f"Unknown step type: {type(step).__name__}")


def run_cargo_updates(executor: Executor, step: CargoStep) -> ParsedPackageList:
    """Reinstall every registry crate; announce the local installs left alone."""
    result = executor.run_and_capture(step.list_command)
    if not result.ok:
        logger.debug(
            "%s exited with status %d", step.list_command.display, result.exit_status,
        )

    parsed = parse_cargo_list(result.stdout.decode("utf-8", errors="replace"))

    for name in parsed.skipped:
        click.echo(f"Skipping {name} (local install)")

    for name in parsed.to_update:
        run_all(executor, [step.install_command.with_arguments([name])], mode=RunMode.REQUIRED)

    return parsed
