"""
Sequencer — run an ordered list of commands with a banner per command.

Modes:
    REQUIRED    → the first spawn/wait error stops the sequence and
                  propagates; nothing after it runs.
    BEST_EFFORT → errors become warnings on stderr and the sequence
                  carries on; nothing ever propagates.

In both modes a non-zero exit status is not an error; only the
executor's own errors count.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from enum import StrEnum

import click

from sysup.adapters.base import CommandError, Executor, ProgramNotFoundError
from sysup.core.models.command import CommandSpec

logger = logging.getLogger(__name__)

BANNER_RULE = "========================"


class RunMode(StrEnum):
    """How the sequencer reacts to executor errors."""

    REQUIRED = "required"
    BEST_EFFORT = "best_effort"


def print_banner(spec: CommandSpec) -> None:
    """Blank line, rule, ``$ <command>``, rule."""
    click.echo()
    click.echo(BANNER_RULE)
    click.echo(f"$ {spec.display}")
    click.echo(BANNER_RULE)


def run_all(
    executor: Executor,
    specs: Iterable[CommandSpec],
    mode: RunMode | str = RunMode.REQUIRED,
    description: str = "",
) -> None:
    """Run ``specs`` strictly in order, each to completion before the next.

    Args:
        executor: Where the processes come from.
        specs: Commands to run.
        mode: REQUIRED propagates the first CommandError, BEST_EFFORT warns.
        description: What the commands are for, used in BEST_EFFORT warnings.

    Raises:
        CommandError: REQUIRED mode only, from the first failing command.
    """
    mode = RunMode(mode)
    for spec in specs:
        print_banner(spec)

        try:
            status = executor.run_to_completion(spec)
        except ProgramNotFoundError as e:
            if mode == RunMode.REQUIRED:
                raise
            _warn_not_found(spec, description, e)
            continue
        except CommandError as e:
            if mode == RunMode.REQUIRED:
                raise
            _warn_failed(spec, description, e)
            continue

        if status != 0:
            logger.debug("%s exited with status %d, continuing", spec.program, status)


def _warn_not_found(spec: CommandSpec, description: str, error: CommandError) -> None:
    what = f" — skipping: {description}" if description else ""
    click.secho(f"⚠️  {spec.program} not found{what}", fg="yellow", err=True)
    logger.debug("Best-effort command not found: %s (%s)", spec.display, error)


def _warn_failed(spec: CommandSpec, description: str, error: CommandError) -> None:
    what = f" ({description})" if description else ""
    click.secho(f"⚠️  {spec.program} failed{what}: {error}", fg="yellow", err=True)
    logger.debug("Best-effort command failed: %s", spec.display, exc_info=error)
