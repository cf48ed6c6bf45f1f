"""
Response chainer — a probe whose output parameterizes a follow-up.

This is the orphan-removal pattern: ``pacman -Qtdq`` prints one
orphaned package per line; those names are appended to
``pacman -Rns`` and only then is the removal run. If the probe prints
nothing, the follow-up never runs (``pacman -Rns`` with no targets is
an error, not a no-op).
"""

from __future__ import annotations

import logging

from sysup.adapters.base import Executor
from sysup.core.engine.sequencer import RunMode, run_all
from sysup.core.models.command import CommandSpec

logger = logging.getLogger(__name__)


def parse_orphan_packages(stdout: bytes) -> list[str]:
    """Decode probe output and return its non-empty lines, in order.

    Invalid UTF-8 is replaced rather than rejected. Names are not
    otherwise interpreted.
    """
    text = stdout.decode("utf-8", errors="replace")
    return [line for line in text.splitlines() if line]


def run_chained(executor: Executor, probe: CommandSpec, follow_up: CommandSpec) -> None:
    """Run ``probe``, then ``follow_up`` with the probe's output lines appended.

    Raises:
        CommandError: The probe or the follow-up could not be run.
    """
    result = executor.run_and_capture(probe)
    tokens = parse_orphan_packages(result.stdout)

    if not tokens:
        logger.info("%s reported nothing, skipping %s", probe.display, follow_up.program)
        return

    logger.info("%s reported %d item(s)", probe.display, len(tokens))
    run_all(executor, [follow_up.with_arguments(tokens)], mode=RunMode.REQUIRED)
