"""
Update use case — detect, plan, run.

The full vertical slice from "update my machine" to processes: detect
the platform, load settings, build the plan, then hand it to the
engine. Detection and settings problems surface before any command
runs. Errors come back in the result, never as exceptions, so the CLI
owns exit codes and formatting.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from sysup.adapters.base import CommandError, Executor
from sysup.adapters.shell.command import SubprocessExecutor
from sysup.core.config.loader import ConfigError, load_settings
from sysup.core.engine.runner import execute_plan
from sysup.core.models.plan import UpdatePlan
from sysup.core.services.detection import (
    OS_RELEASE_PATH,
    DetectionError,
    PlatformInfo,
    detect_platform,
)
from sysup.core.services.plans import build_plan

logger = logging.getLogger(__name__)


@dataclass
class UpdateResult:
    """Outcome of planning (and, for ``run_update``, running) an update."""

    platform: PlatformInfo | None = None
    plan: UpdatePlan | None = None
    executed: bool = False
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def to_dict(self) -> dict:
        result: dict = {}
        if self.error:
            result["error"] = self.error
            return result

        if self.platform:
            result["platform"] = self.platform.to_dict()
        if self.plan:
            result["plan"] = self.plan.to_dict()
        result["executed"] = self.executed
        return result


def plan_update(
    config_path: Path | None = None,
    system: str | None = None,
    os_release: Path = OS_RELEASE_PATH,
) -> UpdateResult:
    """Detect the platform and build its plan without running anything.

    Args:
        config_path: Optional explicit settings file.
        system: Override for ``platform.system()``.
        os_release: os-release file to read on Linux.
    """
    result = UpdateResult()

    try:
        result.platform = detect_platform(system=system, os_release=os_release)
        settings = load_settings(config_path)
        result.plan = build_plan(
            result.platform.platform,
            result.platform.distribution,
            settings,
        )
    except (DetectionError, ConfigError) as e:
        result.error = str(e)

    return result


def run_update(
    config_path: Path | None = None,
    executor: Executor | None = None,
    system: str | None = None,
    os_release: Path = OS_RELEASE_PATH,
) -> UpdateResult:
    """Detect, plan and execute the update.

    Args:
        config_path: Optional explicit settings file.
        executor: Process executor; a real SubprocessExecutor by default.
        system: Override for ``platform.system()``.
        os_release: os-release file to read on Linux.

    Returns:
        UpdateResult; ``error`` is set if detection, settings or a
        required command failed.
    """
    result = plan_update(config_path=config_path, system=system, os_release=os_release)
    if result.error:
        return result

    assert result.plan is not None
    executor = executor or SubprocessExecutor()

    try:
        execute_plan(result.plan, executor)
    except CommandError as e:
        logger.debug("Required command failed", exc_info=True)
        result.error = f"{e.spec.display.strip()} failed: {e.detail or e}"
        return result

    result.executed = True
    return result
