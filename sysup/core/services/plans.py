"""
Update plans — which commands run on which platform.

Plans are pure data. ``build_plan`` looks the distribution up in a
table of family builders, appends the steps every platform shares,
and drops whatever the settings ask to skip. No process is started
here.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from sysup.core.config.loader import Settings
from sysup.core.models.command import CommandSpec
from sysup.core.models.plan import (
    BestEffortStep,
    CargoStep,
    ChainedStep,
    PlainStep,
    Step,
    UpdatePlan,
)
from sysup.core.services.detection import DetectionError

logger = logging.getLogger(__name__)


# ── Platform families ───────────────────────────────────────────


def debian_steps(settings: Settings) -> list[Step]:
    return [
        PlainStep(
            id="apt",
            commands=[
                CommandSpec.of("sudo", "apt-get", "update"),
                CommandSpec.of(
                    "sudo", "apt-get", "upgrade", "-y",
                    "--allow-downgrades", "--with-new-pkgs",
                ),
                CommandSpec.of("sudo", "apt-get", "autoremove", "-y"),
            ],
        ),
    ]


def arch_steps(settings: Settings) -> list[Step]:
    steps: list[Step] = [
        PlainStep(
            id="pacman",
            commands=[
                CommandSpec.of("sudo", "pacman", "--noconfirm", "-S", "archlinux-keyring"),
                CommandSpec.of("sudo", "pacman", "--noconfirm", "-Syu"),
            ],
        ),
    ]
    if settings.aur:
        steps.append(
            PlainStep(id="yay", commands=[CommandSpec.of("yay", "--noconfirm", "-Syu")]),
        )

    steps.append(
        ChainedStep(
            id="pacman-orphans",
            probe=CommandSpec.of("pacman", "-Qtdq"),
            follow_up=CommandSpec.of("sudo", "pacman", "--noconfirm", "-Rns"),
        ),
    )
    if settings.aur:
        steps.append(
            ChainedStep(
                id="yay-orphans",
                probe=CommandSpec.of("yay", "-Qtdq"),
                follow_up=CommandSpec.of("yay", "--noconfirm", "-Rns"),
            ),
        )
    return steps


def macos_steps(settings: Settings) -> list[Step]:
    return [
        PlainStep(
            id="brew",
            commands=[
                CommandSpec.of("brew", "update"),
                CommandSpec.of("brew", "upgrade"),
                CommandSpec.of("brew", "cleanup"),
            ],
        ),
    ]


def common_steps(settings: Settings) -> list[Step]:
    """Steps run on every platform, after the platform-specific ones."""
    return [
        BestEffortStep(
            id="rustup",
            command=CommandSpec.of("rustup", "update"),
            description="update the Rust toolchain",
        ),
        PlainStep(
            id="nvim",
            commands=[CommandSpec.of("nvim", "--headless", "+Lazy! sync", "+qa")],
        ),
        CargoStep(
            id="cargo",
            list_command=CommandSpec.of("cargo", "install", "--list"),
            install_command=CommandSpec.of("cargo", "install"),
        ),
    ]


StepBuilder = Callable[[Settings], list[Step]]

LINUX_DISTRIBUTIONS: dict[str, StepBuilder] = {
    "ubuntu": debian_steps,
    "pop": debian_steps,
    "arch": arch_steps,
    "endeavouros": arch_steps,
}

PLATFORMS: dict[str, StepBuilder] = {
    "macos": macos_steps,
}


def platform_steps(platform: str, distribution: str | None, settings: Settings) -> list[Step]:
    """Platform-specific steps, before the common tail.

    Raises:
        DetectionError: Linux with a missing or unsupported distribution.
    """
    if platform == "linux":
        if not distribution:
            raise DetectionError("not sure what OS this is")
        builder = LINUX_DISTRIBUTIONS.get(distribution)
        if builder is None:
            raise DetectionError(f"not sure what OS this is: {distribution}")
        return builder(settings)

    builder = PLATFORMS.get(platform)
    if builder is None:
        logger.info("No platform-specific steps for %s", platform)
        return []
    return builder(settings)


def build_plan(
    platform: str,
    distribution: str | None = None,
    settings: Settings | None = None,
) -> UpdatePlan:
    """Assemble the update plan for a platform.

    Args:
        platform: Normalized OS name (``linux``, ``macos``, ...).
        distribution: Linux distribution ``ID``; ignored elsewhere.
        settings: User settings; defaults apply when omitted.

    Raises:
        DetectionError: Linux with a missing or unsupported distribution.
    """
    settings = settings or Settings()

    steps = platform_steps(platform, distribution, settings) + common_steps(settings)

    skip = set(settings.skip)
    if skip:
        unknown = skip - {s.id for s in steps}
        if unknown:
            logger.warning("Unknown step ids in skip list: %s", ", ".join(sorted(unknown)))
        logger.info("Skipping steps from settings: %s", ", ".join(sorted(skip)))
        steps = [s for s in steps if s.id not in skip]

    return UpdatePlan(platform=platform, distribution=distribution, steps=steps)
