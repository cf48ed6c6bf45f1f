"""
Platform detection — which OS, and on Linux which distribution.

The OS comes from ``platform.system()``; the distribution from the
``ID`` field of ``/etc/os-release``. Both can be passed in directly,
which is how the tests drive this module.
"""

from __future__ import annotations

import logging
import platform as _platform
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

OS_RELEASE_PATH = Path("/etc/os-release")

_SYSTEM_NAMES = {
    "Linux": "linux",
    "Darwin": "macos",
}


class DetectionError(Exception):
    """The OS or distribution could not be determined, or is not supported."""


@dataclass(frozen=True)
class PlatformInfo:
    """Normalized platform identifiers."""

    platform: str
    distribution: str | None = None

    def to_dict(self) -> dict:
        return {"platform": self.platform, "distribution": self.distribution}


def normalize_system(system: str) -> str:
    """``Linux`` → ``linux``, ``Darwin`` → ``macos``, anything else lowercased."""
    return _SYSTEM_NAMES.get(system, system.lower())


def read_os_release(path: Path = OS_RELEASE_PATH) -> dict[str, str]:
    """Parse an os-release file into a dict.

    Blank lines and ``#`` comments are ignored; surrounding quotes are
    stripped from values. Bytes that are not valid UTF-8 are replaced.

    Raises:
        OSError: The file could not be read.
    """
    fields: dict[str, str] = {}
    for raw in path.read_text(encoding="utf-8", errors="replace").splitlines():
        line = raw.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, value = line.split("=", 1)
        fields[key.strip()] = value.strip().strip('"').strip("'")
    return fields


def detect_distribution(path: Path = OS_RELEASE_PATH) -> str:
    """Return the distribution ``ID`` (e.g. ``ubuntu``, ``arch``).

    Raises:
        DetectionError: The file is missing or has no ``ID``.
    """
    try:
        fields = read_os_release(path)
    except OSError as e:
        logger.debug("Cannot read %s: %s", path, e)
        raise DetectionError("not sure what OS this is") from e

    distribution = fields.get("ID", "")
    if not distribution:
        raise DetectionError("not sure what OS this is")
    return distribution


def detect_platform(
    system: str | None = None,
    os_release: Path = OS_RELEASE_PATH,
) -> PlatformInfo:
    """Detect the current platform.

    Args:
        system: Override for ``platform.system()``.
        os_release: os-release file to read on Linux.

    Raises:
        DetectionError: Linux without a usable distribution ``ID``.
    """
    name = normalize_system(system if system is not None else _platform.system())

    if name != "linux":
        logger.info("Detected platform: %s", name)
        return PlatformInfo(platform=name)

    distribution = detect_distribution(os_release)
    logger.info("Detected platform: linux/%s", distribution)
    return PlatformInfo(platform=name, distribution=distribution)
