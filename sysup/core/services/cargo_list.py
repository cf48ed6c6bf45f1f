"""
Cargo listing parser — ``cargo install --list`` → update / skip buckets.

The listing looks like::

    bat v0.24.0:
        bat
    dev v1.2.0 (/home/user/src/dev):
        dev

Unindented lines start a crate record; indented lines name that
crate's binaries and are ignored. A record carrying ``(/`` was
installed from a local path and can't be reinstalled from the
registry, so it goes to ``skipped``.
"""

from __future__ import annotations

from sysup.core.models.command import ParsedPackageList

LOCAL_PATH_MARKER = "(/"


def parse_cargo_list(output: str) -> ParsedPackageList:
    """Split a cargo listing into crates to update and local installs to skip.

    Input order is kept. No deduplication, no case folding.
    """
    parsed = ParsedPackageList()

    for line in output.splitlines():
        if line.startswith((" ", "\t")):
            continue

        parts = line.split(maxsplit=1)
        if not parts:
            continue
        name = parts[0]

        if LOCAL_PATH_MARKER in line:
            parsed.skipped.append(name)
        else:
            parsed.to_update.append(name)

    return parsed
