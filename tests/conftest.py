"""
Shared test fixtures and configuration.
"""

import logging
from pathlib import Path

import pytest

from sysup.adapters.mock import MockExecutor


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path: Path, monkeypatch) -> Path:
    """Keep the user's real settings file and env out of every test."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.delenv("SYSUP_CONFIG", raising=False)
    monkeypatch.delenv("SYSUP_LOG_LEVEL", raising=False)
    monkeypatch.delenv("SYSUP_LOG_FILE", raising=False)
    monkeypatch.delenv("SYSUP_LOG_FILE_LEVEL", raising=False)
    return home


@pytest.fixture
def executor() -> MockExecutor:
    """A fresh scriptable executor."""
    return MockExecutor()


@pytest.fixture
def make_os_release(tmp_path: Path):
    """Write an os-release file with the given ID and return its path."""

    def _make(distribution: str | None) -> Path:
        lines = ['NAME="Test Linux"', 'PRETTY_NAME="Test Linux"']
        if distribution is not None:
            lines.append(f"ID={distribution}")
        path = tmp_path / "os-release"
        path.write_text("\n".join(lines) + "\n")
        return path

    return _make


@pytest.fixture(autouse=True)
def restore_root_logger():
    """Undo whatever setup_logging did to the root logger."""
    root = logging.getLogger()
    level = root.level
    yield
    for handler in root.handlers:
        if isinstance(handler, logging.FileHandler):
            handler.close()
    root.handlers.clear()
    root.setLevel(level)
