"""Pytest configuration and fixtures."""

from __future__ import annotations

import logging
import os
import sys

from pathlib import Path
from typing import TYPE_CHECKING

import pytest


if TYPE_CHECKING:
    from collections.abc import Generator


# Add headgrid to path for imports
headgrid_path = Path(__file__).parent.parent / "headgrid"
if str(headgrid_path) not in sys.path:
    sys.path.insert(0, str(headgrid_path.parent))


@pytest.fixture(autouse=True)
def isolated_config(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> Generator[Path, None, None]:
    """Run every test away from real config files and HEADGRID_* variables.

    The working directory and home directory both point at a fresh
    temporary directory, so no pyproject.toml, headgrid.toml or user config
    leaks into the settings under test.
    """
    from headgrid.config import clear_settings

    for name in list(os.environ):
        if name.upper().startswith("HEADGRID"):
            monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.setenv("APPDATA", str(tmp_path))
    monkeypatch.chdir(tmp_path)

    clear_settings()
    yield tmp_path
    clear_settings()


@pytest.fixture(autouse=True)
def reset_logger() -> Generator[None, None, None]:
    """Restore the headgrid logger level after each test."""
    from headgrid.log import DEFAULT_FORMAT, get_logger

    yield
    logger = get_logger()
    logger.setLevel(logging.WARNING)
    for handler in logger.handlers:
        handler.setFormatter(logging.Formatter(DEFAULT_FORMAT))
