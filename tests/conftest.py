"""
svnwatch Test Configuration.

Pytest fixtures and configuration.
Requires Python 3.11+.
"""

from datetime import datetime
from pathlib import Path

import pytest

from svnwatch.utils.config import get_settings
from tests.fakes import FakeVcs


@pytest.fixture(autouse=True)
def fresh_settings():
    """Settings are re-read from the environment for every test."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def working_copy(tmp_path: Path) -> Path:
    """A directory laid out like a checked-out working copy."""
    wc = tmp_path / "repo"
    wc.mkdir()
    (wc / ".svn").mkdir()
    (wc / "a.txt").write_text("hello\n")
    return wc


@pytest.fixture
def fixed_clock():
    """Clock frozen at 2024-03-05 14:07:09."""
    moment = datetime(2024, 3, 5, 14, 7, 9)
    return lambda: moment


@pytest.fixture
def fake_vcs(working_copy: Path) -> FakeVcs:
    return FakeVcs(working_copy)
