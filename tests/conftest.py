"""Pytest configuration for test isolation.

The CLI configures the package logger once per process and reads its settings
from environment variables (and from a ``.env`` in the working directory).
Each test gets a clean logger, a scrubbed environment, and a temporary working
directory so a developer's local ``.env`` can't leak into assertions.
"""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

import pytest

from cashflow_trends.config import CONFIG_PATH_ENV
from cashflow_trends.logging_setup import LOG_LEVEL_ENV, reset_logging


@pytest.fixture(autouse=True)
def _isolate_environment(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    for name in (LOG_LEVEL_ENV, CONFIG_PATH_ENV):
        # setenv first so teardown also removes values loaded from a .env file.
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    workdir = tmp_path / "cwd"
    workdir.mkdir()
    monkeypatch.chdir(workdir)
    reset_logging()
    yield
    reset_logging()
