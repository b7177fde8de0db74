"""Test configuration shared by the whole suite."""

import os
from collections.abc import Generator
from pathlib import Path

import pytest

from icalbuilder.config import reset_settings


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Generator[None, None, None]:
    """Keep settings from reading the developer's environment or config files."""
    for key in list(os.environ):
        if key.startswith("ICALBUILDER_"):
            monkeypatch.delenv(key)

    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("HOME", str(tmp_path))

    reset_settings()
    yield
    reset_settings()
