"""
Shared test fixtures for the railtrack test suite.

Settings are cached process-wide, so every test starts from a clean cache
and an environment without RAILTRACK_ variables.
"""

from __future__ import annotations

import os

import pytest

from railtrack.config import reset_settings


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch: pytest.MonkeyPatch, tmp_path):
    """Isolate settings from the developer's environment and .env file."""
    for key in list(os.environ):
        if key.startswith("RAILTRACK_"):
            monkeypatch.delenv(key)
    monkeypatch.chdir(tmp_path)
    reset_settings()
    yield
    reset_settings()


@pytest.fixture()
def call_counter():
    """A function that records every argument it is called with."""

    class Counter:
        def __init__(self) -> None:
            self.calls: list = []

        def __call__(self, value):
            self.calls.append(value)
            return value

    return Counter()
