"""Shared pytest fixtures."""

import pytest


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    """Keep KSPACING_* variables from the host out of every test."""
    import os

    for key in list(os.environ):
        if key.startswith("KSPACING_"):
            monkeypatch.delenv(key, raising=False)
