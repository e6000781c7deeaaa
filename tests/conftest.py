"""
Shared pytest fixtures for the diff engine tests.

Provides:
  - a clean settings cache per test (env overrides never leak)
  - small text builders for numbered-line files
"""
from __future__ import annotations

import os

import pytest

from semdiff.config.settings import get_settings


@pytest.fixture(autouse=True)
def _fresh_settings(monkeypatch):
    """Drop cached settings and any SEMDIFF_ env vars around every test."""
    for key in list(os.environ):
        if key.startswith("SEMDIFF_"):
            monkeypatch.delenv(key)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def numbered(count: int, start: int = 1, prefix: str = "line") -> list[str]:
    """['line1', 'line2', ...]"""
    return [f"{prefix}{i}" for i in range(start, start + count)]


@pytest.fixture()
def numbered_text():
    def _build(count: int, replace: dict[int, str] | None = None) -> str:
        lines = numbered(count)
        for index, text in (replace or {}).items():
            lines[index] = text
        return "\n".join(lines)

    return _build
