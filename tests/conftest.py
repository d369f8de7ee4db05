"""
Shared pytest fixtures for radar-spine tests.

This module provides:
- A recording renderer that keeps every render command
- Stub sheet reader / identity provider with scripted outcomes
- Sample tables in both named and positional shape
- Settings cache isolation
"""

import sys
from pathlib import Path

import pytest

# Ensure radar_spine and tests._support are importable
ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(ROOT / "src"))
sys.path.insert(0, str(ROOT))

from radar_spine.core import settings as settings_module
from radar_spine.core.errors import ForbiddenError, LoginError, SheetNotFoundError, SourceError
from radar_spine.core.result import Err
from radar_spine.render import Display

from tests._support.stubs import RecordingRenderer, named_table, positional_table


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch):
    """Keep RADAR_* environment and the settings cache out of tests."""
    import os

    for key in list(os.environ):
        if key.startswith("RADAR_"):
            monkeypatch.delenv(key)
    monkeypatch.setattr(settings_module, "_settings_cache", None)
    yield
    settings_module._settings_cache = None


@pytest.fixture
def renderer() -> RecordingRenderer:
    return RecordingRenderer()


@pytest.fixture
def display(renderer) -> Display:
    return Display(renderer)


@pytest.fixture
def not_found() -> Err:
    return Err(SheetNotFoundError("Oops! We can't find the Google Sheet you've entered. Can you check the URL?"))


@pytest.fixture
def forbidden() -> Err:
    return Err(ForbiddenError("UNAUTHORIZED"))


@pytest.fixture
def upstream_error() -> Err:
    return Err(SourceError("Upstream returned HTTP 500"))


@pytest.fixture
def login_error() -> Err:
    return Err(LoginError("Login failed"))


@pytest.fixture
def make_named_table():
    return named_table


@pytest.fixture
def make_positional_table():
    return positional_table
