"""Pytest configuration and shared fixtures."""

from __future__ import annotations

import os

import pytest

from space_analyzer.core import NavigationController
from fakes import FakeFilesystem, ManualExecutor

# Testy GUI działają bez serwera wyświetlania.
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")


@pytest.fixture
def listing_executor() -> ManualExecutor:
    return ManualExecutor()


@pytest.fixture
def sizing_executor() -> ManualExecutor:
    return ManualExecutor()


@pytest.fixture
def fake_fs() -> FakeFilesystem:
    return FakeFilesystem()


@pytest.fixture
def controller(fake_fs, listing_executor, sizing_executor):
    ctrl = NavigationController(
        lister=fake_fs,
        calculator=fake_fs,
        listing_executor=listing_executor,
        sizing_executor=sizing_executor,
    )
    yield ctrl
    ctrl.close()
