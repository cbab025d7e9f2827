"""
Shared test fixtures and configuration.
"""

from __future__ import annotations

import logging

import pytest

from tests.fakes import ALL_TOOLS, FakeProbe
from toolplane.core.config.resolver import resolve
from toolplane.core.data.defaults import default_layer
from toolplane.core.data.tools import REQUIRED_TOOLS
from toolplane.core.models.config import ResolvedConfig
from toolplane.core.models.tool import DependencySet
from toolplane.core.services.dependencies import build_dependency_set


@pytest.fixture
def defaults() -> dict:
    """Compiled-in defaults with a fixed login shell."""
    return default_layer({"SHELL": "/bin/bash"})


@pytest.fixture
def config(defaults: dict) -> ResolvedConfig:
    """Defaults-only resolved config."""
    return resolve(defaults)


@pytest.fixture
def probe_all() -> FakeProbe:
    return FakeProbe(ALL_TOOLS)


@pytest.fixture
def probe_none() -> FakeProbe:
    return FakeProbe({})


@pytest.fixture
def deps_all(probe_all: FakeProbe) -> DependencySet:
    return build_dependency_set(REQUIRED_TOOLS, probe_all)


@pytest.fixture
def deps_none(probe_none: FakeProbe) -> DependencySet:
    return build_dependency_set(REQUIRED_TOOLS, probe_none)


@pytest.fixture(autouse=True)
def _restore_logging():
    """Undo root-logger changes made by setup_logging (CLI runs)."""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
