"""Root pytest configuration and shared fixtures."""

from __future__ import annotations

import sys

import pytest

from tests.helpers.fake_process_table import FakeProcessTable
from tests.helpers.fake_registry import FakeRegistryStore
from webview_repair.config import runtime as config_runtime

_REPAIR_ENV_VARS = (
    "WEBVIEW_REPAIR_FORCE_CLEAR",
    "WEBVIEW_REPAIR_VERBOSE",
    "WEBVIEW_REPAIR_LOG_FILE",
    "WEBVIEW_REPAIR_REPORT_PATH",
    "WEBVIEW_REPAIR_INSTALLER_DIR",
    "WEBVIEW_REPAIR_INSTALL_ROOT",
    "WEBVIEW_REPAIR_INSTALLER_TIMEOUT_SECONDS",
    "WEBVIEW_REPAIR_EXTRA_PROTECTED",
)


@pytest.fixture(autouse=True)
def _isolated_configuration(monkeypatch):
    """Keep developer .env files and WEBVIEW_REPAIR_* variables out of tests."""
    for name in _REPAIR_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr(config_runtime, "_DEFAULT_VALUES", {})


@pytest.fixture
def fake_registry() -> FakeRegistryStore:
    """Provide an empty in-memory registry store."""
    return FakeRegistryStore()


@pytest.fixture
def process_table(monkeypatch) -> FakeProcessTable:
    """Install a fake psutil module and return its process table."""
    table = FakeProcessTable()
    monkeypatch.setitem(sys.modules, "psutil", table.module)
    return table
