"""Pytest configuration and shared fixtures for yuihub-client-core tests."""

import logging

import httpx
import pytest

from yuihub_client_core.auth import CredentialResolver, InMemorySecretStore
from yuihub_client_core.config import Settings
from yuihub_client_core.testing import TEST_BASE_URL


@pytest.fixture(autouse=True)
def clear_env(monkeypatch):
    """Auto-cleanup: Clear YuiHub environment variables before each test.

    This prevents test pollution when testing settings resolution.
    """
    import os

    for key in list(os.environ.keys()):
        if key.startswith("YUIHUB_"):
            monkeypatch.delenv(key, raising=False)

    yield


@pytest.fixture
def settings():
    return Settings(api_base_url=TEST_BASE_URL, request_timeout_ms=1000)


@pytest.fixture
def secret_store():
    return InMemorySecretStore()


@pytest.fixture
def credentials():
    return CredentialResolver(fallback="abc123")


@pytest.fixture
def ok_response():
    return httpx.Response(200, json={"ok": True, "version": "1.2.3", "environment": "test"})


@pytest.fixture
def http_logs(caplog):
    """Capture everything written to the HTTP diagnostic logger."""
    caplog.set_level(logging.DEBUG, logger="yuihub_client_core")
    return caplog
