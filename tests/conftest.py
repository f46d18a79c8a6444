"""
Shared fixtures for the Orderdesk test suite.
"""

import pytest

from orderdesk.core.config import ENV_OVERRIDES, reset_config
from orderdesk.store.client import StoreError


@pytest.fixture(autouse=True)
def clean_config(monkeypatch, tmp_path):
    """Isolate every test from the developer's config.yaml and environment."""
    for env_name in ENV_OVERRIDES.values():
        monkeypatch.delenv(env_name, raising=False)
    monkeypatch.setenv("ORDERDESK_CONFIG", str(tmp_path / "missing.yaml"))
    monkeypatch.setenv("ORDERDESK_LOG_FILE", str(tmp_path / "orderdesk.log"))
    reset_config()
    yield
    reset_config()


@pytest.fixture
def store_env(monkeypatch):
    """Complete environment for building the store client and API."""
    monkeypatch.setenv("SANITY_PROJECT_ID", "abc123")
    monkeypatch.setenv("SANITY_DATASET", "production")
    monkeypatch.setenv("SANITY_API_TOKEN", "sk-test")
    monkeypatch.setenv("ORDERDESK_ADMIN_TOKEN", "admin-secret")


@pytest.fixture
def store_error():
    return StoreError("Request timed out")
