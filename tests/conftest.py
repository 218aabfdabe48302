"""Pytest fixtures for n8n MCP Server tests."""

import pytest
from unittest.mock import AsyncMock, MagicMock

TEST_N8N_URL = "http://n8n.test:5678"


@pytest.fixture(autouse=True)
def reset_settings(monkeypatch):
    """Reset settings before each test."""
    from n8n_mcp.config import reload_settings

    monkeypatch.setenv("N8N_URL", TEST_N8N_URL)
    monkeypatch.setenv("N8N_API_KEY", "test-api-key")
    monkeypatch.setenv("MCP_LOG_LEVEL", "DEBUG")
    reload_settings()
    yield


@pytest.fixture(autouse=True)
def reset_shared_client():
    """Make sure no test leaks a shared n8n client into the next one."""
    from n8n_mcp.mcp_tools.n8n.client import set_client

    set_client(None)
    yield
    set_client(None)


@pytest.fixture
def mock_client():
    """Mocked N8nClient with async verb helpers."""
    client = MagicMock()
    client.base_url = TEST_N8N_URL
    client.get = AsyncMock(return_value={})
    client.post = AsyncMock(return_value={})
    client.patch = AsyncMock(return_value={})
    client.delete = AsyncMock(return_value=None)
    return client
