"""
Shared test fixtures for orchestrator-client tests.
Patches the config module so tests never read the real .env or environment
and never talk to a real orchestrator.
"""

import json
import os
import sys
from unittest.mock import MagicMock, patch

import pytest

# Add project root to path so imports work
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

API_BASE = "http://orchestrator.test:3000"


@pytest.fixture(autouse=True)
def _isolate_config(monkeypatch):
    """Ensure every test starts with a clean config state."""
    from orchestrator_client import config

    monkeypatch.setattr(config, "env", {})
    monkeypatch.setattr(config, "API_URL", API_BASE)
    monkeypatch.setattr(config, "AUTH_USER", "")
    monkeypatch.setattr(config, "AUTH_PASSWORD", "")
    monkeypatch.setattr(config, "HTTP_TIMEOUT_SECONDS", 0)
    monkeypatch.setattr(config, "HTTP_MAX_RESPONSE_BYTES", 5_000_000)
    monkeypatch.setattr(config, "HTTP_LOG_ENABLED", False)


def json_response(body, status=200):
    """Build a context-manager mock standing in for urlopen()'s return value."""
    cm = MagicMock()
    resp = cm.__enter__.return_value
    resp.status = status
    resp.read.return_value = json.dumps(body).encode("utf-8")
    return cm


@pytest.fixture
def mock_urlopen():
    with patch("orchestrator_client.api.urllib.request.urlopen") as m:
        yield m


@pytest.fixture
def respond(mock_urlopen):
    """Make the next request answer with ``body`` (any JSON value)."""

    def _respond(body):
        mock_urlopen.return_value = json_response(body)
        return mock_urlopen

    return _respond
