"""
Pytest configuration and fixtures for the clinic sheets client tests.
"""
import json
from typing import Any, Callable

import httpx
import pytest

import env_loader  # noqa: F401  (loads .env before clean_env strips it)
from sheets_client import SheetsClient, WebAppEndpoint, reset_sheets_client

WEB_APP_URL = "https://script.google.com/macros/s/test-deploy-id/exec"

_ENV_VARS = (
    "APPS_SCRIPT_WEB_APP_URL",
    "SHEETS_SIMULATE",
    "SHEETS_REQUEST_TIMEOUT",
    "MCP_ALLOWED_HOSTS",
)


# ========== Response Assertion Helpers ==========

class ResponseAssertions:
    """Helper class for asserting response envelopes."""

    @staticmethod
    def assert_success(response: dict) -> dict:
        """Assert response is successful and return it."""
        assert response.get("success") is True, f"Expected success, got: {response}"
        assert isinstance(response.get("message"), str)
        return response

    @staticmethod
    def assert_failure(response: dict, message: str | None = None) -> dict:
        """Assert response is a failure, optionally with an exact message."""
        assert response.get("success") is False, f"Expected failure, got success: {response}"
        if message is not None:
            assert response.get("message") == message, \
                f"Expected message {message!r}, got {response.get('message')!r}"
        return response


@pytest.fixture
def assertions():
    """Fixture providing response assertion helpers."""
    return ResponseAssertions()


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Isolate tests from any .env or shell configuration."""
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    reset_sheets_client()
    yield
    reset_sheets_client()


class RecordingTransport(httpx.MockTransport):
    """MockTransport that keeps every request it sees."""

    def __init__(self, handler: Callable[[httpx.Request], httpx.Response]) -> None:
        self.requests: list[httpx.Request] = []

        def record(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            return handler(request)

        super().__init__(record)

    def last_json(self) -> Any:
        return json.loads(self.requests[-1].content)


@pytest.fixture
def make_client():
    """
    Build a Web App client whose network is answered by `handler`.

    Returns (client, transport).
    """
    def _make(handler: Callable[[httpx.Request], httpx.Response]):
        transport = RecordingTransport(handler)
        client = SheetsClient(WebAppEndpoint(url=WEB_APP_URL), transport=transport)
        return client, transport

    return _make


@pytest.fixture
def sample_rows():
    """Sample patient rows"""
    return [
        ["P001", "Jane Doe", 42, True, None],
        ["P002", "John Roe", 57, False, "hypertension"],
    ]
