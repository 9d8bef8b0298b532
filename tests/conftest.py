"""Pytest shared fixtures."""
import json
import pathlib
import sys

# Add project root to Python path
ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import pytest
import requests

PLATFORM_ENV_VARS = (
    "PLATFORM_API_HOSTNAME",
    "PLATFORM_API_CLUSTER",
    "PLATFORM_API_TENANT",
    "SCOPE",
    "CLIENT_ID",
    "CLIENT_SECRET",
    "DYNNS_TOKEN_URL",
    "DYNNS_REQUEST_TIMEOUT",
    "DYNNS_LOG_LEVEL",
)


class StubResponse:
    def __init__(self, payload=None, status_code: int = 200, text: str | None = None, url: str = ""):
        self._payload = payload
        self.status_code = status_code
        self.text = text if text is not None else json.dumps(payload)
        self.url = url

    def json(self):
        if self._payload is None:
            raise ValueError("No JSON object could be decoded")
        return self._payload


# ─────────────────────────────────────────────────────────────────────────────
# Network Guard Rails
# ─────────────────────────────────────────────────────────────────────────────
@pytest.fixture(autouse=True)
def _block_network(monkeypatch):
    """Fail loudly if a test reaches the network without stubbing requests.post."""

    def _unexpected_post(url, *args, **kwargs):
        raise RuntimeError(f"Unexpected HTTP POST in unit test: {url}")

    monkeypatch.setattr(requests, "post", _unexpected_post)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    """Every test starts without Platform API configuration in the environment."""
    for name in PLATFORM_ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture()
def platform_env(monkeypatch):
    """Complete environment for a real (stubbed) namespace request."""
    values = {
        "PLATFORM_API_HOSTNAME": "platform.example.com",
        "PLATFORM_API_CLUSTER": "eu-west-1",
        "PLATFORM_API_TENANT": "example.onmicrosoft.com",
        "SCOPE": "api://platform/.default",
        "CLIENT_ID": "client-id",
        "CLIENT_SECRET": "client-secret",
    }
    for name, value in values.items():
        monkeypatch.setenv(name, value)
    return values


@pytest.fixture()
def stub_platform(monkeypatch):
    """Stub token and namespace endpoints, recording every POST."""
    calls = []
    responses = {
        "token": StubResponse({"token_type": "Bearer", "access_token": "test-token", "expires_in": 3599}),
        "namespace": StubResponse(
            {"message": "created", "namespace": "foo-bar", "expiry": "2026-10-20T12:00:00Z"},
            status_code=201,
        ),
    }

    def _stub_post(url, *args, **kwargs):
        calls.append({"url": url, **kwargs})
        if url.endswith("/oauth2/v2.0/token"):
            return responses["token"]
        if url.endswith("/namespace"):
            return responses["namespace"]
        raise RuntimeError(f"Unexpected HTTP POST in unit test: {url}")

    monkeypatch.setattr(requests, "post", _stub_post)
    return {"calls": calls, "responses": responses}
