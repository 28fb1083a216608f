"""Test configuration."""
import json
from collections.abc import Iterator
from typing import Any

import httpx
import pytest

from opsgenie_alerts.config import Settings, get_settings
from opsgenie_alerts.services.client import AlertClient

API_KEY = "test-api-key"
BASE_URL = "https://api.opsgenie.com/v1/json/"


class RecordingTransport(httpx.MockTransport):
    """Mock transport that keeps every request and answers with a canned response."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.status_code = 200
        self.payload: Any = {"status": "successful", "code": 200}
        self.raw: bytes | None = None
        super().__init__(self._handle)

    def respond(self, status_code: int = 200, payload: Any = None, *, raw: bytes | None = None) -> None:
        self.status_code = status_code
        self.payload = payload
        self.raw = raw

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.raw is not None:
            return httpx.Response(self.status_code, content=self.raw)
        return httpx.Response(self.status_code, json=self.payload)

    @property
    def last(self) -> httpx.Request:
        assert self.requests, "no request was sent"
        return self.requests[-1]


def body_of(request: httpx.Request) -> dict[str, Any]:
    return json.loads(request.content)


def query_of(request: httpx.Request) -> dict[str, str]:
    return dict(request.url.params)


@pytest.fixture(autouse=True)
def clear_settings_cache(monkeypatch) -> Iterator[None]:
    for name in ("OPSGENIE_API_KEY", "OPSGENIE_BASE_URL", "OPSGENIE_TIMEOUT_SECONDS", "LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def transport() -> RecordingTransport:
    return RecordingTransport()


@pytest.fixture
def client(transport: RecordingTransport) -> Iterator[AlertClient]:
    settings = Settings(_env_file=None)
    with AlertClient(API_KEY, base_url=BASE_URL, transport=transport, settings=settings) as alert_client:
        yield alert_client
