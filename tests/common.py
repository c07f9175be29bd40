import json
from collections.abc import Callable
from datetime import datetime, timezone
from http import HTTPStatus
from typing import Any

import httpx

from ipgeo.clients.base import BaseIPLookupClient
from ipgeo.models.common import LookupResponse
from ipgeo.models.request_models import Provider, ProviderKind


class MockResponse:
    def __init__(self, status_code: int, payload: Any = None, text: str | None = None) -> None:
        self.status_code = status_code
        self.text = text if text is not None else json.dumps(payload if payload is not None else {})


class MockClient:
    """Minimal context-manager mock for httpx.Client.

    Every requested URL is appended to `requested_urls`.
    """

    def __init__(self, response: MockResponse, requested_urls: list[str] | None = None) -> None:
        self._response = response
        self.requested_urls = requested_urls if requested_urls is not None else []

    def __enter__(self) -> "MockClient":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        return None

    def get(self, url: str, headers: dict[str, str] | None = None) -> MockResponse:
        self.requested_urls.append(url)
        return self._response


class FailingClient:
    """Client that raises a RequestError on enter to simulate network failure.

    The target URL is provided at construction time, so tests for different providers
    can reuse this implementation with different base URLs.
    """

    def __init__(self, url: str, *args: Any, **kwargs: Any) -> None:
        self._url = url

    def __enter__(self) -> "FailingClient":
        request = httpx.Request("GET", self._url)
        raise httpx.ConnectError("Network failure", request=request)

    def __exit__(self, exc_type, exc, tb) -> None:
        return None

    def get(self, url: str, headers: dict[str, str] | None = None) -> MockResponse:
        return MockResponse(status_code=HTTPStatus.OK, payload={})


def make_fake_client(response: MockResponse, requested_urls: list[str] | None = None) -> Callable[..., MockClient]:
    """Factory for a fake httpx.Client returning a fixed response.

    This avoids repeating the same stub definition in every test.
    """

    def _fake_client(*args: Any, **kwargs: Any) -> MockClient:
        return MockClient(response, requested_urls)

    return _fake_client


class ScriptedClient(BaseIPLookupClient):
    """Offline adapter whose single round-trip outcome is fixed by the test.

    `outcome` is either an IP string (HTTP 200 with that address), raw bytes
    (HTTP 200 with that body), an HTTP status code, or an exception raised
    while sending. Every call is recorded
    in the shared `calls` list under `label`.
    """

    provider = Provider.mock

    def __init__(
        self,
        label: str,
        outcome: str | bytes | int | Exception,
        calls: list[str],
        target_support: bool = True,
    ) -> None:
        super().__init__(key=label)
        self._outcome = outcome
        self._calls = calls
        self._target_support = target_support
        self.requested_targets: list[str | None] = []

    def supports_target(self) -> bool:
        return self._target_support

    def endpoint(self, target: str | None = None) -> str:
        self.requested_targets.append(target)
        return f"https://{self._key}.example/{target or ''}"

    def send(self, client: httpx.Client, url: str) -> httpx.Response:
        self._calls.append(self._key or "")
        if isinstance(self._outcome, Exception):
            raise self._outcome
        if isinstance(self._outcome, bytes):
            return httpx.Response(HTTPStatus.OK, content=self._outcome)
        if isinstance(self._outcome, int):
            return httpx.Response(self._outcome, text="error")
        return httpx.Response(HTTPStatus.OK, text=json.dumps({"ip": self._outcome}))

    def _normalize_payload(self, data: dict[str, Any]) -> LookupResponse:
        return self._response(ip=data["ip"])


def make_response(ip: str, label: str = "cached") -> LookupResponse:
    return LookupResponse(
        ip=ip,
        country="Australia",
        country_code="AU",
        city="Sydney",
        latitude=-33.8688,
        longitude=151.2093,
        asn="AS13335",
        asn_org="Cloudflare, Inc.",
        provider=ProviderKind(name=Provider.mock, key=label),
    )


def utc(year: int = 2024, month: int = 4, day: int = 3, hour: int = 12, minute: int = 0, second: int = 0) -> datetime:
    return datetime(year, month, day, hour, minute, second, tzinfo=timezone.utc)
