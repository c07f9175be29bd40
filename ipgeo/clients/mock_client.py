import json
from typing import Any

import httpx

from ipgeo.clients.base import BaseIPLookupClient
from ipgeo.models.common import LookupResponse
from ipgeo.models.request_models import Provider


class Mock(BaseIPLookupClient):
    """Offline provider that reports a fixed address, used for testing and demos.

    The kind's key holds the address to report. No network traffic is made.
    """

    provider = Provider.mock

    def supports_target(self) -> bool:
        return False

    def endpoint(self, target: str | None = None) -> str:
        return f"mock://{self._key or ''}"

    def send(self, client: httpx.Client, url: str) -> httpx.Response:
        body = json.dumps({"ip": self._key or ""})
        return httpx.Response(200, text=body)

    def _normalize_payload(self, data: dict[str, Any]) -> LookupResponse:
        return self._response(ip=data["ip"])
