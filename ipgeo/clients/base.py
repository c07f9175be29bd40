import json
from abc import ABC, abstractmethod
from typing import Any

import httpx
from pydantic import ValidationError

from ipgeo.errors import ParseError
from ipgeo.models.common import LookupResponse
from ipgeo.models.request_models import Provider, ProviderKind


class BaseIPLookupClient(ABC):
    """Abstract base for all IP geolocation provider adapters.

    Concrete implementations build the provider endpoint and map the
    provider-specific JSON reply into the normalized LookupResponse shape.
    The LookupService performs the actual round-trip and status handling.
    """

    provider: Provider

    def __init__(self, key: str | None = None) -> None:
        self._key = key

    def kind(self) -> ProviderKind:
        """Return the provider kind this adapter was built for."""
        return ProviderKind(name=self.provider, key=self._key)

    def supports_target(self) -> bool:
        """Whether the provider can look up an arbitrary IP, not just the caller's."""
        return True

    @abstractmethod
    def endpoint(self, target: str | None = None) -> str:
        """Build the request URL, for the caller's own IP when target is None."""
        raise NotImplementedError

    def headers(self) -> dict[str, str]:
        return {"Accept": "application/json"}

    def send(self, client: httpx.Client, url: str) -> httpx.Response:
        """Issue the GET request; overridden by adapters that never hit the network."""
        return client.get(url, headers=self.headers())

    def parse(self, body: str) -> LookupResponse:
        """Parse the raw response body into a LookupResponse.

        Malformed JSON, an unexpected top-level shape, or a payload that fails
        model validation are all reported as ParseError.
        """
        data = self._parse_json(body)
        try:
            return self._normalize_payload(data)
        except (ValidationError, KeyError, TypeError, ValueError, AttributeError) as exc:
            raise ParseError(f"Unexpected {self.provider.value} response shape: {exc}") from exc

    @abstractmethod
    def _normalize_payload(self, data: dict[str, Any]) -> LookupResponse:
        """Map the provider's response into our normalized schema."""
        raise NotImplementedError

    def _parse_json(self, body: str) -> dict[str, Any]:
        try:
            data = json.loads(body)
        except ValueError as exc:
            raise ParseError(f"Failed to decode {self.provider.value} response as JSON: {exc}") from exc
        if not isinstance(data, dict):
            raise ParseError(f"Expected a JSON object from {self.provider.value}, got {type(data).__name__}")
        return data

    def _response(self, **fields: Any) -> LookupResponse:
        """Build a LookupResponse tagged with this adapter's kind."""
        return LookupResponse(provider=self.kind(), **fields)
