from http import HTTPStatus

import httpx

from ipgeo.clients.base import BaseIPLookupClient
from ipgeo.errors import RequestStatusError, TooManyRequestsError, TransportError
from ipgeo.logger import logger
from ipgeo.models.common import LookupResponse
from ipgeo.models.request_models import ProviderKind
from ipgeo.registry import IpLookupProviderFactory


def handle_response(response: httpx.Response) -> str:
    """Classify the provider's HTTP status, returning the body on 200."""
    status_code = response.status_code

    if status_code == HTTPStatus.OK:
        return response.text

    if status_code == HTTPStatus.TOO_MANY_REQUESTS:
        raise TooManyRequestsError("IP provider rate limit or quota exceeded (HTTP 429).")

    raise RequestStatusError(f"IP provider returned HTTP {status_code}", status_code=status_code)


class LookupService:
    """Performs a single round-trip against one provider adapter."""

    def __init__(self, provider: BaseIPLookupClient, timeout_seconds: float = 5.0) -> None:
        self._provider = provider
        self._timeout_seconds = timeout_seconds

    def set_provider(self, kind: ProviderKind) -> "LookupService":
        """Swap the adapter for the one built from `kind`."""
        self._provider = IpLookupProviderFactory()(kind)
        return self

    def provider_type(self) -> ProviderKind:
        return self._provider.kind()

    def make_request(self, target_ip: str | None = None) -> LookupResponse:
        """Request and parse one lookup.

        Adapters that cannot look up a third-party address silently perform a
        self lookup instead.
        """
        if target_ip and not self._provider.supports_target():
            logger.debug(f"Provider ignores target lookups provider={self._provider.provider.value} ip={target_ip}")
            target_ip = None

        url = self._provider.endpoint(target_ip)
        try:
            with httpx.Client(timeout=self._timeout_seconds) as client:
                response = self._provider.send(client, url)
        except httpx.RequestError as exc:
            raise TransportError(f"Request to IP provider failed: {repr(exc)}") from exc

        body = handle_response(response)
        return self._provider.parse(body)
