from typing import Any

from ipgeo.clients.base import BaseIPLookupClient
from ipgeo.errors import RequestStatusError, TooManyRequestsError
from ipgeo.models.common import LookupResponse
from ipgeo.models.request_models import Provider


class IpWhoIs(BaseIPLookupClient):
    """Client for the https://ipwho.is JSON API."""

    provider = Provider.ipwhois

    def endpoint(self, target: str | None = None) -> str:
        return f"https://ipwho.is/{target or ''}"

    def _normalize_payload(self, data: dict[str, Any]) -> LookupResponse:
        """Map ipwho.is's response into our normalized schema.

        ipwho.is answers HTTP 200 with `"success": false` on errors.
        """
        if data.get("success") is False:
            message = str(data.get("message") or "Unknown error from ipwho.is")
            if "limit" in message.lower():
                raise TooManyRequestsError(f"IP provider rate limit or quota exceeded: {message}")
            raise RequestStatusError(message)

        connection = data.get("connection") or {}
        timezone = data.get("timezone") or {}
        return self._response(
            ip=data["ip"],
            continent=data.get("continent"),
            country=data.get("country"),
            country_code=data.get("country_code"),
            region=data.get("region"),
            postal_code=data.get("postal"),
            city=data.get("city"),
            latitude=data.get("latitude"),
            longitude=data.get("longitude"),
            time_zone=timezone.get("id"),
            asn=connection.get("asn"),
            asn_org=connection.get("org") or connection.get("isp"),
        )
