from typing import Any

from ipgeo.clients.base import BaseIPLookupClient
from ipgeo.errors import RequestStatusError, TooManyRequestsError
from ipgeo.models.common import LookupResponse
from ipgeo.models.request_models import Provider


class IpApiCo(BaseIPLookupClient):
    """Client for the https://ipapi.co/ IP geolocation API."""

    provider = Provider.ipapico

    def __init__(self, key: str | None = None, base_url: str = "https://ipapi.co") -> None:
        super().__init__(key)
        self._base_url = base_url.rstrip("/")

    def endpoint(self, target: str | None = None) -> str:
        if target:
            return f"{self._base_url}/{target}/json/"
        return f"{self._base_url}/json/"

    def _normalize_payload(self, data: dict[str, Any]) -> LookupResponse:
        """Map ipapi.co's response into our normalized schema.

        Latitude/longitude are passed through as-is; the LookupResponse
        model is responsible for coercing them into floats via field validators.
        """
        self._handle_provider_error(data)
        return self._response(
            ip=data["ip"],
            country=data.get("country_name"),
            country_code=data.get("country_code") or data.get("country"),
            region=data.get("region"),
            postal_code=data.get("postal"),
            city=data.get("city"),
            latitude=data.get("latitude"),
            longitude=data.get("longitude"),
            time_zone=data.get("timezone"),
            asn=data.get("asn"),
            # ipapi.co exposes organisation/ISP information via the "org" field.
            asn_org=data.get("org"),
        )

    def _handle_provider_error(self, data: dict[str, Any]) -> None:
        """Normalize provider-specific error payloads into domain exceptions.

        ipapi.co embeds error information in the JSON body, sometimes with HTTP 200.
        Examples:
            { "error": true, "reason": "Reserved IP Address", "ip": "127.0.0.1", "reserved": true }
            { "error": true, "reason": "RateLimited", "message": "..." }
            { "error": true, "reason": "Quota exceeded", "message": "..." }
        """
        if not data.get("error"):
            return

        reason = str(data.get("reason") or data.get("message") or "Unknown error from ipapi.co")
        lower_reason = reason.lower()

        if "ratelimited" in lower_reason or "quota" in lower_reason:
            raise TooManyRequestsError(f"IP provider rate limit or quota exceeded: {reason}")

        raise RequestStatusError(reason)
