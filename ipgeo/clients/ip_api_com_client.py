from typing import Any

from ipgeo.clients.base import BaseIPLookupClient
from ipgeo.errors import RequestStatusError, TooManyRequestsError
from ipgeo.models.common import LookupResponse
from ipgeo.models.request_models import Provider

FIELDS = "status,message,continent,country,countryCode,regionName,city,zip,lat,lon,timezone,isp,org,as,reverse,proxy,query"


class IpApiCom(BaseIPLookupClient):
    """Client for the http://ip-api.com JSON API.

    The free endpoint is plain HTTP only; HTTPS requires a paid key.
    """

    provider = Provider.ipapicom

    def __init__(self, key: str | None = None, base_url: str = "http://ip-api.com") -> None:
        super().__init__(key)
        self._base_url = base_url.rstrip("/")

    def endpoint(self, target: str | None = None) -> str:
        return f"{self._base_url}/json/{target or ''}?fields={FIELDS}"

    def _normalize_payload(self, data: dict[str, Any]) -> LookupResponse:
        """Map ip-api.com's response into our normalized schema."""
        self._handle_provider_status(data)

        # "as" looks like "AS15169 Google LLC"; keep only the number part.
        as_field = str(data.get("as") or "")
        asn = as_field.split(" ", 1)[0] or None

        return self._response(
            ip=data["query"],
            continent=data.get("continent"),
            country=data.get("country"),
            country_code=data.get("countryCode"),
            region=data.get("regionName") or data.get("region"),
            postal_code=data.get("zip") or None,
            city=data.get("city"),
            latitude=data.get("lat"),
            longitude=data.get("lon"),
            time_zone=data.get("timezone"),
            asn=asn,
            asn_org=data.get("isp") or data.get("org"),
            hostname=data.get("reverse") or None,
            is_proxy=data.get("proxy"),
        )

    def _handle_provider_status(self, data: dict[str, Any]) -> None:
        """Normalize ip-api.com status/message into domain exceptions."""
        status_value = str(data.get("status") or "").lower()

        if status_value == "success":
            return

        # status is "fail" or unknown
        message = str(data.get("message") or "Unknown error from ip-api.com")
        lower_msg = message.lower()

        if "quota" in lower_msg or "limit" in lower_msg:
            raise TooManyRequestsError(f"IP provider rate limit or quota exceeded: {message}")

        raise RequestStatusError(message)
