from typing import Any

from ipgeo.clients.base import BaseIPLookupClient
from ipgeo.models.common import LookupResponse
from ipgeo.models.request_models import Provider


class FreeIpApi(BaseIPLookupClient):
    """Client for the https://freeipapi.com JSON API."""

    provider = Provider.freeipapi

    def endpoint(self, target: str | None = None) -> str:
        return f"https://freeipapi.com/api/json/{target or ''}"

    def _normalize_payload(self, data: dict[str, Any]) -> LookupResponse:
        return self._response(
            ip=data["ipAddress"],
            continent=data.get("continent"),
            country=data.get("countryName"),
            country_code=data.get("countryCode"),
            region=data.get("regionName"),
            # freeipapi reports "-" for unknown postal codes.
            postal_code=data.get("zipCode") if data.get("zipCode") not in (None, "", "-") else None,
            city=data.get("cityName"),
            latitude=data.get("latitude"),
            longitude=data.get("longitude"),
            time_zone=data.get("timeZone"),
            is_proxy=data.get("isProxy"),
        )
