from typing import Any

from ipgeo.clients.base import BaseIPLookupClient
from ipgeo.models.common import LookupResponse
from ipgeo.models.request_models import Provider


class IpGeolocation(BaseIPLookupClient):
    """Client for the https://ipgeolocation.io API. Requires an API key."""

    provider = Provider.ipgeolocation

    def endpoint(self, target: str | None = None) -> str:
        url = f"https://api.ipgeolocation.io/ipgeo?apiKey={self._key or ''}"
        if target:
            url += f"&ip={target}"
        return url

    def _normalize_payload(self, data: dict[str, Any]) -> LookupResponse:
        """Map ipgeolocation.io's response into our normalized schema.

        Coordinates are reported as strings.
        """
        timezone = data.get("time_zone") or {}
        return self._response(
            ip=data["ip"],
            continent=data.get("continent_name"),
            country=data.get("country_name"),
            country_code=data.get("country_code2"),
            region=data.get("state_prov"),
            postal_code=data.get("zipcode") or None,
            city=data.get("city"),
            latitude=data.get("latitude"),
            longitude=data.get("longitude"),
            time_zone=timezone.get("name"),
            asn=data.get("asn"),
            asn_org=data.get("organization") or data.get("isp"),
            hostname=data.get("hostname"),
        )
