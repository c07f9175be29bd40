from typing import Any

from ipgeo.clients.base import BaseIPLookupClient
from ipgeo.models.common import LookupResponse
from ipgeo.models.request_models import Provider


class IpLeak(BaseIPLookupClient):
    """Client for the https://ipleak.net JSON API."""

    provider = Provider.ipleak

    def endpoint(self, target: str | None = None) -> str:
        return f"https://ipleak.net/json/{target or ''}"

    def _normalize_payload(self, data: dict[str, Any]) -> LookupResponse:
        return self._response(
            ip=data["ip"],
            continent=data.get("continent_name"),
            country=data.get("country_name"),
            country_code=data.get("country_code"),
            region=data.get("region_name"),
            postal_code=data.get("postal_code"),
            city=data.get("city_name"),
            latitude=data.get("latitude"),
            longitude=data.get("longitude"),
            time_zone=data.get("time_zone"),
            # as_number is numeric here, e.g. 15169.
            asn=data.get("as_number"),
            asn_org=data.get("isp_name"),
            hostname=data.get("reverse") or None,
        )
