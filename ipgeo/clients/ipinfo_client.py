from typing import Any

from ipgeo.clients.base import BaseIPLookupClient
from ipgeo.models.common import LookupResponse
from ipgeo.models.request_models import Provider


class IpInfo(BaseIPLookupClient):
    """Client for the https://ipinfo.io JSON API."""

    provider = Provider.ipinfo

    def endpoint(self, target: str | None = None) -> str:
        if target:
            return f"https://ipinfo.io/{target}/json"
        return "https://ipinfo.io/json"

    def _normalize_payload(self, data: dict[str, Any]) -> LookupResponse:
        """Map ipinfo.io's response into our normalized schema.

        Coordinates come as a single "lat,lon" string and the organisation as
        "AS15169 Google LLC", so both are split here.
        """
        latitude = longitude = None
        loc = data.get("loc")
        if loc and "," in loc:
            latitude, longitude = loc.split(",", 1)

        asn = asn_org = None
        org = data.get("org")
        if org:
            head, _, tail = org.partition(" ")
            if head.upper().startswith("AS"):
                asn, asn_org = head, tail or None
            else:
                asn_org = org

        return self._response(
            ip=data["ip"],
            country_code=data.get("country"),
            region=data.get("region"),
            postal_code=data.get("postal"),
            city=data.get("city"),
            latitude=latitude,
            longitude=longitude,
            time_zone=data.get("timezone"),
            asn=asn,
            asn_org=asn_org,
            hostname=data.get("hostname"),
        )
