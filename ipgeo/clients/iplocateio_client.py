from typing import Any

from ipgeo.clients.base import BaseIPLookupClient
from ipgeo.models.common import LookupResponse
from ipgeo.models.request_models import Provider


class IpLocateIo(BaseIPLookupClient):
    """Client for the https://iplocate.io JSON API."""

    provider = Provider.iplocateio

    def endpoint(self, target: str | None = None) -> str:
        if target:
            return f"https://www.iplocate.io/api/lookup/{target}/json"
        return "https://www.iplocate.io/api/lookup/json"

    def _normalize_payload(self, data: dict[str, Any]) -> LookupResponse:
        threat = data.get("threat") or {}
        return self._response(
            ip=data["ip"],
            continent=data.get("continent"),
            country=data.get("country"),
            country_code=data.get("country_code"),
            region=data.get("subdivision"),
            postal_code=data.get("postal_code"),
            city=data.get("city"),
            latitude=data.get("latitude"),
            longitude=data.get("longitude"),
            time_zone=data.get("time_zone"),
            asn=data.get("asn"),
            asn_org=data.get("org"),
            is_proxy=threat.get("is_proxy"),
        )
