from typing import Any

from ipgeo.clients.base import BaseIPLookupClient
from ipgeo.models.common import LookupResponse
from ipgeo.models.request_models import Provider


class IfConfig(BaseIPLookupClient):
    """Client for the https://ifconfig.co JSON API (an echoip deployment)."""

    provider = Provider.ifconfig

    def endpoint(self, target: str | None = None) -> str:
        if target:
            return f"https://ifconfig.co/json?ip={target}"
        return "https://ifconfig.co/json"

    def _normalize_payload(self, data: dict[str, Any]) -> LookupResponse:
        return self._response(
            ip=data["ip"],
            country=data.get("country"),
            country_code=data.get("country_iso"),
            region=data.get("region_name"),
            postal_code=data.get("zip_code"),
            city=data.get("city"),
            latitude=data.get("latitude"),
            longitude=data.get("longitude"),
            time_zone=data.get("time_zone"),
            asn=data.get("asn"),
            asn_org=data.get("asn_org"),
            hostname=data.get("hostname"),
        )
