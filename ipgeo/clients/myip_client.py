from typing import Any

from ipgeo.clients.base import BaseIPLookupClient
from ipgeo.models.common import LookupResponse
from ipgeo.models.request_models import Provider


class MyIp(BaseIPLookupClient):
    """Client for the https://my-ip.io JSON API. Only reports the caller's own address."""

    provider = Provider.myip

    def supports_target(self) -> bool:
        return False

    def endpoint(self, target: str | None = None) -> str:
        return "https://api.my-ip.io/v2/ip.json"

    def _normalize_payload(self, data: dict[str, Any]) -> LookupResponse:
        country = data.get("country") or {}
        location = data.get("location") or {}
        asn = data.get("asn") or {}
        return self._response(
            ip=data["ip"],
            country=country.get("name"),
            country_code=country.get("code"),
            region=data.get("region"),
            city=data.get("city"),
            latitude=location.get("lat"),
            longitude=location.get("lon"),
            time_zone=data.get("timeZone"),
            asn=asn.get("number"),
            asn_org=asn.get("name"),
        )
