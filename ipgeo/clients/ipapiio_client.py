from typing import Any

from ipgeo.clients.base import BaseIPLookupClient
from ipgeo.models.common import LookupResponse
from ipgeo.models.request_models import Provider


class IpApiIo(BaseIPLookupClient):
    """Client for the https://ip-api.io JSON API."""

    provider = Provider.ipapiio

    def endpoint(self, target: str | None = None) -> str:
        return f"https://ip-api.io/json/{target or ''}"

    def _normalize_payload(self, data: dict[str, Any]) -> LookupResponse:
        suspicious = data.get("suspiciousFactors") or {}
        return self._response(
            ip=data["ip"],
            country=data.get("country_name"),
            country_code=data.get("country_code"),
            region=data.get("region_name"),
            postal_code=data.get("zip_code") or None,
            city=data.get("city"),
            latitude=data.get("latitude"),
            longitude=data.get("longitude"),
            time_zone=data.get("time_zone"),
            asn_org=data.get("organisation"),
            is_proxy=suspicious.get("isProxy"),
        )
