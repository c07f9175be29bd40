from typing import Any

from ipgeo.clients.base import BaseIPLookupClient
from ipgeo.models.common import LookupResponse
from ipgeo.models.request_models import Provider


class IpData(BaseIPLookupClient):
    """Client for the https://ipdata.co API. Requires an API key.

    https://docs.ipdata.co/docs
    """

    provider = Provider.ipdata

    def endpoint(self, target: str | None = None) -> str:
        return f"https://api.ipdata.co/{target or ''}?api-key={self._key or ''}"

    def _normalize_payload(self, data: dict[str, Any]) -> LookupResponse:
        time_zone = data.get("time_zone") or {}
        asn = data.get("asn") or {}
        threat = data.get("threat") or {}
        return self._response(
            ip=data["ip"],
            continent=data.get("continent_name"),
            country=data.get("country_name"),
            country_code=data.get("country_code"),
            region=data.get("region"),
            postal_code=data.get("postal"),
            city=data.get("city"),
            latitude=data.get("latitude"),
            longitude=data.get("longitude"),
            time_zone=time_zone.get("name"),
            asn=asn.get("asn"),
            asn_org=asn.get("name"),
            is_proxy=threat.get("is_proxy"),
        )
