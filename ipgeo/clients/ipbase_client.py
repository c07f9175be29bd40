from typing import Any

from ipgeo.clients.base import BaseIPLookupClient
from ipgeo.models.common import LookupResponse
from ipgeo.models.request_models import Provider


class IpBase(BaseIPLookupClient):
    """Client for the https://ipbase.com v2 API."""

    provider = Provider.ipbase

    def endpoint(self, target: str | None = None) -> str:
        if target:
            return f"https://api.ipbase.com/v2/info?ip={target}"
        return "https://api.ipbase.com/v2/info"

    def _normalize_payload(self, data: dict[str, Any]) -> LookupResponse:
        """Map ipbase.com's response into our normalized schema.

        Everything of interest is nested under "data".
        """
        info = data["data"]
        connection = info.get("connection") or {}
        location = info.get("location") or {}
        timezone = info.get("timezone") or {}
        security = info.get("security") or {}
        return self._response(
            ip=info["ip"],
            continent=(location.get("continent") or {}).get("name"),
            country=(location.get("country") or {}).get("name"),
            country_code=(location.get("country") or {}).get("alpha2"),
            region=(location.get("region") or {}).get("name"),
            postal_code=location.get("zip"),
            city=(location.get("city") or {}).get("name"),
            latitude=location.get("latitude"),
            longitude=location.get("longitude"),
            time_zone=timezone.get("id"),
            asn=connection.get("asn"),
            asn_org=connection.get("organization") or connection.get("isp"),
            hostname=info.get("hostname"),
            is_proxy=security.get("is_proxy"),
        )
