from typing import Any

from ipgeo.clients.base import BaseIPLookupClient
from ipgeo.models.common import LookupResponse
from ipgeo.models.request_models import Provider


class AbstractApi(BaseIPLookupClient):
    """Client for the https://abstractapi.com IP geolocation API. Requires an API key."""

    provider = Provider.abstract

    def endpoint(self, target: str | None = None) -> str:
        url = f"https://ipgeolocation.abstractapi.com/v1/?api_key={self._key or ''}"
        if target:
            url += f"&ip_address={target}"
        return url

    def _normalize_payload(self, data: dict[str, Any]) -> LookupResponse:
        security = data.get("security") or {}
        timezone = data.get("timezone") or {}
        connection = data.get("connection") or {}
        return self._response(
            ip=data["ip_address"],
            continent=data.get("continent"),
            country=data.get("country"),
            country_code=data.get("country_code"),
            region=data.get("region"),
            postal_code=data.get("postal_code"),
            city=data.get("city"),
            latitude=data.get("latitude"),
            longitude=data.get("longitude"),
            time_zone=timezone.get("name"),
            asn=connection.get("autonomous_system_number"),
            asn_org=connection.get("autonomous_system_organization"),
            is_proxy=security.get("is_vpn"),
        )
