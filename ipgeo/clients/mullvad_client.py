from typing import Any

from ipgeo.clients.base import BaseIPLookupClient
from ipgeo.models.common import LookupResponse
from ipgeo.models.request_models import Provider


class Mullvad(BaseIPLookupClient):
    """Client for the https://am.i.mullvad.net JSON API. Only reports the caller's own address."""

    provider = Provider.mullvad

    def supports_target(self) -> bool:
        return False

    def endpoint(self, target: str | None = None) -> str:
        return "https://am.i.mullvad.net/json"

    def _normalize_payload(self, data: dict[str, Any]) -> LookupResponse:
        return self._response(
            ip=data["ip"],
            country=data.get("country"),
            city=data.get("city"),
            latitude=data.get("latitude"),
            longitude=data.get("longitude"),
            asn_org=data.get("organization"),
            # Only Mullvad's own exit nodes are detected as VPN.
            is_proxy=data.get("mullvad_exit_ip"),
        )
