from ipaddress import IPv4Address, IPv6Address, ip_address
from typing import Any

from pydantic import BaseModel, ConfigDict, IPvAnyAddress, field_validator

from ipgeo.models.request_models import ProviderKind

UNSPECIFIED_IP = IPv4Address("0.0.0.0")


class LookupResponse(BaseModel):
    """Normalized geolocation data returned by an IP provider.

    Every provider maps its own reply into this shape; fields the upstream
    service does not report stay None.
    """

    model_config = ConfigDict(frozen=True)

    ip: IPvAnyAddress
    continent: str | None = None
    country: str | None = None
    country_code: str | None = None
    region: str | None = None
    postal_code: str | None = None
    city: str | None = None
    latitude: float | None = None
    longitude: float | None = None
    time_zone: str | None = None
    # Autonomous system number, kept as a string ("AS15169" or "15169").
    asn: str | None = None
    asn_org: str | None = None
    hostname: str | None = None
    is_proxy: bool | None = None
    provider: ProviderKind

    @field_validator("ip", mode="before")
    @classmethod
    def _coerce_ip(cls, value: Any) -> IPv4Address | IPv6Address:
        """Degrade an unparseable address to 0.0.0.0 instead of rejecting the record."""
        if isinstance(value, (IPv4Address, IPv6Address)):
            return value
        try:
            return ip_address(str(value or "").strip())
        except ValueError:
            return UNSPECIFIED_IP

    @field_validator("latitude", "longitude", mode="before")
    @classmethod
    def _coerce_lat_lon(cls, value: Any) -> float | None:
        """Allow latitude/longitude to be provided as strings, numbers, or null.

        Providers may return these fields as strings; this validator normalizes them
        into floats while gracefully handling missing or invalid values.
        """
        if value is None:
            return None
        try:
            # For general GPS and mapping, 5-6 decimal places (e.g., 34.052235)
            return round(float(value), 6)
        except (TypeError, ValueError):
            return None

    @field_validator("asn", mode="before")
    @classmethod
    def _coerce_asn(cls, value: Any) -> str | None:
        if value is None or value == "":
            return None
        return str(value)

    def __str__(self) -> str:
        lines = [f"IP: {self.ip}"]
        if self.continent:
            lines.append(f"Continent: {self.continent}")
        if self.country:
            country = f"Country: {self.country}"
            if self.country_code:
                country += f" ({self.country_code})"
            lines.append(country)
        if self.region:
            lines.append(f"Region: {self.region}")
        if self.postal_code:
            lines.append(f"Postal code: {self.postal_code}")
        if self.city:
            lines.append(f"City: {self.city}")
        if self.latitude is not None and self.longitude is not None:
            lines.append(f"Coordinates: {self.latitude}, {self.longitude}")
        if self.time_zone:
            lines.append(f"Time zone: {self.time_zone}")
        if self.asn_org:
            organization = f"Organization: {self.asn_org}"
            if self.asn:
                organization += f" ({self.asn})"
            lines.append(organization)
        if self.hostname:
            lines.append(f"Hostname: {self.hostname}")
        if self.is_proxy is not None:
            lines.append(f"Proxy: {self.is_proxy}")
        lines.append(f"Provider: {self.provider}")
        return "\n".join(lines)
