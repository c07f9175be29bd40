from pydantic import BaseModel

from ipgeo.models.common import LookupResponse
from ipgeo.models.request_models import Provider


class HealthResponse(BaseModel):
    """Response model for the health check endpoint."""

    status: str


class IPLookupResponse(BaseModel):
    """Response model for IP geolocation lookup.

    Unlike LookupResponse it only names the provider, never its API key.
    """

    provider: Provider
    ip: str
    continent: str | None = None
    country: str | None = None
    country_code: str | None = None
    region: str | None = None
    postal_code: str | None = None
    city: str | None = None
    latitude: float | None = None
    longitude: float | None = None
    time_zone: str | None = None
    asn: str | None = None
    asn_org: str | None = None
    hostname: str | None = None
    is_proxy: bool | None = None

    @classmethod
    def from_lookup(cls, data: LookupResponse) -> "IPLookupResponse":
        fields = data.model_dump(exclude={"provider", "ip"})
        return cls(provider=data.provider.name, ip=str(data.ip), **fields)
