from enum import Enum
from ipaddress import ip_address

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Provider(str, Enum):
    """Supported IP geolocation providers."""

    freeipapi = "freeipapi"
    ifconfig = "ifconfig"
    ipinfo = "ipinfo"
    myip = "myip"
    ipapicom = "ipapicom"
    ipwhois = "ipwhois"
    ipapico = "ipapico"
    ipapiio = "ipapiio"
    ipbase = "ipbase"
    iplocateio = "iplocateio"
    ipleak = "ipleak"
    mullvad = "mullvad"
    abstract = "abstract"
    ipgeolocation = "ipgeolocation"
    ipdata = "ipdata"
    mock = "mock"


# Providers whose kind carries a key: an API key, or the address a mock reports.
KEYED_PROVIDERS: frozenset[Provider] = frozenset(
    {Provider.abstract, Provider.ipgeolocation, Provider.ipdata, Provider.mock}
)


class ProviderKind(BaseModel):
    """A provider together with its optional credential.

    Two kinds are the same provider only if both the name and the key match.
    """

    model_config = ConfigDict(frozen=True)

    name: Provider
    key: str | None = Field(default=None, repr=False)

    def __str__(self) -> str:
        return self.name.value


class IPLookupRequest(BaseModel):
    """Request model for IP geolocation lookup via query parameters.

    If `ip` is provided, the service will look up that explicit IP address.
    If `ip` is omitted or null, the service looks up its own public address.

    `providers` is a comma-separated, ordered list of provider strings
    (e.g. "ipwhois,ipdata KEY"). If omitted, the default provider list is used.
    """

    ip: str | None = Field(
        default=None,
        description="IPv4 or IPv6 address to look up. If omitted, the service's own public IP is used.",
        examples=["8.8.8.8", "2001:4860:4860::8888"],
    )
    providers: str | None = Field(
        default=None,
        description="Comma-separated, ordered list of providers to try.",
        examples=["ipwhois,ipapico", "ipdata my-api-key"],
    )
    retries: int | None = Field(
        default=None,
        ge=0,
        description="Additional provider attempts allowed beyond one pass through the list.",
    )
    cache: bool = Field(
        default=True,
        description="Serve a fresh cached answer if available and cache the new result.",
    )
    require_target: bool = Field(
        default=False,
        description="Only use providers able to look up an explicit `ip`, instead of falling back to a self lookup.",
    )

    @field_validator("ip", mode="before")
    @classmethod
    def _validate_ip(cls, value: str | None) -> str | None:
        """Validate that ip is either empty/None or a valid IP address (IPv4 or IPv6).

        - None or blank string -> treated as None (self lookup, no error).
        - Non-blank -> must be a valid IP literal, otherwise a validation error
          is raised and the endpoint handler is never invoked.
        """
        if value is None:
            return None

        value_str = str(value).strip()
        if not value_str:
            return None

        try:
            ip_address(value_str)
        except ValueError as exc:
            raise ValueError("ip must be a valid IPv4 or IPv6 address") from exc

        return value_str

    def provider_strings(self) -> list[str]:
        """Split the `providers` parameter into individual provider strings."""
        if not self.providers:
            return []
        return [part.strip() for part in self.providers.split(",") if part.strip()]
