from ipgeo.clients.abstractapi_client import AbstractApi
from ipgeo.clients.base import BaseIPLookupClient
from ipgeo.clients.freeipapi_client import FreeIpApi
from ipgeo.clients.ifconfig_client import IfConfig
from ipgeo.clients.ip_api_co_client import IpApiCo
from ipgeo.clients.ip_api_com_client import IpApiCom
from ipgeo.clients.ipapiio_client import IpApiIo
from ipgeo.clients.ipbase_client import IpBase
from ipgeo.clients.ipdata_client import IpData
from ipgeo.clients.ipgeolocation_client import IpGeolocation
from ipgeo.clients.ipinfo_client import IpInfo
from ipgeo.clients.ipleak_client import IpLeak
from ipgeo.clients.iplocateio_client import IpLocateIo
from ipgeo.clients.ipwhois_client import IpWhoIs
from ipgeo.clients.mock_client import Mock
from ipgeo.clients.mullvad_client import Mullvad
from ipgeo.clients.myip_client import MyIp
from ipgeo.errors import UnknownProviderError
from ipgeo.models.request_models import KEYED_PROVIDERS, Provider, ProviderKind

# Keyless providers, tried in this order when the caller does not choose.
DEFAULT_PROVIDERS: tuple[ProviderKind, ...] = tuple(
    ProviderKind(name=name)
    for name in (
        Provider.ipwhois,
        Provider.ipapico,
        Provider.ipapicom,
        Provider.ipleak,
        Provider.freeipapi,
        Provider.ifconfig,
        Provider.myip,
        Provider.iplocateio,
        Provider.mullvad,
    )
)


class IpLookupProviderFactory:
    """Factory for IP lookup provider clients.

    Given a ProviderKind, returns a concrete client instance holding the kind's key.
    """

    PROVIDERS_MAP: dict[Provider, type[BaseIPLookupClient]] = {
        Provider.freeipapi: FreeIpApi,
        Provider.ifconfig: IfConfig,
        Provider.ipinfo: IpInfo,
        Provider.myip: MyIp,
        Provider.ipapicom: IpApiCom,
        Provider.ipwhois: IpWhoIs,
        Provider.ipapico: IpApiCo,
        Provider.ipapiio: IpApiIo,
        Provider.ipbase: IpBase,
        Provider.iplocateio: IpLocateIo,
        Provider.ipleak: IpLeak,
        Provider.mullvad: Mullvad,
        Provider.abstract: AbstractApi,
        Provider.ipgeolocation: IpGeolocation,
        Provider.ipdata: IpData,
        Provider.mock: Mock,
    }

    def __call__(self, kind: ProviderKind) -> BaseIPLookupClient:
        client_cls = self.PROVIDERS_MAP[kind.name]
        return client_cls(key=kind.key)


def parse_provider(value: str, key: str | None = None) -> ProviderKind:
    """Parse a provider string such as "ipinfo" or "ipdata my-api-key".

    Matching is case-insensitive. A second whitespace-separated token becomes the
    key of key-bearing providers; an explicit `key` argument takes precedence.
    Keys passed to providers that take none are dropped.
    """
    parts = value.strip().split()
    if not parts:
        raise UnknownProviderError("No provider given")

    name = parts[0].lower()
    try:
        provider = Provider(name)
    except ValueError as exc:
        raise UnknownProviderError(f"Provider not found: {name}") from exc

    if provider not in KEYED_PROVIDERS:
        return ProviderKind(name=provider)

    if key is None and len(parts) > 1:
        key = parts[1]
    return ProviderKind(name=provider, key=key)
