import pytest

from ipgeo.models.common import UNSPECIFIED_IP, LookupResponse
from ipgeo.models.request_models import Provider, ProviderKind
from ipgeo.models.response_models import IPLookupResponse
from tests.common import make_response


def test_lookup_response_renders_summary() -> None:
    text = str(make_response("1.1.1.1"))

    assert text.splitlines()[0] == "IP: 1.1.1.1"
    assert "Country: Australia (AU)" in text
    assert "City: Sydney" in text
    assert "Organization: Cloudflare, Inc. (AS13335)" in text
    assert "Hostname" not in text
    assert text.splitlines()[-1] == "Provider: mock"


def test_minimal_summary_has_only_ip_and_provider() -> None:
    response = LookupResponse(ip="8.8.8.8", provider=ProviderKind(name=Provider.ipwhois))

    assert str(response) == "IP: 8.8.8.8\nProvider: ipwhois"


@pytest.mark.parametrize(
    ("latitude", "expected"),
    [("37.3860517", 37.386052), (52.52, 52.52), ("n/a", None), (None, None)],
)
def test_coordinates_are_coerced(latitude, expected) -> None:
    response = LookupResponse(ip="8.8.8.8", latitude=latitude, provider=ProviderKind(name=Provider.ipapico))

    assert response.latitude == (pytest.approx(expected) if expected is not None else None)


def test_numeric_asn_becomes_string_and_blank_ip_degrades() -> None:
    response = LookupResponse(ip="", asn=15169, provider=ProviderKind(name=Provider.ipleak))

    assert response.asn == "15169"
    assert response.ip == UNSPECIFIED_IP


def test_provider_kind_repr_hides_key() -> None:
    kind = ProviderKind(name=Provider.ipdata, key="secret-key")

    assert "secret-key" not in repr(kind)
    assert str(kind) == "ipdata"
    assert kind != ProviderKind(name=Provider.ipdata, key="other-key")


def test_api_response_drops_provider_key() -> None:
    data = make_response("1.1.1.1", label="secret-key")

    body = IPLookupResponse.from_lookup(data)

    assert body.provider == Provider.mock
    assert body.ip == "1.1.1.1"
    assert body.city == "Sydney"
    assert "secret-key" not in body.model_dump_json()
