from http import HTTPStatus

import httpx
import pytest

from ipgeo.clients.ip_api_com_client import IpApiCom
from ipgeo.errors import ParseError, RequestStatusError, TooManyRequestsError, TransportError
from ipgeo.lookup_service import LookupService
from ipgeo.models.common import LookupResponse
from tests.common import FailingClient, MockResponse, make_fake_client


def test_lookup_ip_success(monkeypatch: pytest.MonkeyPatch) -> None:
    """Happy path: successful lookup with normalized fields."""
    payload = {
        "status": "success",
        "query": "8.8.8.8",
        "continent": "North America",
        "countryCode": "US",
        "country": "United States",
        "regionName": "Virginia",
        "city": "Ashburn",
        "zip": "20149",
        "lat": 39.03,
        "lon": -77.5,
        "timezone": "America/New_York",
        "isp": "Google LLC",
        "org": "Google Public DNS",
        "as": "AS15169 Google LLC",
        "reverse": "dns.google",
        "proxy": False,
    }
    requested_urls: list[str] = []
    response = MockResponse(status_code=HTTPStatus.OK, payload=payload)

    monkeypatch.setattr(httpx, "Client", make_fake_client(response, requested_urls))

    result = LookupService(IpApiCom()).make_request("8.8.8.8")

    assert requested_urls[0].startswith("http://ip-api.com/json/8.8.8.8?fields=")
    assert isinstance(result, LookupResponse)
    assert str(result.ip) == "8.8.8.8"
    assert result.continent == "North America"
    assert result.country_code == "US"
    assert result.country == "United States"
    assert result.region == "Virginia"
    assert result.city == "Ashburn"
    assert result.postal_code == "20149"
    assert result.latitude == pytest.approx(39.03)
    assert result.longitude == pytest.approx(-77.5)
    assert result.time_zone == "America/New_York"
    assert result.asn == "AS15169"
    assert result.asn_org == "Google LLC"
    assert result.hostname == "dns.google"
    assert result.is_proxy is False


def test_lookup_client_ip_success(monkeypatch: pytest.MonkeyPatch) -> None:
    """Self lookup uses the bare /json/ endpoint; empty strings become None."""
    payload = {
        "status": "success",
        "query": "198.51.100.42",
        "countryCode": "DE",
        "country": "Germany",
        "zip": "",
        "reverse": "",
        "lat": 52.52,
        "lon": 13.405,
    }
    requested_urls: list[str] = []
    response = MockResponse(status_code=HTTPStatus.OK, payload=payload)

    monkeypatch.setattr(httpx, "Client", make_fake_client(response, requested_urls))

    result = LookupService(IpApiCom()).make_request()

    assert requested_urls[0].startswith("http://ip-api.com/json/?fields=")
    assert str(result.ip) == "198.51.100.42"
    assert result.country_code == "DE"
    assert result.postal_code is None
    assert result.hostname is None
    assert result.asn is None


@pytest.mark.parametrize("message", ["private range", "reserved range", "invalid query"])
def test_fail_status_raises_request_status_error(monkeypatch: pytest.MonkeyPatch, message: str) -> None:
    """ip-api.com reports failures with status "fail" and HTTP 200."""
    payload = {"status": "fail", "message": message, "query": "192.168.0.1"}
    response = MockResponse(status_code=HTTPStatus.OK, payload=payload)

    monkeypatch.setattr(httpx, "Client", make_fake_client(response))

    with pytest.raises(RequestStatusError, match=message):
        LookupService(IpApiCom()).make_request("192.168.0.1")


def test_quota_exceeded_from_status(monkeypatch: pytest.MonkeyPatch) -> None:
    """Quota/limit messages are mapped to TooManyRequestsError."""
    payload = {"status": "fail", "message": "quota exceeded for this key"}
    response = MockResponse(status_code=HTTPStatus.OK, payload=payload)

    monkeypatch.setattr(httpx, "Client", make_fake_client(response))

    with pytest.raises(TooManyRequestsError):
        LookupService(IpApiCom()).make_request("8.8.8.8")


def test_http_429_raises_too_many_requests(monkeypatch: pytest.MonkeyPatch) -> None:
    response = MockResponse(status_code=HTTPStatus.TOO_MANY_REQUESTS, text="Too Many Requests")

    monkeypatch.setattr(httpx, "Client", make_fake_client(response))

    with pytest.raises(TooManyRequestsError):
        LookupService(IpApiCom()).make_request("8.8.8.8")


def test_http_5xx_raises_request_status_error(monkeypatch: pytest.MonkeyPatch) -> None:
    response = MockResponse(status_code=HTTPStatus.SERVICE_UNAVAILABLE, text="Service Unavailable")

    monkeypatch.setattr(httpx, "Client", make_fake_client(response))

    with pytest.raises(RequestStatusError):
        LookupService(IpApiCom()).make_request("8.8.4.4")


def test_network_failure_raises_transport_error(monkeypatch: pytest.MonkeyPatch) -> None:
    """Network failures from httpx.Client are mapped to TransportError."""

    monkeypatch.setattr(
        httpx,
        "Client",
        lambda *args, **kwargs: FailingClient("http://ip-api.com", *args, **kwargs),
    )

    with pytest.raises(TransportError):
        LookupService(IpApiCom()).make_request("8.8.8.8")


def test_invalid_json_raises_parse_error(monkeypatch: pytest.MonkeyPatch) -> None:
    """Non-JSON responses are mapped to ParseError."""
    response = MockResponse(status_code=HTTPStatus.OK, text="<html>oops</html>")

    monkeypatch.setattr(httpx, "Client", make_fake_client(response))

    with pytest.raises(ParseError):
        LookupService(IpApiCom()).make_request("8.8.8.8")


def test_json_array_raises_parse_error(monkeypatch: pytest.MonkeyPatch) -> None:
    response = MockResponse(status_code=HTTPStatus.OK, payload=[{"query": "8.8.8.8"}])

    monkeypatch.setattr(httpx, "Client", make_fake_client(response))

    with pytest.raises(ParseError):
        LookupService(IpApiCom()).make_request("8.8.8.8")
