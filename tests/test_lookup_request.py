from ipaddress import IPv4Address
from typing import Any

import pytest
from pydantic import ValidationError

from geoip_ws.models.request_models import Endpoint, LookupRequest


def _build_request(ip: Any) -> LookupRequest:
    """Helper to construct LookupRequest, used to keep tests small."""
    return LookupRequest(endpoint=Endpoint.city, ip=ip)


def test_lookup_request_allows_valid_ipv4() -> None:
    """Explicit valid IPv4 address is accepted as-is."""
    req = _build_request("8.8.8.8")
    assert req.ip == "8.8.8.8"
    assert req.path_segment == "8.8.8.8"


def test_lookup_request_allows_valid_ipv6() -> None:
    """Explicit valid IPv6 address is accepted as-is."""
    req = _build_request("2001:4860:4860::8888")
    assert req.ip == "2001:4860:4860::8888"


def test_lookup_request_accepts_ip_address_objects() -> None:
    req = _build_request(IPv4Address("1.1.1.1"))
    assert req.ip == "1.1.1.1"


def test_lookup_request_normalizes_blank_to_none() -> None:
    """Blank string is treated as None (caller IP lookup, no validation error)."""
    req = _build_request("   ")
    assert req.ip is None
    assert req.path_segment == "me"


def test_lookup_request_allows_none() -> None:
    """None is allowed and used to trigger a lookup of the caller's address."""
    req = _build_request(None)
    assert req.ip is None


def test_lookup_request_rejects_invalid_ip() -> None:
    """Non-empty, non-IP strings are rejected by validation."""
    with pytest.raises(ValidationError):
        _build_request("qwerty")


def test_lookup_request_rejects_empty_languages() -> None:
    with pytest.raises(ValidationError):
        LookupRequest(endpoint=Endpoint.country, languages=())


def test_lookup_request_languages_are_normalized() -> None:
    req = LookupRequest(endpoint=Endpoint.country, languages=(" de ", "", "en"))
    assert req.languages == ("de", "en")


def test_lookup_request_rejects_blank_languages() -> None:
    with pytest.raises(ValidationError):
        LookupRequest(endpoint=Endpoint.country, languages=("", "  "))


def test_lookup_request_rejects_unknown_endpoint() -> None:
    with pytest.raises(ValidationError):
        LookupRequest(endpoint="insights")
