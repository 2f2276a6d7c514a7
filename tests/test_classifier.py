from http import HTTPStatus

import httpx
import pytest

from geoip_ws.classifier import classify, content_length_of, validate_success
from geoip_ws.errors import MalformedSuccessError
from geoip_ws.models.outcomes import (
    ClientError,
    RawResponse,
    ServerError,
    Success,
    TransportFailure,
    UnexpectedStatus,
)

URI = "https://geoip.maxmind.com/geoip/v2.0/country/8.8.8.8"
JSON_TYPE = "application/vnd.maxmind.com-country+json; charset=UTF-8; version=2.0"


def test_classify_2xx_is_success() -> None:
    response = RawResponse(status_code=HTTPStatus.OK, content_type=JSON_TYPE, body=b"{}", content_length=2)
    outcome = classify(response)

    assert isinstance(outcome, Success)
    assert outcome.response is response


@pytest.mark.parametrize("status_code", [400, 401, 403, 404, 429, 499])
def test_classify_4xx_is_client_error_with_body(status_code: int) -> None:
    outcome = classify(RawResponse(status_code=status_code, body=b'{"code": "X"}'))

    assert outcome == ClientError(status=status_code, body=b'{"code": "X"}')


@pytest.mark.parametrize("status_code", [500, 502, 503, 599])
def test_classify_5xx_is_server_error(status_code: int) -> None:
    outcome = classify(RawResponse(status_code=status_code, body=b"ignored"))

    assert outcome == ServerError(status=status_code)


@pytest.mark.parametrize("status_code", [100, 301, 302, 304, 600, 999])
def test_classify_other_statuses_are_unexpected(status_code: int) -> None:
    outcome = classify(RawResponse(status_code=status_code))

    assert outcome == UnexpectedStatus(status=status_code)


def test_classify_exception_is_transport_failure() -> None:
    cause = httpx.ConnectError("boom", request=httpx.Request("GET", URI))
    outcome = classify(cause)

    assert isinstance(outcome, TransportFailure)
    assert outcome.cause is cause


def test_classify_is_deterministic() -> None:
    """The same response always yields the same variant."""
    response = RawResponse(status_code=404, body=b"not json")

    assert classify(response) == classify(response)
    assert classify(response).kind == "client_error"


def test_validate_success_returns_body() -> None:
    response = RawResponse(status_code=200, content_type=JSON_TYPE, body=b'{"a": 1}', content_length=8)

    assert validate_success(response, URI) == b'{"a": 1}'


def test_validate_success_zero_content_length_is_malformed() -> None:
    response = RawResponse(status_code=200, content_type=JSON_TYPE, body=b"{}", content_length=0)

    with pytest.raises(MalformedSuccessError) as exc_info:
        validate_success(response, URI)

    assert exc_info.value.uri == URI
    assert "no message body" in exc_info.value.detail


def test_validate_success_missing_body_is_malformed() -> None:
    response = RawResponse(status_code=200, content_type=JSON_TYPE)

    with pytest.raises(MalformedSuccessError):
        validate_success(response, URI)


def test_validate_success_html_content_type_is_malformed() -> None:
    response = RawResponse(status_code=200, content_type="text/html", body=b"{}", content_length=2)

    with pytest.raises(MalformedSuccessError) as exc_info:
        validate_success(response, URI)

    assert "does not appear to be JSON" in exc_info.value.detail


def test_validate_success_missing_content_type_is_malformed() -> None:
    response = RawResponse(status_code=200, body=b"{}", content_length=2)

    with pytest.raises(MalformedSuccessError):
        validate_success(response, URI)


def test_content_length_falls_back_to_body_size() -> None:
    assert content_length_of(RawResponse(status_code=200, body=b"abc")) == 3
    assert content_length_of(RawResponse(status_code=200, body=b"abc", content_length=10)) == 10
    assert content_length_of(RawResponse(status_code=200)) == 0
