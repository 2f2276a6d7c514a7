"""Classification of transport results into outcome variants.

`classify` is pure: the same response (or the same transport failure) always
yields the same variant. Turning a variant into an exception is the decoder's
job, see `geoip_ws.decoder.error_for_outcome`.
"""

from http import HTTPStatus

from geoip_ws.errors import MalformedSuccessError
from geoip_ws.logger import logger
from geoip_ws.models.outcomes import (
    ClassifiedOutcome,
    ClientError,
    RawResponse,
    ServerError,
    Success,
    TransportFailure,
    UnexpectedStatus,
)

_SERVER_ERROR_CEILING = 600


def classify(response: RawResponse | BaseException) -> ClassifiedOutcome:
    """Map a transport result to exactly one outcome variant.

    Status ranges are checked in a fixed order: 2xx, 4xx, 5xx, then anything
    else (1xx, 3xx, out of range) is an unexpected status.
    """
    if isinstance(response, BaseException):
        return TransportFailure(cause=response)

    status_code = response.status_code

    if HTTPStatus.OK <= status_code < HTTPStatus.MULTIPLE_CHOICES:
        return Success(response=response)

    if HTTPStatus.BAD_REQUEST <= status_code < HTTPStatus.INTERNAL_SERVER_ERROR:
        return ClientError(status=status_code, body=response.body)

    if HTTPStatus.INTERNAL_SERVER_ERROR <= status_code < _SERVER_ERROR_CEILING:
        return ServerError(status=status_code)

    logger.warning(f"Web service returned an unexpected HTTP status status={status_code}")
    return UnexpectedStatus(status=status_code)


def content_length_of(response: RawResponse) -> int:
    """Declared Content-Length, or the body size when the header was absent."""
    if response.content_length is not None:
        return response.content_length
    return len(response.body or b"")


def validate_success(response: RawResponse, uri: str) -> bytes:
    """Check that a 2xx response honours the success contract and return its body.

    The body must be non-empty and the content type must mention JSON. The
    body is not parsed here.
    """
    if content_length_of(response) <= 0 or not response.body:
        raise MalformedSuccessError(
            uri,
            f"Received a {response.status_code} response for {uri} but there was no message body.",
        )

    content_type = response.content_type
    if content_type is None or "json" not in content_type.lower():
        body = response.body.decode("utf-8", errors="replace")
        raise MalformedSuccessError(
            uri,
            f"Received a {response.status_code} response for {uri} but it does not appear to be JSON:\n{body}",
        )

    return response.body
