from collections.abc import Sequence
from typing import TypeVar

from pydantic import TypeAdapter, ValidationError

from geoip_ws.errors import DecodeError, GeoIPError, HttpError, TransportError, WebServiceError
from geoip_ws.models.lookups import CountryLookup
from geoip_ws.models.outcomes import (
    ClassifiedOutcome,
    ClientError,
    ErrorDetail,
    ServerError,
    Success,
    TransportFailure,
    UnexpectedStatus,
)
from geoip_ws.models.records import LANGUAGES_CONTEXT_KEY

LookupT = TypeVar("LookupT", bound=CountryLookup)

# JSON scalars are accepted and read as text; nested values are not.
_ERROR_DOCUMENT = TypeAdapter(dict[str, str | bool | int | float | None])


def decode_success(body: bytes | str, target_type: type[LookupT], languages: Sequence[str]) -> LookupT:
    """Deserialize a success body into `target_type`.

    Unknown fields are ignored. `languages` is handed to the models as
    validation context so named records can pick their localized name.
    """
    try:
        return target_type.model_validate_json(body, context={LANGUAGES_CONTEXT_KEY: list(languages)})
    except ValidationError as exc:
        raise DecodeError(body) from exc


def decode_error(status: int, body: bytes | str | None, uri: str) -> HttpError:
    """Build the error for a 4xx response from its (optional) error document.

    Only a flat JSON object with non-null `error` and `code` values yields a
    WebServiceError; every other shape degrades to HttpError. Scalar values
    are read as text, so `"code": 123` is the code "123".
    """
    if not body:
        return HttpError(f"Received a {status} error for {uri} with no body", status, uri)

    try:
        document = _ERROR_DOCUMENT.validate_json(body)
    except ValidationError:
        return HttpError(
            f"Received a {status} error for {uri} but it did not include the expected JSON body: {_text(body)}",
            status,
            uri,
        )

    detail = ErrorDetail(error=_scalar_text(document.get("error")), code=_scalar_text(document.get("code")))
    if not detail.is_complete:
        return HttpError(
            f"Response contains JSON but it does not specify code or error keys: {_text(body)}",
            status,
            uri,
        )

    return WebServiceError(detail.error, detail.code, status, uri)


def server_error(status: int, uri: str) -> HttpError:
    return HttpError(f"Received a server error ({status}) for {uri}", status, uri)


def unexpected_status_error(status: int, uri: str) -> HttpError:
    return HttpError(f"Received a very surprising HTTP status ({status}) for {uri}", status, uri)


def error_for_outcome(outcome: ClassifiedOutcome, uri: str) -> GeoIPError:
    """Return the exception a caller should see for a non-success outcome."""
    if isinstance(outcome, ClientError):
        return decode_error(outcome.status, outcome.body, uri)
    if isinstance(outcome, ServerError):
        return server_error(outcome.status, uri)
    if isinstance(outcome, UnexpectedStatus):
        return unexpected_status_error(outcome.status, uri)
    if isinstance(outcome, TransportFailure):
        return TransportError(outcome.cause)
    if isinstance(outcome, Success):
        raise ValueError("A successful outcome has no error to report")
    raise TypeError(f"Unknown outcome: {outcome!r}")


def _scalar_text(value: str | bool | int | float | None) -> str | None:
    if value is None:
        return None
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _text(body: bytes | str) -> str:
    if isinstance(body, bytes):
        return body.decode("utf-8", errors="replace")
    return body
