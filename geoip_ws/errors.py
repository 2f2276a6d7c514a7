class GeoIPError(Exception):
    """Base error for the GeoIP2 web service client."""


class InvalidIpError(GeoIPError):
    """Raised when the supplied IP address is syntactically invalid."""


class HttpError(GeoIPError):
    """Raised when the web service answers with a non-2xx status.

    This is the degraded form of the error: the status is known, but the
    service did not deliver a usable error document (5xx, unexpected status,
    or a 4xx whose body is missing or malformed).
    """

    def __init__(self, message: str, status: int, uri: str) -> None:
        super().__init__(message)
        self.message = message
        self.status = status
        self.uri = uri


class WebServiceError(HttpError):
    """Raised when the web service returns an explicit error document."""

    def __init__(self, message: str, code: str, status: int, uri: str) -> None:
        super().__init__(message, status, uri)
        self.code = code


class TransportError(GeoIPError):
    """Raised when the request never completed (DNS, connection, timeout)."""

    def __init__(self, cause: BaseException) -> None:
        super().__init__(f"Unknown error when connecting to web service: {cause!r}")
        self.cause = cause


class MalformedSuccessError(GeoIPError):
    """Raised when a 2xx response has no body or is not JSON."""

    def __init__(self, uri: str, detail: str) -> None:
        super().__init__(detail)
        self.uri = uri
        self.detail = detail


class DecodeError(GeoIPError):
    """Raised when a 2xx JSON body does not match the expected model."""

    def __init__(self, raw_body: bytes | str) -> None:
        if isinstance(raw_body, bytes):
            shown = raw_body.decode("utf-8", errors="replace")
        else:
            shown = raw_body
        super().__init__(f"Received a 200 response but could not decode it as JSON: {shown}")
        self.raw_body = raw_body
