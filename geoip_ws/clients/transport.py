import httpx

from geoip_ws.config import DEFAULT_TIMEOUT_SECONDS
from geoip_ws.logger import logger
from geoip_ws.models.outcomes import RawResponse


class HttpxTransport:
    """Performs authenticated JSON GET requests with httpx.

    A fresh `httpx.AsyncClient` is opened for every request; nothing is pooled
    or retried. Network level failures and malformed URLs are raised as httpx
    exceptions for the caller to classify. Error statuses are returned, not raised.
    """

    def __init__(self, timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS) -> None:
        self._timeout_seconds = timeout_seconds

    async def get(self, url: str, username: str, password: str) -> RawResponse:
        logger.debug(f"Sending web service request url={url}")
        async with httpx.AsyncClient(timeout=self._timeout_seconds) as client:
            response = await client.get(
                url,
                headers={"Accept": "application/json"},
                auth=(username, password),
            )
        return self._to_raw_response(response)

    @staticmethod
    def _to_raw_response(response: httpx.Response) -> RawResponse:
        headers = dict(response.headers)
        return RawResponse(
            status_code=response.status_code,
            content_type=headers.get("content-type"),
            body=response.content or None,
            content_length=_parse_content_length(headers.get("content-length")),
            headers=headers,
        )


def _parse_content_length(value: str | None) -> int | None:
    if value is None:
        return None
    try:
        return int(value)
    except ValueError:
        return None
