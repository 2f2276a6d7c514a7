import json
from typing import Any

import httpx


class MockResponse:
    def __init__(
        self,
        status_code: int,
        payload: dict[str, Any] | None = None,
        text: str | None = None,
        content_type: str | None = "application/vnd.maxmind.com-country+json; charset=UTF-8; version=2.0",
        content_length: int | None = None,
    ) -> None:
        self.status_code = status_code
        if text is not None:
            self.content = text.encode()
        elif payload is not None:
            self.content = json.dumps(payload).encode()
        else:
            self.content = b""
        self.headers: dict[str, str] = {
            "content-length": str(len(self.content) if content_length is None else content_length)
        }
        if content_type is not None:
            self.headers["content-type"] = content_type


class MockAsyncClient:
    """Minimal async context-manager mock for httpx.AsyncClient.

    Every `get` call is recorded in `calls` so tests can assert on the URL,
    headers and basic-auth credentials that were sent.
    """

    def __init__(self, response: MockResponse, calls: list[dict[str, Any]] | None = None) -> None:
        self._response = response
        self.calls = calls if calls is not None else []

    async def __aenter__(self) -> "MockAsyncClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        return None

    async def get(self, url: str, **kwargs: Any) -> MockResponse:
        self.calls.append({"url": url, **kwargs})
        return self._response


class FailingAsyncClient:
    """Async client whose `get` raises a ConnectError to simulate network failure."""

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        pass

    async def __aenter__(self) -> "FailingAsyncClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        return None

    async def get(self, url: str, **kwargs: Any) -> MockResponse:
        request = httpx.Request("GET", url)
        raise httpx.ConnectError("Network failure", request=request)


CITY_PAYLOAD: dict[str, Any] = {
    "city": {"geoname_id": 5375480, "names": {"en": "Mountain View", "ru": "Маунтин-Вью"}},
    "continent": {"code": "NA", "geoname_id": 6255149, "names": {"en": "North America", "de": "Nordamerika"}},
    "country": {
        "geoname_id": 6252001,
        "iso_code": "US",
        "names": {"en": "United States", "de": "USA", "fr": "États-Unis"},
    },
    "location": {
        "accuracy_radius": 1000,
        "latitude": 37.386,
        "longitude": -122.0838,
        "metro_code": 807,
        "time_zone": "America/Los_Angeles",
    },
    "postal": {"code": "94035"},
    "registered_country": {"geoname_id": 6252001, "iso_code": "US", "names": {"en": "United States"}},
    "subdivisions": [{"geoname_id": 5332921, "iso_code": "CA", "names": {"en": "California"}}],
    "traits": {
        "ip_address": "8.8.8.8",
        "autonomous_system_number": 15169,
        "autonomous_system_organization": "Google LLC",
        "isp": "Google",
        "organization": "Google",
    },
    "maxmind": {"queries_remaining": 11},
}

NOT_FOUND_DOCUMENT = {"error": "The address 10.0.0.1 is not in the database.", "code": "IP_ADDRESS_NOT_FOUND"}
