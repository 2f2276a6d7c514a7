from collections.abc import Sequence
from ipaddress import IPv4Address, IPv6Address

import httpx
from pydantic import ValidationError

from geoip_ws.classifier import classify, validate_success
from geoip_ws.clients.transport import HttpxTransport
from geoip_ws.config import DEFAULT_HOST, DEFAULT_LANGUAGES, DEFAULT_TIMEOUT_SECONDS, ClientSettings
from geoip_ws.decoder import LookupT, decode_success, error_for_outcome
from geoip_ws.errors import InvalidIpError
from geoip_ws.logger import logger
from geoip_ws.models.lookups import CityIspOrgLookup, CityLookup, CountryLookup, OmniLookup
from geoip_ws.models.outcomes import RawResponse, Success, TransportFailure
from geoip_ws.models.request_models import Endpoint, LookupRequest

IpAddressLike = str | IPv4Address | IPv6Address | None


class GeoIP2Client:
    """Client for the GeoIP2 web service endpoints.

    The end points are Country, City, City/ISP/Org and Omni. Each returns a
    different amount of data about an IP address, with Country returning the
    least and Omni the most. Passing no IP address looks up the address the
    request comes from.

    Failures are raised as `geoip_ws.errors.GeoIPError` subclasses:

    - `WebServiceError` when the service returned an explicit error document;
    - `HttpError` for any other 4xx, 5xx or unexpected status;
    - `TransportError` when the request never completed;
    - `MalformedSuccessError` / `DecodeError` when a 200 body is unusable.
    """

    RESULT_TYPES: dict[Endpoint, type[CountryLookup]] = {
        Endpoint.country: CountryLookup,
        Endpoint.city: CityLookup,
        Endpoint.city_isp_org: CityIspOrgLookup,
        Endpoint.omni: OmniLookup,
    }

    def __init__(
        self,
        account_id: int,
        license_key: str,
        languages: Sequence[str] | None = None,
        host: str = DEFAULT_HOST,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
        transport: HttpxTransport | None = None,
    ) -> None:
        self._settings = ClientSettings(
            account_id=account_id,
            license_key=license_key,
            languages=tuple(languages) if languages is not None else DEFAULT_LANGUAGES,
            host=host,
            timeout_seconds=timeout_seconds,
        )
        self._transport = transport or HttpxTransport(timeout_seconds=self._settings.timeout_seconds)

    @classmethod
    def from_settings(cls, settings: ClientSettings, transport: HttpxTransport | None = None) -> "GeoIP2Client":
        return cls(
            account_id=settings.account_id,
            license_key=settings.license_key,
            languages=settings.languages,
            host=settings.host,
            timeout_seconds=settings.timeout_seconds,
            transport=transport,
        )

    @property
    def settings(self) -> ClientSettings:
        return self._settings

    async def country(self, ip: IpAddressLike = None) -> CountryLookup:
        """Country lookup for `ip`, or for the requesting address when omitted."""
        return await self._response_for(self.build_request(Endpoint.country, ip), CountryLookup)

    async def city(self, ip: IpAddressLike = None) -> CityLookup:
        """City lookup for `ip`, or for the requesting address when omitted."""
        return await self._response_for(self.build_request(Endpoint.city, ip), CityLookup)

    async def city_isp_org(self, ip: IpAddressLike = None) -> CityIspOrgLookup:
        """City/ISP/Org lookup for `ip`, or for the requesting address when omitted."""
        return await self._response_for(self.build_request(Endpoint.city_isp_org, ip), CityIspOrgLookup)

    async def omni(self, ip: IpAddressLike = None) -> OmniLookup:
        """Omni lookup for `ip`, or for the requesting address when omitted."""
        return await self._response_for(self.build_request(Endpoint.omni, ip), OmniLookup)

    async def lookup(self, request: LookupRequest) -> CountryLookup:
        """Run an arbitrary lookup; the result type follows `request.endpoint`."""
        return await self._response_for(request, self.RESULT_TYPES[request.endpoint])

    def build_uri(self, request: LookupRequest) -> str:
        return f"https://{self._settings.host}/geoip/v2.0/{request.endpoint.value}/{request.path_segment}"

    @staticmethod
    def build_request(endpoint: Endpoint, ip: IpAddressLike) -> LookupRequest:
        """Build a LookupRequest, raising InvalidIpError for anything that is not an IP address."""
        try:
            return LookupRequest(endpoint=endpoint, ip=ip)
        except ValidationError as exc:
            raise InvalidIpError(f"{ip!r} is not a valid IPv4 or IPv6 address") from exc

    async def _response_for(self, request: LookupRequest, result_type: type[LookupT]) -> LookupT:
        uri = self.build_uri(request)
        languages = request.languages or self._settings.languages

        response: RawResponse | BaseException
        try:
            response = await self._transport.get(
                uri,
                username=str(self._settings.account_id),
                password=self._settings.license_key,
            )
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            logger.error(f"Request to web service failed uri={uri} error={exc!r}")
            response = exc

        outcome = classify(response)
        if isinstance(outcome, TransportFailure):
            raise error_for_outcome(outcome, uri) from outcome.cause
        if not isinstance(outcome, Success):
            raise error_for_outcome(outcome, uri)

        body = validate_success(outcome.response, uri)
        return decode_success(body, result_type, languages)
