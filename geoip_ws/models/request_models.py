from enum import Enum
from ipaddress import ip_address

from pydantic import BaseModel, ConfigDict, Field, field_validator

from geoip_ws.config import normalize_languages


class Endpoint(str, Enum):
    """Lookup endpoints of the GeoIP2 web service, from least to most data."""

    country = "country"
    city = "city"
    city_isp_org = "city_isp_org"
    omni = "omni"


class LookupRequest(BaseModel):
    """A single lookup against one endpoint.

    If `ip` is provided, the service will look up that explicit IP address.
    If `ip` is omitted or blank, the service looks up the caller's own address.

    `languages` overrides the client's language preference for this lookup;
    when omitted the client default is used.
    """

    model_config = ConfigDict(frozen=True)

    endpoint: Endpoint = Field(description="Endpoint to query.")
    ip: str | None = Field(
        default=None,
        description="IPv4 or IPv6 address to look up. If omitted, the caller's IP is used.",
        examples=["8.8.8.8", "2001:4860:4860::8888"],
    )
    languages: tuple[str, ...] | None = Field(
        default=None,
        description="Language codes for localized names, most preferred first.",
        examples=[["de", "en"]],
    )

    @field_validator("ip", mode="before")
    @classmethod
    def _validate_ip(cls, value: object) -> str | None:
        """Validate that ip is either empty/None or a valid IP address (IPv4 or IPv6).

        - None or blank string -> treated as None (caller IP lookup, no error).
        - Non-blank -> must be a valid IP literal. The normalized textual form
          is returned, so `ipaddress` objects are accepted as well.
        """
        if value is None:
            return None

        value_str = str(value).strip()
        if not value_str:
            return None

        try:
            return str(ip_address(value_str))
        except ValueError as exc:
            raise ValueError("ip must be a valid IPv4 or IPv6 address") from exc

    @field_validator("languages")
    @classmethod
    def _validate_languages(cls, value: tuple[str, ...] | None) -> tuple[str, ...] | None:
        if value is None:
            return None
        return normalize_languages(value)

    @property
    def path_segment(self) -> str:
        """Trailing URL segment: the IP address, or `me` for the caller's address."""
        return self.ip or "me"
