"""Records that make up a GeoIP2 lookup result.

Records with localized names pick their `name` from the language list passed
as validation context under the ``languages`` key, e.g.::

    CityLookup.model_validate_json(body, context={"languages": ["de", "en"]})

Without a context the default language list (``["en"]``) is used.
"""

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, model_validator

from geoip_ws.config import DEFAULT_LANGUAGES

LANGUAGES_CONTEXT_KEY = "languages"


class GeoIPModel(BaseModel):
    """Base for all web service models; unknown JSON fields are ignored."""

    model_config = ConfigDict(extra="ignore")


class NamedRecord(GeoIPModel):
    """A record carrying localized names keyed by language code."""

    geoname_id: int | None = None
    names: dict[str, str] = Field(default_factory=dict)
    name: str | None = Field(
        default=None,
        description="Name in the first preferred language present in `names`.",
    )

    @model_validator(mode="after")
    def _select_name(self, info: ValidationInfo) -> "NamedRecord":
        context = info.context or {}
        languages = context.get(LANGUAGES_CONTEXT_KEY) or DEFAULT_LANGUAGES
        self.name = next((self.names[language] for language in languages if language in self.names), None)
        return self


class Continent(NamedRecord):
    code: str | None = None


class Country(NamedRecord):
    confidence: int | None = None
    iso_code: str | None = None


class RepresentedCountry(Country):
    """Country represented by the users of the IP address, e.g. a military base."""

    type: str | None = None


class City(NamedRecord):
    confidence: int | None = None


class Subdivision(NamedRecord):
    confidence: int | None = None
    iso_code: str | None = None


class Location(GeoIPModel):
    accuracy_radius: int | None = None
    latitude: float | None = None
    longitude: float | None = None
    metro_code: int | None = None
    time_zone: str | None = None


class Postal(GeoIPModel):
    code: str | None = None
    confidence: int | None = None


class Traits(GeoIPModel):
    ip_address: str | None = None
    autonomous_system_number: int | None = None
    autonomous_system_organization: str | None = None
    domain: str | None = None
    isp: str | None = None
    organization: str | None = None
    user_type: str | None = None
    is_anonymous_proxy: bool = False
    is_satellite_provider: bool = False


class MaxMind(GeoIPModel):
    """Information about the account used for the request."""

    queries_remaining: int | None = None
