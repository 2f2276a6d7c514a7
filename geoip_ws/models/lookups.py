from pydantic import Field

from geoip_ws.models.records import (
    City,
    Continent,
    Country,
    GeoIPModel,
    Location,
    MaxMind,
    Postal,
    RepresentedCountry,
    Subdivision,
    Traits,
)


class CountryLookup(GeoIPModel):
    """Result of the `country` endpoint.

    Every record is always present; records the service did not return are
    left empty rather than set to None.
    """

    continent: Continent = Field(default_factory=Continent)
    country: Country = Field(default_factory=Country)
    registered_country: Country = Field(default_factory=Country)
    represented_country: RepresentedCountry = Field(default_factory=RepresentedCountry)
    traits: Traits = Field(default_factory=Traits)
    maxmind: MaxMind = Field(default_factory=MaxMind)


class CityLookup(CountryLookup):
    """Result of the `city` endpoint."""

    city: City = Field(default_factory=City)
    location: Location = Field(default_factory=Location)
    postal: Postal = Field(default_factory=Postal)
    subdivisions: list[Subdivision] = Field(default_factory=list)

    @property
    def most_specific_subdivision(self) -> Subdivision:
        if not self.subdivisions:
            return Subdivision()
        return self.subdivisions[-1]


class CityIspOrgLookup(CityLookup):
    """Result of the `city_isp_org` endpoint (ISP and organization in `traits`)."""


class OmniLookup(CityIspOrgLookup):
    """Result of the `omni` endpoint, the richest of the four."""
