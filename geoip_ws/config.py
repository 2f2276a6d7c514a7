import os

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_HOST = "geoip.maxmind.com"
DEFAULT_LANGUAGES: tuple[str, ...] = ("en",)
DEFAULT_TIMEOUT_SECONDS = 5.0


def normalize_languages(value: tuple[str, ...]) -> tuple[str, ...]:
    """Strip language codes and drop blank ones; at least one must remain."""
    languages = tuple(code.strip() for code in value if code.strip())
    if not languages:
        raise ValueError("languages must contain at least one language code")
    return languages


class ClientSettings(BaseModel):
    """Immutable configuration shared by every lookup made through one client.

    Instances are frozen, so a single settings object can be read from
    several concurrent lookups.
    """

    model_config = ConfigDict(frozen=True)

    account_id: int = Field(description="Numeric account identifier used as the basic-auth username.")
    license_key: str = Field(description="License key used as the basic-auth password.")
    host: str = DEFAULT_HOST
    languages: tuple[str, ...] = Field(
        default=DEFAULT_LANGUAGES,
        description="Language codes for localized names, most preferred first.",
    )
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS

    @field_validator("host", mode="before")
    @classmethod
    def _strip_host(cls, value: str) -> str:
        return str(value).strip().rstrip("/")

    @field_validator("languages")
    @classmethod
    def _validate_languages(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        return normalize_languages(value)

    @classmethod
    def from_env(cls) -> "ClientSettings":
        """Build settings from GEOIP_* environment variables.

        GEOIP_ACCOUNT_ID and GEOIP_LICENSE_KEY are required; GEOIP_HOST,
        GEOIP_LANGUAGES (comma separated) and GEOIP_TIMEOUT_SECONDS fall back
        to the defaults.
        """
        languages = os.getenv("GEOIP_LANGUAGES")
        return cls(
            account_id=os.getenv("GEOIP_ACCOUNT_ID", ""),
            license_key=os.getenv("GEOIP_LICENSE_KEY", ""),
            host=os.getenv("GEOIP_HOST", DEFAULT_HOST),
            languages=tuple(languages.split(",")) if languages else DEFAULT_LANGUAGES,
            timeout_seconds=os.getenv("GEOIP_TIMEOUT_SECONDS", DEFAULT_TIMEOUT_SECONDS),
        )
