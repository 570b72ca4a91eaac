from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Library settings loaded from BUILDINFO_* environment variables.

    These configure the collaborators around detection (catalog fetches,
    error reporting, logging). Detection itself only reads the environment
    snapshot handed to the Project.
    """

    model_config = SettingsConfigDict(
        env_prefix="BUILDINFO_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Integrations catalog; leave blank to skip catalog lookups.
    catalog_url: str = ""
    catalog_timeout: float = 10.0
    catalog_cache_ttl: int = 3600

    # Skip every network call (catalog fetches return nothing)
    offline: bool = False

    # Sentry; leave blank to disable error capture.
    sentry_dsn: str = ""
    environment: str = "development"

    debug: bool = False

    @field_validator("catalog_url", mode="before")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/") if isinstance(v, str) else v


def get_settings() -> Settings:
    return Settings()
