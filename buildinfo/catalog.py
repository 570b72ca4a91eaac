"""Integrations catalog client.

Fetches the list of available integrations once per TTL window and
validates each entry. Settings compilation uses it to resolve the
integrations a framework recommends into installable versions.

Failures surface as CatalogFetchError; an unreachable catalog is never
reported as an empty one.
"""

import logging
import time
from typing import Optional

import httpx
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from buildinfo.core.config import Settings, get_settings

logger = logging.getLogger(__name__)

# TTL cache: catalog url -> (integrations, expire_monotonic)
_CACHE: dict[str, tuple[list["IntegrationResponse"], float]] = {}


class CatalogFetchError(Exception):
    """The integrations catalog could not be fetched or parsed."""


class IntegrationResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    slug: str
    name: str = ""
    host_site_url: Optional[str] = Field(default=None, alias="hostSiteUrl")
    has_build: bool = Field(default=False, alias="hasBuild")

    def to_dict(self) -> dict:
        return {
            "slug": self.slug,
            "version": self.host_site_url,
            "has_build": self.has_build,
        }


async def get_available_integrations(
    config: Optional[Settings] = None,
    *,
    offline: bool = False,
) -> list[IntegrationResponse]:
    """Return every integration the catalog offers.

    Returns an empty list in offline mode or when no catalog is configured.
    """
    config = config or get_settings()
    if offline or config.offline or not config.catalog_url:
        return []

    url = config.catalog_url
    cached = _CACHE.get(url)
    if cached and time.monotonic() < cached[1]:
        return cached[0]

    async with httpx.AsyncClient(timeout=config.catalog_timeout) as client:
        integrations = await _fetch(client, url)

    _CACHE[url] = (integrations, time.monotonic() + config.catalog_cache_ttl)
    logger.info("Fetched %d integrations from %s", len(integrations), url)
    return integrations


async def _fetch(client: httpx.AsyncClient, url: str) -> list[IntegrationResponse]:
    try:
        response = await client.get(url)
        response.raise_for_status()
        payload = response.json()
    except httpx.HTTPError as exc:
        raise CatalogFetchError(f"Could not fetch integrations from {url}: {exc}") from exc
    except ValueError as exc:
        raise CatalogFetchError(f"Integrations catalog at {url} is not JSON") from exc

    if not isinstance(payload, list):
        raise CatalogFetchError(f"Integrations catalog at {url} is not a list")
    try:
        return [IntegrationResponse.model_validate(entry) for entry in payload]
    except ValidationError as exc:
        raise CatalogFetchError(f"Invalid integration in catalog: {exc}") from exc


def clear_cache() -> None:
    _CACHE.clear()
