from __future__ import annotations

from typing import Iterable, Optional

from .cloudflare import CdnProvider
from .log import get_logger
from .models import Zone

logger = get_logger(__name__)


class ZoneResolver:
    """Maps hosts to allowed zones and caches the provider's zone listing.

    The listing cache has no expiry. Concurrent first calls may each fetch;
    the last write wins, which is harmless since every fetch returns the same
    zones.
    """

    def __init__(self, allowed_zones: Iterable[Zone], provider: CdnProvider) -> None:
        self.allowed_zones = list(allowed_zones)
        self.provider = provider
        self._zones_cache: list[Zone] = []

    def get_zone(self, host_or_url: Optional[str]) -> Optional[Zone]:
        # First match in configuration order, not the most specific zone.
        if host_or_url:
            for zone in self.allowed_zones:
                if zone.name and zone.name in host_or_url:
                    return zone
        logger.error(
            "Could not retrieve the zone from cloudflare with the domain(url) of %s",
            host_or_url,
        )
        return None

    def list_zones(self) -> list[Zone]:
        if self._zones_cache:
            return list(self._zones_cache)
        try:
            zones = list(self.provider.list_zones())
        except Exception:
            logger.exception("Could not list zones from cloudflare")
            return []
        self._zones_cache = zones
        return list(zones)

    def clear_cache(self) -> None:
        self._zones_cache = []
