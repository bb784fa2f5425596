from __future__ import annotations

from typing import Iterable, Optional, Sequence

from .cloudflare import CdnProvider
from .config import Settings
from .log import get_logger
from .models import PurgeOutcome, Zone
from .policy import DomainAllowList
from .urls import extract_host, strip_port
from .zones import ZoneResolver

logger = get_logger(__name__)

DISABLED_MESSAGE = (
    "Cloudflare purging is turned off as indicated in the configuration."
)
API_ERROR_MESSAGE = (
    "There was an error from the Cloudflare API. Please check the logs for details."
)
INVALID_DOMAIN_MESSAGE = (
    "We could not purge the cache because the domain {domain} is not valid with "
    "the provided api key and email combo. Please ensure this domain is "
    "registered under these credentials on your cloudflare dashboard."
)
UNRESOLVED_GROUP_MESSAGE = (
    "Could not retrieve the zone from cloudflare with the domain(url) of {domain}"
)
PURGED_URL_MESSAGE = "Purged for url {url}"

SSL_DISABLED_VALUE = "off"


def group_by_host(urls: Iterable[str]) -> dict[str, list[str]]:
    """Group urls by authority, keeping first-appearance order."""
    groups: dict[str, list[str]] = {}
    for url in urls:
        groups.setdefault(extract_host(url), []).append(url)
    return groups


class PurgeManager:
    def __init__(
        self,
        settings: Settings,
        allow_list: DomainAllowList,
        resolver: ZoneResolver,
        provider: CdnProvider,
    ) -> None:
        self.settings = settings
        self.allow_list = allow_list
        self.resolver = resolver
        self.provider = provider

    @classmethod
    def from_settings(cls, settings: Settings, provider: CdnProvider) -> "PurgeManager":
        allowed_zones = [Zone(id=z.id, name=z.name) for z in settings.allowed_zones]
        return cls(
            settings,
            DomainAllowList.from_config(settings.allowed_domains),
            ZoneResolver(allowed_zones, provider),
            provider,
        )

    def purge_everything(self, domain: str) -> PurgeOutcome:
        if not self.settings.purge_enabled:
            return PurgeOutcome.failure(DISABLED_MESSAGE)

        domain = extract_host(domain)
        zone = self.resolver.get_zone(domain)
        if zone is None:
            return PurgeOutcome.failure(INVALID_DOMAIN_MESSAGE.format(domain=domain))

        if not self._purge(zone, None, purge_everything=True):
            return PurgeOutcome.failure(API_ERROR_MESSAGE)
        logger.info("Purged everything for zone %s (%s)", zone.name, zone.id)
        return PurgeOutcome.success()

    def purge_pages(self, urls: Iterable[str]) -> list[PurgeOutcome]:
        if not self.settings.purge_enabled:
            return [PurgeOutcome.failure(DISABLED_MESSAGE)]

        allowed = self.allow_list.filter_to_allowed_domains(urls)
        results: list[PurgeOutcome] = []
        # One provider call per host; hosts sharing a zone are not merged.
        for host, group in group_by_host(allowed).items():
            zone = self.resolver.get_zone(strip_port(host))
            if zone is None:
                results.append(
                    PurgeOutcome.failure(UNRESOLVED_GROUP_MESSAGE.format(domain=host))
                )
                continue
            if not self._purge(zone, group):
                results.append(PurgeOutcome.failure(API_ERROR_MESSAGE))
                continue
            results.extend(
                PurgeOutcome.success(PURGED_URL_MESSAGE.format(url=url)) for url in group
            )
        return results

    def is_ssl_enabled(self, zone_id: str) -> bool:
        try:
            status = self.provider.get_ssl_status(zone_id)
        except Exception:
            logger.exception("Could not read the ssl setting for zone %s", zone_id)
            return False
        return status.value != SSL_DISABLED_VALUE

    def list_zones(self) -> list[Zone]:
        return self.resolver.list_zones()

    def _purge(
        self,
        zone: Zone,
        urls: Optional[Sequence[str]],
        purge_everything: bool = False,
    ) -> bool:
        try:
            return bool(
                self.provider.purge_cache(
                    zone.id, urls, purge_everything=purge_everything
                )
            )
        except Exception:
            logger.exception("Purge request for zone %s raised", zone.id)
            return False
