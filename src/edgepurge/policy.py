from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional

from .urls import extract_host, is_valid_host, matches_domain, normalize_domain, strip_port


@dataclass
class DomainAllowList:
    domains: list[str]

    @classmethod
    def from_config(cls, domains: Iterable[str]) -> "DomainAllowList":
        normalized = [normalize_domain(d) for d in domains if d and d.strip()]
        return cls(domains=normalized)

    def is_allowed(self, url: str) -> bool:
        host = url_host(url)
        if not host:
            return False
        return any(matches_domain(host, domain) for domain in self.domains)

    def filter_to_allowed_domains(self, urls: Iterable[str]) -> list[str]:
        return [url for url in urls if self.is_allowed(url)]


def url_host(url: str) -> Optional[str]:
    """Bare, lower-cased host of ``url`` or None when it has no usable host."""
    if not url or not url.strip():
        return None
    host = strip_port(extract_host(url.strip()))
    if host.endswith("."):
        host = host[:-1]
    try:
        ascii_host = host.encode("idna").decode("ascii")
    except UnicodeError:
        return None
    if not is_valid_host(ascii_host):
        return None
    return host
