from __future__ import annotations

import re
from urllib.parse import urlsplit

from .log import get_logger

logger = get_logger(__name__)

_DEFAULT_PORTS = {"http": 80, "https": 443}
_HOST_RE = re.compile(r"^(\[[0-9a-f:.]+\]|[a-z0-9_]([a-z0-9_-]*[a-z0-9_])?(\.[a-z0-9_]([a-z0-9_-]*[a-z0-9_])?)*)$")


def extract_host(url: str) -> str:
    """Return the authority of ``url`` (host and non-default port).

    Anything that is not an absolute URI is assumed to already be a bare host
    and comes back unchanged.
    """
    try:
        parsed = urlsplit(url)
        hostname = parsed.hostname
        port = parsed.port
    except ValueError:
        logger.exception("Could not parse %r as a url, using it as a host", url)
        return url
    if not parsed.scheme or not parsed.netloc or not hostname:
        logger.debug("%r is not an absolute url, using it as a host", url)
        return url
    host = hostname.lower()
    if ":" in host:
        host = f"[{host}]"
    if port is not None and port != _DEFAULT_PORTS.get(parsed.scheme.lower()):
        return f"{host}:{port}"
    return host


def strip_port(authority: str) -> str:
    authority = authority.strip().lower()
    if authority.startswith("["):
        end = authority.find("]")
        return authority[: end + 1] if end != -1 else authority
    host, _, port = authority.rpartition(":")
    if host and port.isdigit():
        return host
    return authority


def is_valid_host(host: str) -> bool:
    return bool(host) and len(host) <= 253 and bool(_HOST_RE.match(host))


def normalize_domain(value: str) -> str:
    return value.strip().lower().lstrip(".").rstrip(".")


def matches_domain(host: str, domain: str) -> bool:
    if host == domain:
        return True
    return host.endswith("." + domain)
