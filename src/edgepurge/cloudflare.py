from __future__ import annotations

from typing import Any, Optional, Protocol, Sequence

import httpx
from pydantic import ValidationError

from .config import CloudflareConfig
from .log import get_logger
from .models import ApiEnvelope, SslStatus, Zone

logger = get_logger(__name__)


class ProviderError(Exception):
    """The CDN provider rejected a request or could not be reached."""


class CdnProvider(Protocol):
    def list_zones(self) -> list[Zone]: ...

    def purge_cache(
        self,
        zone_id: str,
        urls: Optional[Sequence[str]] = None,
        purge_everything: bool = False,
    ) -> bool: ...

    def get_ssl_status(self, zone_id: str) -> SslStatus: ...


def build_auth_headers(config: CloudflareConfig) -> dict[str, str]:
    headers = {"Content-Type": "application/json"}
    if config.api_token:
        headers["Authorization"] = f"Bearer {config.api_token}"
    elif config.email and config.api_key:
        headers["X-Auth-Email"] = config.email
        headers["X-Auth-Key"] = config.api_key
    return headers


class CloudflareClient:
    def __init__(
        self, config: CloudflareConfig, client: Optional[httpx.Client] = None
    ) -> None:
        self.config = config
        self._client = client or httpx.Client(
            base_url=config.api_base_url.rstrip("/"),
            headers=build_auth_headers(config),
            timeout=config.timeout_s,
        )

    def __enter__(self) -> "CloudflareClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def close(self) -> None:
        self._client.close()

    def _request(self, method: str, path: str, **kwargs: Any) -> ApiEnvelope:
        try:
            resp = self._client.request(method, path, **kwargs)
        except httpx.HTTPError as exc:
            raise ProviderError(f"{method} {path} failed: {exc}") from exc
        try:
            envelope = ApiEnvelope.model_validate(resp.json())
        except (ValueError, ValidationError) as exc:
            raise ProviderError(
                f"{method} {path} returned an unreadable body (HTTP {resp.status_code})"
            ) from exc
        if resp.status_code >= 400 or not envelope.success:
            raise ProviderError(
                f"{method} {path} failed (HTTP {resp.status_code}): "
                f"errors={envelope.errors} messages={envelope.messages}"
            )
        return envelope

    def list_zones(self) -> list[Zone]:
        zones: list[Zone] = []
        page = 1
        while True:
            envelope = self._request(
                "GET",
                "/zones",
                params={"page": page, "per_page": self.config.zones_per_page},
            )
            zones.extend(Zone.model_validate(item) for item in envelope.result or [])
            total_pages = int((envelope.result_info or {}).get("total_pages") or 1)
            if page >= total_pages:
                return zones
            page += 1

    def purge_cache(
        self,
        zone_id: str,
        urls: Optional[Sequence[str]] = None,
        purge_everything: bool = False,
    ) -> bool:
        path = f"/zones/{zone_id}/purge_cache"
        if purge_everything:
            payloads = [{"purge_everything": True}]
        else:
            files = [u for u in urls or [] if u]
            if not files:
                return True
            size = self.config.purge_batch_size
            payloads = [
                {"files": files[i : i + size]} for i in range(0, len(files), size)
            ]
        for payload in payloads:
            try:
                self._request("POST", path, json=payload)
            except ProviderError:
                logger.exception("Cloudflare purge failed for zone %s", zone_id)
                return False
        return True

    def get_ssl_status(self, zone_id: str) -> SslStatus:
        envelope = self._request("GET", f"/zones/{zone_id}/settings/ssl")
        result = envelope.result or {}
        try:
            return SslStatus.model_validate(result)
        except ValidationError as exc:
            raise ProviderError(f"Unexpected ssl setting payload: {result}") from exc
