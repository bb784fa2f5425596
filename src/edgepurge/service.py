import os
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import Depends, FastAPI

from .cloudflare import CloudflareClient
from .config import load_config
from .log import get_logger
from .models import (
    PurgeEverythingRequest,
    PurgePagesRequest,
    PurgeResponse,
    SslStatusResponse,
    ZoneListResponse,
)
from .purge import PurgeManager
from .report import summarize

logger = get_logger(__name__)

settings = load_config(os.getenv("EDGEPURGE_CONFIG"))
settings.cloudflare = settings.cloudflare.with_env_credentials()
if not settings.cloudflare.has_credentials:
    logger.warning("No Cloudflare credentials configured; provider calls will fail")

provider = CloudflareClient(settings.cloudflare)
purge_manager = PurgeManager.from_settings(settings, provider)


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
    yield
    provider.close()


app = FastAPI(lifespan=lifespan)


def get_manager() -> PurgeManager:
    return purge_manager


@app.get("/health")
def health() -> dict:
    return {"status": "ok", "purge_enabled": settings.purge_enabled}


@app.post("/v1/purge_everything", response_model=PurgeResponse)
def purge_everything(
    payload: PurgeEverythingRequest, manager: PurgeManager = Depends(get_manager)
) -> PurgeResponse:
    results = [manager.purge_everything(payload.domain)]
    return PurgeResponse(results=results, summary=summarize(results))


@app.post("/v1/purge_pages", response_model=PurgeResponse)
def purge_pages(
    payload: PurgePagesRequest, manager: PurgeManager = Depends(get_manager)
) -> PurgeResponse:
    results = manager.purge_pages(payload.urls)
    return PurgeResponse(results=results, summary=summarize(results))


@app.get("/v1/zones", response_model=ZoneListResponse)
def list_zones(manager: PurgeManager = Depends(get_manager)) -> ZoneListResponse:
    return ZoneListResponse(zones=manager.list_zones())


@app.get("/v1/zones/{zone_id}/ssl", response_model=SslStatusResponse)
def ssl_status(
    zone_id: str, manager: PurgeManager = Depends(get_manager)
) -> SslStatusResponse:
    return SslStatusResponse(zone_id=zone_id, enabled=manager.is_ssl_enabled(zone_id))
