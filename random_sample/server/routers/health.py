"""Health check router."""

import logging

from fastapi import APIRouter, Depends

from random_sample.library import JellyfinClient
from random_sample.server.dependencies import get_config, get_jellyfin_client
from random_sample.server.schemas import HealthResponse
from random_sample.utils.config import Config

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
def health_check(
    config: Config = Depends(get_config),
    client: JellyfinClient = Depends(get_jellyfin_client),
):
    """Check server health and media server connectivity."""
    reachable = client.ping()
    return HealthResponse(
        status="ok" if reachable else "degraded",
        host_url=client.base_url,
        host_reachable=reachable,
        plugin_store=config.plugin.store,
    )
