import logging
from fastapi import APIRouter, Depends

from config import Settings, get_settings
from models.health import HealthResponse

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health(settings: Settings = Depends(get_settings)):
    logger.debug("Health check | akamai_host=%s post_purge=%s", settings.akamai_host, settings.post_purge_enabled)

    return HealthResponse(
        status="ok",
        akamai_host=settings.akamai_host,
        post_purge_enabled=settings.post_purge_enabled,
    )
