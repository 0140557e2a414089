import asyncio
import logging

from fastapi import APIRouter, BackgroundTasks, Depends, Request
from fastapi.responses import JSONResponse

from config import Settings, get_settings
from models.purge import ErrorResponse, PurgeResponse, PurgeType
from services.akamai import forward_purge
from services.post_purge import execute_post_purge_requests, should_run_post_purge
from services.signing import RequestSigner, get_signer
from services.urls import duplicate_urls_with_bypass
from services.validation import build_purge_url, parse_purge_request

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post(
    "/api/v1/purge",
    response_model=PurgeResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def purge(
        request: Request,
        background_tasks: BackgroundTasks,
        settings: Settings = Depends(get_settings),
        signer: RequestSigner = Depends(get_signer),
):
    """
    Forward a purge request to Akamai and relay its answer.
    The upstream status code is passed through unchanged.
    """
    purge_request = parse_purge_request(request.headers.get("content-type"), await request.body())
    purge_url = build_purge_url(settings.akamai_host, purge_request)

    paths_to_purge = purge_request.paths
    if purge_request.purge_type == PurgeType.URLS.value:
        paths_to_purge = duplicate_urls_with_bypass(purge_request.paths)

    logger.info(
        "Purge request | type=%s action=%s env=%s paths=%d objects=%d",
        purge_request.purge_type, purge_request.action_type, purge_request.environment,
        len(purge_request.paths), len(paths_to_purge),
    )

    loop = asyncio.get_event_loop()
    status_code, akamai_resp, upstream_body = await loop.run_in_executor(
        None,
        forward_purge,
        purge_url,
        paths_to_purge,
        signer,
        settings.request_timeout_seconds,
    )

    if should_run_post_purge(
        akamai_resp.http_status,
        purge_request.post_purge_request,
        settings.post_purge_enabled,
    ):
        background_tasks.add_task(
            execute_post_purge_requests,
            list(purge_request.paths),
            dict(settings.post_purge_headers),
            settings.post_purge_delay_seconds,
            settings.request_timeout_seconds,
        )

    return JSONResponse(
        status_code=status_code,
        content=upstream_body,
        background=background_tasks,
    )
