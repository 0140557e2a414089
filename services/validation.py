import json
import logging

from pydantic import ValidationError

from models.purge import PurgeRequest, PurgeType
from services.errors import InvalidBody, InvalidContentType, InvalidPayload, InvalidPurgeType

logger = logging.getLogger(__name__)

JSON_CONTENT_TYPE = "application/json"

_PURGE_SEGMENTS = {
    PurgeType.URLS: "url",
    PurgeType.CACHE_TAGS: "tag",
}


def parse_purge_request(content_type: str | None, body: bytes) -> PurgeRequest:
    """
    Check the content type and the body of an incoming purge call and
    turn it into a PurgeRequest.
    """
    if content_type != JSON_CONTENT_TYPE:
        logger.error("Invalid content type: %r", content_type)
        raise InvalidContentType()

    try:
        data = json.loads(body)
    except (ValueError, RecursionError) as e:
        logger.error("Invalid JSON body: %s", e)
        raise InvalidBody() from e

    try:
        return PurgeRequest.model_validate(data)
    except (ValidationError, RecursionError) as e:
        logger.error("Failed to parse request: %s", e)
        raise InvalidPayload() from e


def build_purge_url(host: str, request: PurgeRequest) -> str:
    try:
        segment = _PURGE_SEGMENTS[PurgeType(request.purge_type)]
    except ValueError:
        logger.error("Invalid purge type: %r", request.purge_type)
        raise InvalidPurgeType()

    return f"{host.rstrip('/')}/ccu/v3/{request.action_type}/{segment}/{request.environment}"
