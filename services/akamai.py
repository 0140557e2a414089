import json
import logging

import requests
from pydantic import ValidationError

from models.purge import PurgeResponse
from services.errors import (
    PayloadEncodeError,
    RequestBuildError,
    UpstreamDecodeError,
    UpstreamSigningError,
    UpstreamTransportError,
)
from services.signing import RequestSigner

logger = logging.getLogger(__name__)


def forward_purge(
        purge_url: str,
        objects: list[str],
        signer: RequestSigner,
        timeout: float,
) -> tuple[int, PurgeResponse, dict]:
    """
    Send a signed purge call to Akamai and decode what comes back.
    Returns the upstream status code, the decoded response and the body
    exactly as Akamai sent it.
    Nothing is retried: the first failure is raised as an UpstreamError.
    """
    try:
        payload = json.dumps({"objects": objects})
    except (TypeError, ValueError) as e:
        logger.error("Failed to marshal payload: %s", e)
        raise PayloadEncodeError() from e

    try:
        prepared = requests.Request(
            "POST",
            purge_url,
            data=payload.encode("utf-8"),
            headers={"Content-Type": "application/json"},
        ).prepare()
    except requests.RequestException as e:
        logger.error("Failed to create HTTP request for %s: %s", purge_url, e)
        raise RequestBuildError() from e

    try:
        signed = signer.sign(prepared)
    except UpstreamSigningError:
        raise
    except Exception as e:
        logger.error("Signer failed for %s: %s", purge_url, e)
        raise UpstreamSigningError() from e

    logger.debug("Sending purge | url=%s objects=%d", purge_url, len(objects))
    with requests.Session() as session:
        try:
            response = session.send(signed, timeout=timeout)
        except requests.RequestException as e:
            logger.error("Failed to send request to Akamai: %s", e)
            raise UpstreamTransportError() from e

        try:
            body = response.json()
            akamai_resp = PurgeResponse.model_validate(body)
        except (ValueError, RecursionError, ValidationError) as e:
            logger.error("Failed to decode Akamai response (status=%d): %s", response.status_code, e)
            raise UpstreamDecodeError() from e
        finally:
            response.close()

    logger.info("akamai-response,detail='%s',status=%d", akamai_resp.detail, akamai_resp.http_status)
    return response.status_code, akamai_resp, body
