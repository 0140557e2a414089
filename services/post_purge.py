"""
Follow-up GET requests after a successful purge.

Runs as background work once the purge response has been sent, so nothing
here can change what the caller got back. Failures are logged per URL and
the sweep carries on.
"""
import logging
import time

import requests

from services.errors import InvalidURLError
from services.urls import BYPASS_PARAM, with_bypass

logger = logging.getLogger(__name__)


def is_2xx(status: int) -> bool:
    return 200 <= status < 300


def should_run_post_purge(upstream_status: int, requested: bool, enabled: bool) -> bool:
    return is_2xx(upstream_status) and requested and enabled


def _urls_to_request(path: str) -> list[str]:
    urls = [path]
    try:
        urls.append(with_bypass(path))
    except InvalidURLError as e:
        logger.warning("Failed to add %s parameter to %s: %s", BYPASS_PARAM, path, e)
    return urls


def _warm(session: requests.Session, url: str, headers: dict[str, str], timeout: float) -> None:
    try:
        response = session.get(url, headers=headers, timeout=timeout, stream=True)
    except requests.RequestException as e:
        logger.error("Failed to send GET request to %s: %s", url, e)
        return

    try:
        # drain so the connection goes back to the pool
        for _ in response.iter_content(chunk_size=8192):
            pass
    except requests.RequestException as e:
        logger.warning("Failed to read response body from %s: %s", url, e)
    finally:
        response.close()

    logger.info("GET request to %s returned status code %d", url, response.status_code)


def execute_post_purge_requests(
        paths: list[str],
        headers: dict[str, str],
        delay: float,
        timeout: float,
) -> None:
    """
    Wait `delay` seconds for the invalidation to propagate, then GET every
    path and its imbypass=true variant, one at a time.
    """
    logger.info("Post-purge requests scheduled | paths=%d delay=%.1fs", len(paths), delay)
    time.sleep(delay)

    with requests.Session() as session:
        for path in paths:
            for url in _urls_to_request(path):
                _warm(session, url, headers, timeout)

    logger.info("Post-purge requests complete | paths=%d", len(paths))
