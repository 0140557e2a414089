"""
URL helpers for the cache bypass variants.

A purge of "urls" also has to invalidate the copy cached under
`?imbypass=true`, so every path is paired with that variant.
"""
import logging
import re
from urllib.parse import quote_plus, unquote_plus, urlsplit, urlunsplit

from services.errors import InvalidURLError

logger = logging.getLogger(__name__)

BYPASS_PARAM = "imbypass"
BYPASS_VALUE = "true"

_CONTROL_CHARS = re.compile(r"[\x00-\x1f\x7f]")
_BAD_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")


def _parse_query(raw_query: str) -> dict[str, list[str]]:
    """
    Split a raw query into key -> values, keeping first-seen order.
    Pairs with a `;` or a broken escape are dropped.
    """
    params: dict[str, list[str]] = {}
    for part in raw_query.split("&"):
        if not part or ";" in part or _BAD_ESCAPE.search(part):
            continue
        key, _, value = part.partition("=")
        params.setdefault(unquote_plus(key), []).append(unquote_plus(value))
    return params


def _encode_query(params: dict[str, list[str]]) -> str:
    # keys sorted, values keep their order
    return "&".join(
        f"{quote_plus(key, safe='')}={quote_plus(value, safe='')}"
        for key in sorted(params)
        for value in params[key]
    )


def _split(url: str):
    if _CONTROL_CHARS.search(url):
        raise InvalidURLError(f"invalid control character in URL: {url!r}")
    if url[:1].isspace():
        raise InvalidURLError(f"leading whitespace in URL: {url!r}")
    if url.startswith(":"):
        raise InvalidURLError(f"missing protocol scheme: {url!r}")

    try:
        parts = urlsplit(url)
        parts.port
    except ValueError as e:
        raise InvalidURLError(f"{url!r}: {e}") from e

    if _BAD_ESCAPE.search(parts.netloc) or _BAD_ESCAPE.search(parts.path):
        raise InvalidURLError(f"invalid URL escape in {url!r}")

    return parts


def add_query_param(url: str, key: str, value: str) -> str:
    """
    Set `key=value` on the URL's query string, replacing any existing value
    for that key. The whole query is re-encoded with keys in sorted order.

    Raises InvalidURLError when the URL cannot be parsed.
    """
    parts = _split(url)
    params = _parse_query(parts.query)
    params[key] = [value]
    return urlunsplit(parts._replace(query=_encode_query(params)))


def with_bypass(url: str) -> str:
    return add_query_param(url, BYPASS_PARAM, BYPASS_VALUE)


def duplicate_urls_with_bypass(paths: list[str]) -> list[str]:
    """
    Return every path followed by its imbypass=true variant.
    A path whose variant cannot be built is kept on its own.
    """
    result = []
    for path in paths:
        result.append(path)
        try:
            result.append(with_bypass(path))
        except InvalidURLError as e:
            logger.warning("Failed to add %s parameter to %s: %s", BYPASS_PARAM, path, e)

    return result
