import json
from typing import Any

from arvan_vod._vod_logging import get_logger

logger = get_logger(__name__)


def decode_body(content: bytes, status_code: int) -> Any:
    """
    Decode the body of a successful response.

    The body is JSON decoded when possible. An empty body, or one that is not valid
    JSON, is returned as text: a decode failure after a successful status is not an
    error.

    Parameters:
    ----------
    content: bytes
        The raw response body.
    status_code: int
        The HTTP status code of the response.

    Returns:
    -------
    Any:
        The decoded JSON document, or the body text.
    """
    text = content.decode("utf-8", errors="replace") if content else ""
    if not text.strip():
        return text

    try:
        return json.loads(text)
    except ValueError:
        logger.debug(f"Response body with status {status_code} is not JSON, returning raw text")
        return text
