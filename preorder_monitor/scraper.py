from __future__ import annotations

import logging
from typing import Optional

import requests

from .config import FETCH_ATTEMPTS, FETCH_TIMEOUT_SECONDS
from .utils import get_http_session, retryable_request

logger = logging.getLogger(__name__)


@retryable_request(attempts=FETCH_ATTEMPTS)
def _get(session: requests.Session, url: str, **kwargs) -> requests.Response:
    """Thin wrapper around session.get with retry policy from utils.retryable_request."""
    return session.get(url, **kwargs)


def fetch_page(
    url: str,
    *,
    session: Optional[requests.Session] = None,
    timeout: float = FETCH_TIMEOUT_SECONDS,
) -> str:
    """Return the HTML of a collection page.

    Raises `requests.RequestException` or `utils.HTTPError` on network
    failure, timeout or a non-success status.
    """
    close_session = False
    if session is None:
        session = get_http_session()
        close_session = True
    try:
        logger.info("Scraping: %s", url)
        resp = _get(session, url, timeout=timeout)
        return resp.text
    finally:
        if close_session:
            session.close()


__all__ = ["fetch_page"]
