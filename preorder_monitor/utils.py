"""Helper utilities.

This module centralises common helper functions such as creating a
configured HTTP session and applying retry policies to network calls.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Optional

import requests
from requests import Response
from tenacity import (after_log, retry, retry_if_exception_type,
                      stop_after_attempt, wait_exponential)

from .config import USER_AGENT


logger = logging.getLogger(__name__)


def get_http_session(user_agent: Optional[str] = None) -> requests.Session:
    """Return a new HTTP session with browser-like defaults.

    Collection pages are served as regular storefront HTML, so the session
    presents itself as a desktop browser.  Caller is responsible for
    closing the session or letting it be garbage collected.
    """
    session = requests.Session()
    session.headers.update(
        {
            "User-Agent": user_agent or USER_AGENT,
            "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
            "Accept-Language": "en-CA,en;q=0.9",
        }
    )
    return session


class HTTPError(Exception):
    """Raised when an HTTP request fails after retries."""


def _raise_for_status(resp: Response) -> None:
    try:
        resp.raise_for_status()
    except requests.RequestException as e:
        raise HTTPError(str(e)) from e


def retryable_request(attempts: int = 1) -> Callable[[Callable[..., Response]], Callable[..., Response]]:
    """Decorator factory to apply retry logic to HTTP calls.

    The decorated function must accept a `requests.Session` as its first
    argument, followed by URL and optional kwargs, and return a
    `requests.Response`.  Network errors and non-success statuses are
    retried up to `attempts` times in total with exponential back-off
    between 1 and 10 seconds; the last error is re-raised.  With the
    default of a single attempt nothing is retried.
    """

    def decorator(method: Callable[..., Response]) -> Callable[..., Response]:
        @retry(
            reraise=True,
            stop=stop_after_attempt(max(1, attempts)),
            wait=wait_exponential(multiplier=1, min=1, max=10),
            retry=(
                retry_if_exception_type(requests.RequestException)
                | retry_if_exception_type(HTTPError)
            ),
            after=after_log(logger, logging.WARNING),
        )
        def wrapper(session: requests.Session, url: str, **kwargs: Any) -> Response:
            response = method(session, url, **kwargs)
            _raise_for_status(response)
            return response

        return wrapper

    return decorator


__all__ = ["get_http_session", "retryable_request", "HTTPError"]
