"""Polling loop over the monitored collection pages.

One page at a time: fetch, extract, compare with the last successful scrape
and alert on newly listed titles.  The loop runs a baseline pass first, then
a pass every `interval_seconds` until `stop()` is called.
"""

from __future__ import annotations

import logging
import threading
from typing import Callable, List, Optional, Sequence

import requests

from . import config
from .detector import ChangeDetector, ChangeOutcome, StateStore
from .diff import diff_new
from .extractor import extract
from .notifier import send_change_alert
from .scraper import fetch_page
from .utils import HTTPError, get_http_session

logger = logging.getLogger(__name__)


class PageMonitor:
    def __init__(
        self,
        pages: Sequence[str],
        webhook_url: Optional[str],
        *,
        interval_seconds: float = config.CHECK_INTERVAL_SECONDS,
        initial_page_delay: float = config.INITIAL_PAGE_DELAY_SECONDS,
        page_delay: float = config.PAGE_DELAY_SECONDS,
        keywords: Optional[Sequence[str]] = None,
        session: Optional[requests.Session] = None,
        store: Optional[StateStore] = None,
        fetcher: Callable[..., str] = fetch_page,
        notify: Callable[..., bool] = send_change_alert,
        sleep: Optional[Callable[[float], bool]] = None,
    ) -> None:
        self.pages: List[str] = list(pages)
        self.webhook_url = webhook_url
        self.interval_seconds = interval_seconds
        self.initial_page_delay = initial_page_delay
        self.page_delay = page_delay
        self.keywords = list(keywords) if keywords is not None else list(config.FALLBACK_KEYWORDS)
        self.detector = ChangeDetector(store)
        self._owns_session = session is None
        self.session = session or get_http_session()
        self._fetch = fetcher
        self._notify = notify
        self._stop = threading.Event()
        # sleep(seconds) -> True when shutdown was requested during the wait.
        self._sleep = sleep or self._stop.wait

    @property
    def store(self) -> StateStore:
        return self.detector.store

    @property
    def stopped(self) -> bool:
        return self._stop.is_set()

    def stop(self) -> None:
        self._stop.set()

    def close(self) -> None:
        if self._owns_session:
            self.session.close()

    def check_page(self, url: str) -> Optional[ChangeOutcome]:
        """Scrape one page and act on the outcome.

        Returns None when the page could not be fetched; the stored state for
        `url` is left exactly as it was.
        """
        try:
            html = self._fetch(url, session=self.session)
        except (requests.RequestException, HTTPError) as e:
            logger.warning("Error scraping %s: %s", url, e)
            return None
        except Exception:
            logger.exception("Unexpected error fetching %s", url)
            return None

        try:
            extraction = extract(url, html, keywords=self.keywords)
            evaluation = self.detector.evaluate(url, extraction.products, extraction.fingerprint)

            if evaluation.outcome is ChangeOutcome.INITIAL:
                logger.info("Initial scan completed for %s (%d products)", url, len(extraction.products))
            elif evaluation.outcome is ChangeOutcome.UNCHANGED:
                logger.info("No changes detected on %s", url)
            else:
                logger.info("Change detected on %s", url)
                new_products = diff_new(extraction.products, evaluation.previous_products)
                if new_products:
                    self._notify(url, new_products, webhook_url=self.webhook_url, session=self.session)
                else:
                    logger.info("No new titles on %s (price or stock update only)", url)
            return evaluation.outcome
        except Exception:
            logger.exception("Unexpected error while checking %s", url)
            return None

    def run_pass(self, delay: float) -> None:
        for i, url in enumerate(self.pages):
            if self.stopped:
                return
            if i and self._sleep(delay):
                return
            self.check_page(url)

    def run_forever(self) -> None:
        logger.info(
            "Monitoring %d pages every %s seconds",
            len(self.pages), self.interval_seconds,
        )
        self.run_pass(self.initial_page_delay)
        while not self.stopped:
            if self._sleep(self.interval_seconds):
                break
            self.run_pass(self.page_delay)
        logger.info("Monitor stopped.")


__all__ = ["PageMonitor"]
