"""Per-page change detection.

The detector owns the only mutable state in the service: the last
successful fingerprint and product list for each monitored URL.  State
lives in memory only, so a restart re-baselines every page.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional

from .extractor import ProductRecord, compute_fingerprint

logger = logging.getLogger(__name__)


class ChangeOutcome(enum.Enum):
    INITIAL = "initial"
    UNCHANGED = "unchanged"
    CHANGED = "changed"


@dataclass(frozen=True)
class PageState:
    fingerprint: str
    products: List[ProductRecord] = field(default_factory=list)


@dataclass
class Evaluation:
    outcome: ChangeOutcome
    # Product list as it was before this evaluation overwrote the state.
    previous_products: List[ProductRecord] = field(default_factory=list)


class StateStore:
    """In-memory map of page URL to its most recent successful `PageState`."""

    def __init__(self) -> None:
        self._states: Dict[str, PageState] = {}

    def get(self, url: str) -> Optional[PageState]:
        return self._states.get(url)

    def put(self, url: str, state: PageState) -> None:
        self._states[url] = state

    def __contains__(self, url: object) -> bool:
        return url in self._states

    def __len__(self) -> int:
        return len(self._states)

    def __iter__(self) -> Iterator[str]:
        return iter(self._states)


class ChangeDetector:
    def __init__(self, store: Optional[StateStore] = None) -> None:
        self.store = store if store is not None else StateStore()

    def evaluate(
        self,
        url: str,
        products: List[ProductRecord],
        fingerprint: Optional[str] = None,
    ) -> Evaluation:
        """Classify this scrape of `url` and record it as the new baseline.

        Must be called once per *successful* scrape; the stored state is
        replaced whatever the outcome.
        """
        if fingerprint is None:
            fingerprint = compute_fingerprint(products)

        previous = self.store.get(url)
        self.store.put(url, PageState(fingerprint=fingerprint, products=list(products)))

        if previous is None:
            return Evaluation(ChangeOutcome.INITIAL)
        if previous.fingerprint == fingerprint:
            return Evaluation(ChangeOutcome.UNCHANGED, list(previous.products))
        return Evaluation(ChangeOutcome.CHANGED, list(previous.products))


__all__ = ["ChangeOutcome", "PageState", "Evaluation", "StateStore", "ChangeDetector"]
