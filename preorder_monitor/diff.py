"""Find products worth alerting on between two scrapes of the same page."""

from __future__ import annotations

from typing import Iterable, List

from .extractor import ProductRecord


def diff_new(current: Iterable[ProductRecord], previous: Iterable[ProductRecord]) -> List[ProductRecord]:
    """Return products in `current` whose title was not listed in `previous`.

    Titles compare case-insensitively.  A product whose price or stock text
    changed under the same title is not new.  With no previous listing there
    is nothing to compare against, so nothing is new.
    """
    previous_titles = {p.title.lower() for p in previous}
    if not previous_titles:
        return []
    return [p for p in current if p.title.lower() not in previous_titles]


__all__ = ["diff_new"]
