"""Product extraction and page fingerprinting.

Turns a collection page into a list of `ProductRecord`s and a digest of the
normalized listing.  The digest ignores tile order and anything that tends to
change between identical reloads (scripts, timestamps, session tokens), so
two scrapes of an unchanged page always fingerprint the same.
"""

from __future__ import annotations

import hashlib
import logging
import re
from dataclasses import dataclass, field
from typing import Callable, Iterable, List, Optional, Sequence, Tuple
from urllib.parse import urljoin

from bs4 import BeautifulSoup
from bs4.element import Tag

from .config import FALLBACK_KEYWORDS
from .sites import page_origin, rules_for_url

logger = logging.getLogger(__name__)

MIN_TITLE_LENGTH = 4
FALLBACK_MIN_TEXT_LENGTH = 11
FALLBACK_SELECTOR = '[href*="products"], .product, .item'

_VOLATILE_TAGS = ["script", "style", "noscript"]
_VOLATILE_MARKERS = ("timestamp", "session")

_WS_RE = re.compile(r"\s+")


@dataclass
class ProductRecord:
    title: str
    price: str = ""
    availability: str = ""
    link: Optional[str] = None


@dataclass
class Extraction:
    fingerprint: str
    products: List[ProductRecord] = field(default_factory=list)


# ---- Normalization & fingerprinting -----------------------------------------

def normalize_whitespace(text: Optional[str]) -> str:
    return _WS_RE.sub(" ", text or "").strip()


def fingerprint_line(product: ProductRecord) -> str:
    title = normalize_whitespace(product.title).lower()
    price = _WS_RE.sub("", product.price or "")
    availability = normalize_whitespace(product.availability).lower()
    return f"{title}|{price}|{availability}"


def compute_fingerprint(products: Iterable[ProductRecord]) -> str:
    """Digest of the sorted normalized lines; an empty listing digests ``""``."""
    lines = sorted(fingerprint_line(p) for p in products)
    return hashlib.sha1("\n".join(lines).encode("utf-8")).hexdigest()


# ---- Page cleanup ------------------------------------------------------------

def _is_volatile(tag: Tag) -> bool:
    classes = tag.get("class") or []
    if isinstance(classes, str):
        classes = [classes]
    haystack = (" ".join(classes) + " " + (tag.get("id") or "")).lower()
    return any(marker in haystack for marker in _VOLATILE_MARKERS)


def _strip_volatile(soup: BeautifulSoup) -> None:
    for el in soup.find_all(_VOLATILE_TAGS):
        el.extract()
    for el in soup.find_all(_is_volatile):
        el.extract()


# ---- Strategies --------------------------------------------------------------

def _first_text(card: Tag, selector: str) -> str:
    el = card.select_one(selector)
    return el.get_text(" ", strip=True) if el else ""


def _resolve(href: Optional[str], origin: str) -> Optional[str]:
    href = (href or "").strip()
    if not href:
        return None
    return urljoin(origin + "/", href)


def _extract_known_site(soup: BeautifulSoup, url: str, keywords: Sequence[str]) -> List[ProductRecord]:
    rules = rules_for_url(url)
    if rules is None:
        return []
    origin = page_origin(url)
    products: List[ProductRecord] = []
    for card in soup.select(rules.container):
        title = _first_text(card, rules.title)
        if len(title) < MIN_TITLE_LENGTH:
            continue
        link_el = card.select_one(rules.link)
        products.append(
            ProductRecord(
                title=title,
                price=_first_text(card, rules.price),
                availability=_first_text(card, rules.availability),
                link=_resolve(link_el.get("href") if link_el else None, origin),
            )
        )
    return products


def _extract_by_keywords(soup: BeautifulSoup, url: str, keywords: Sequence[str]) -> List[ProductRecord]:
    """Any product-ish element whose text mentions a tracked keyword."""
    if not keywords:
        return []
    origin = page_origin(url)
    seen: set[str] = set()
    products: List[ProductRecord] = []
    for el in soup.select(FALLBACK_SELECTOR):
        text = normalize_whitespace(el.get_text(" ", strip=True))
        if len(text) < FALLBACK_MIN_TEXT_LENGTH:
            continue
        lowered = text.lower()
        if lowered in seen or not any(k in lowered for k in keywords):
            continue
        seen.add(lowered)
        products.append(ProductRecord(title=text, link=_resolve(el.get("href"), origin)))
    return products


Strategy = Callable[[BeautifulSoup, str, Sequence[str]], List[ProductRecord]]

# Tried in order; the first non-empty result wins.
STRATEGIES: Tuple[Tuple[Callable[[str], bool], Strategy], ...] = (
    (lambda url: rules_for_url(url) is not None, _extract_known_site),
    (lambda url: True, _extract_by_keywords),
)


# ---- Public API --------------------------------------------------------------

def extract(url: str, html: Optional[str], *, keywords: Optional[Sequence[str]] = None) -> Extraction:
    """Extract products from `html` and fingerprint them.

    Never raises: markup that cannot be parsed yields an empty extraction,
    which callers treat exactly like a page with no products.
    """
    if keywords is None:
        keywords = FALLBACK_KEYWORDS
    keywords = [k.lower() for k in keywords]

    products: List[ProductRecord] = []
    try:
        soup = BeautifulSoup(html or "", "html.parser")
        _strip_volatile(soup)
        for applies, strategy in STRATEGIES:
            if not applies(url):
                continue
            products = strategy(soup, url, keywords)
            if products:
                logger.debug("%s: %d products via %s", url, len(products), strategy.__name__)
                break
    except Exception:
        logger.exception("Failed to extract products from %s", url)
        products = []

    return Extraction(fingerprint=compute_fingerprint(products), products=products)


__all__ = [
    "ProductRecord",
    "Extraction",
    "MIN_TITLE_LENGTH",
    "normalize_whitespace",
    "fingerprint_line",
    "compute_fingerprint",
    "extract",
]
