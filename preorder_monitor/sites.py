"""Known storefronts and the CSS selectors used to read their grids."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple
from urllib.parse import urlparse


@dataclass(frozen=True)
class SiteRules:
    name: str           # display name used in alerts
    marker: str         # substring of the page URL that selects this ruleset
    container: str      # one element per product tile
    title: str
    price: str
    availability: str   # stock badge / add-to-cart button text
    link: str


SITE_RULES: Tuple[SiteRules, ...] = (
    SiteRules(
        name="401 Games",
        marker="401games.ca",
        container=".product-item, .grid-item, .product-card",
        title='.product-item__title, .product-title, h2, h3, .card-title, a[href*="products"]',
        price=".price, .money, .product-price, .cost",
        availability=".product-item__inventory, .inventory, .stock, .badge, .btn",
        link='a[href*="products"]',
    ),
    SiteRules(
        name="Deck Out Gaming",
        marker="deckoutgaming.ca",
        container=".product-item, .product-card, .grid__item, .product-wrap",
        title='.card__heading, .product-title, h2, h3, .card-title, a[href*="products"]',
        price=".price, .money, .product-price, .cost",
        availability=".badge, .product-form__cart-submit, .btn, .stock, .inventory",
        link='a[href*="products"]',
    ),
)


def rules_for_url(url: str) -> Optional[SiteRules]:
    """Return the first ruleset whose marker appears in `url`, if any."""
    for rules in SITE_RULES:
        if rules.marker in (url or ""):
            return rules
    return None


def page_origin(url: str) -> str:
    parsed = urlparse(url)
    return f"{parsed.scheme}://{parsed.netloc}"


def site_display_name(url: str) -> str:
    rules = rules_for_url(url)
    if rules:
        return rules.name
    host = urlparse(url).netloc or url
    return host[4:] if host.startswith("www.") else host


__all__ = ["SiteRules", "SITE_RULES", "rules_for_url", "page_origin", "site_display_name"]
