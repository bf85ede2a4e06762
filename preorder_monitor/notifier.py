"""Discord webhook notifier.

Sends one embed per detected change listing the newly seen products on
a monitored page.  Delivery problems are logged and reported through the
return value; they never propagate into the polling loop.
"""
from __future__ import annotations

import datetime as _dt
import logging
from typing import List, Optional, Sequence

import requests

from .config import (
    ALERT_FOOTER,
    ALERT_TITLE,
    DISCORD_WEBHOOK_URL,
    FETCH_TIMEOUT_SECONDS,
    MAX_ALERT_PRODUCTS,
    NOTIFY_ATTEMPTS,
)
from .extractor import ProductRecord
from .sites import site_display_name
from .utils import HTTPError, get_http_session, retryable_request

logger = logging.getLogger(__name__)

ALERT_COLOR = 0x00FF00


@retryable_request(attempts=NOTIFY_ATTEMPTS)
def _post(session: requests.Session, url: str, **kwargs) -> requests.Response:
    return session.post(url, **kwargs)


def _product_field(index: int, product: ProductRecord) -> dict:
    lines = [f"**{product.title}**"]
    if product.price:
        lines.append(f"💰 {product.price}")
    if product.availability:
        lines.append(f"📦 {product.availability}")
    if product.link:
        lines.append(f"🔗 [View Product]({product.link})")
    return {"name": f"🎯 Product {index}", "value": "\n".join(lines), "inline": False}


def build_alert_embed(
    url: str,
    new_products: Sequence[ProductRecord],
    *,
    now: Optional[_dt.datetime] = None,
    max_products: int = MAX_ALERT_PRODUCTS,
) -> dict:
    website = site_display_name(url)
    now = now or _dt.datetime.now(_dt.timezone.utc)
    count = len(new_products)

    fields: List[dict] = [
        {"name": "Website", "value": website, "inline": True},
        {"name": "Timestamp", "value": now.isoformat(), "inline": True},
    ]
    for i, product in enumerate(new_products[:max_products], start=1):
        fields.append(_product_field(i, product))
    if count > max_products:
        fields.append(
            {
                "name": "📝 Note",
                "value": f"+ {count - max_products} more changes detected",
                "inline": False,
            }
        )

    return {
        "title": ALERT_TITLE,
        "url": url,
        "description": f"{count} change(s) detected on {website}",
        "color": ALERT_COLOR,
        "fields": fields,
        "footer": {"text": ALERT_FOOTER},
    }


def send_change_alert(
    url: str,
    new_products: Sequence[ProductRecord],
    webhook_url: Optional[str] = None,
    session: Optional[requests.Session] = None,
) -> bool:
    """Post an alert for `new_products` found on `url`; return True on delivery."""
    if not new_products:
        logger.debug("No new products for %s; skipping notification.", url)
        return False
    if webhook_url is None:
        webhook_url = DISCORD_WEBHOOK_URL
    if not webhook_url:
        logger.error("Discord webhook URL is not configured. Cannot send notification.")
        return False

    close_session = False
    if session is None:
        session = get_http_session()
        close_session = True

    try:
        payload = {"embeds": [build_alert_embed(url, list(new_products))]}
        _post(session, webhook_url, json=payload, timeout=FETCH_TIMEOUT_SECONDS)
        logger.info("Discord notification sent for %s with %d product(s)", url, len(new_products))
        return True
    except (requests.RequestException, HTTPError) as e:
        logger.error("Error sending Discord notification for %s: %s", url, e)
        return False
    finally:
        if close_session:
            session.close()


__all__ = ["build_alert_embed", "send_change_alert"]
