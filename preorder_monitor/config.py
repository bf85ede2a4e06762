"""Configuration loader.

Reads environment variables and `.env` to configure the service.
"""

from __future__ import annotations

import os
from typing import Optional, List
from pathlib import Path

from dotenv import load_dotenv

# Load variables from a .env file if present (project root).
load_dotenv(dotenv_path=Path(__file__).resolve().parents[1] / ".env")


def _get_env(name: str, default: Optional[str] = None) -> Optional[str]:
    return os.environ.get(name, default)


def _parse_int(value: Optional[str], default: int) -> int:
    try:
        return int(value) if value is not None else default
    except ValueError:
        return default


def _parse_float(value: Optional[str], default: float) -> float:
    try:
        return float(value) if value is not None else default
    except ValueError:
        return default


def _get_list(name: str, default: str = "") -> List[str]:
    raw = _get_env(name, default) or ""
    return [s.strip() for s in raw.split(",") if s.strip()]


# ---- Monitored pages ---------------------------------------------------------

DEFAULT_PAGES: List[str] = [
    "https://store.401games.ca/collections/all-pokemon-pre-orders",
    "https://deckoutgaming.ca/collections/pokemon-sealed-pre-orders",
]

# Comma-separated override. If unset, we fall back to DEFAULT_PAGES.
MONITORED_PAGES: List[str] = _get_list("MONITORED_PAGES") or list(DEFAULT_PAGES)

# ---- Scheduling --------------------------------------------------------------

# Seconds to wait between full passes over MONITORED_PAGES.
CHECK_INTERVAL_SECONDS: float = _parse_float(_get_env("CHECK_INTERVAL_SECONDS"), 10.0)

# Pacing between pages during the first (baseline) pass.
INITIAL_PAGE_DELAY_SECONDS: float = _parse_float(_get_env("INITIAL_PAGE_DELAY_SECONDS"), 2.0)

# Pacing between pages during every later pass.
PAGE_DELAY_SECONDS: float = _parse_float(_get_env("PAGE_DELAY_SECONDS"), 1.0)

# ---- HTTP --------------------------------------------------------------------

FETCH_TIMEOUT_SECONDS: float = _parse_float(_get_env("FETCH_TIMEOUT_SECONDS"), 30.0)

# 1 = no retry inside a cycle; the next pass is the retry.
FETCH_ATTEMPTS: int = max(1, _parse_int(_get_env("FETCH_ATTEMPTS"), 1))
NOTIFY_ATTEMPTS: int = max(1, _parse_int(_get_env("NOTIFY_ATTEMPTS"), 1))

USER_AGENT: str = _get_env(
    "USER_AGENT",
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/91.0.4472.124 Safari/537.36",
)

# ---- Extraction --------------------------------------------------------------

# Terms the generic fallback looks for when no site ruleset matches anything.
FALLBACK_KEYWORDS: List[str] = [k.lower() for k in _get_list("FALLBACK_KEYWORDS", "pokemon,tcg")]

# ---- Notifications -----------------------------------------------------------

# Discord webhook URL. Required for sending notifications.
DISCORD_WEBHOOK_URL: Optional[str] = _get_env("DISCORD_WEBHOOK_URL")

MAX_ALERT_PRODUCTS: int = max(1, _parse_int(_get_env("MAX_ALERT_PRODUCTS"), 5))

ALERT_TITLE: str = _get_env("ALERT_TITLE", "🚨 Pokemon Product Alert!")
ALERT_FOOTER: str = _get_env("ALERT_FOOTER", "Pokemon Pre-order Monitor")

# Logging level: DEBUG, INFO, WARNING, ERROR.
LOG_LEVEL: str = _get_env("LOG_LEVEL", "INFO")

# ---- Validation --------------------------------------------------------------

def validate() -> None:
    """Validate required configuration parameters."""
    if not DISCORD_WEBHOOK_URL:
        raise RuntimeError(
            "DISCORD_WEBHOOK_URL must be set. See .env.example for details."
        )
    if not MONITORED_PAGES:
        raise RuntimeError("MONITORED_PAGES resolved to an empty list.")


__all__ = [
    # Pages & scheduling
    "DEFAULT_PAGES",
    "MONITORED_PAGES",
    "CHECK_INTERVAL_SECONDS",
    "INITIAL_PAGE_DELAY_SECONDS",
    "PAGE_DELAY_SECONDS",
    # HTTP
    "FETCH_TIMEOUT_SECONDS",
    "FETCH_ATTEMPTS",
    "NOTIFY_ATTEMPTS",
    "USER_AGENT",
    # Extraction
    "FALLBACK_KEYWORDS",
    # Notifications
    "DISCORD_WEBHOOK_URL",
    "MAX_ALERT_PRODUCTS",
    "ALERT_TITLE",
    "ALERT_FOOTER",
    "LOG_LEVEL",
    # Helpers
    "validate",
]
