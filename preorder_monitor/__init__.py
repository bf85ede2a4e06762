"""
Pre-order page monitoring service package.

This package contains modules for scraping retailer collection pages,
fingerprinting their product listings, detecting newly listed products
and notifying Discord, plus the loop that drives it.  See README.md for
details.
"""

__all__ = [
    "config",
    "detector",
    "diff",
    "extractor",
    "main",
    "monitor",
    "notifier",
    "scraper",
    "sites",
    "utils",
]
