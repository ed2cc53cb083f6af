"""
Platform profile extractors.

Importing this package registers every extractor with ``scrapers.registry``.

Supported platforms:
    - LinkedIn (/in/ profile pages)
    - Instagram (root-level profile pages)
"""

from . import instagram, linkedin  # noqa: F401 ensure registration
from .instagram import scrape as scrape_instagram
from .linkedin import scrape as scrape_linkedin

__all__ = [
    "scrape_instagram",
    "scrape_linkedin",
]
