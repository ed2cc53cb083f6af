from __future__ import annotations

from typing import Dict

from ports.scraper import ScraperPort


ScrapeFunc = ScraperPort

_REGISTRY: Dict[str, ScrapeFunc] = {}


def register(platform: str, scrape: ScrapeFunc) -> None:
    _REGISTRY[platform] = scrape


def get_scraper(platform: str) -> ScrapeFunc:
    if platform not in _REGISTRY:
        raise KeyError(f"No scraper available for platform: {platform}")
    return _REGISTRY[platform]


def available_scrapers() -> Dict[str, ScrapeFunc]:
    return dict(_REGISTRY)
