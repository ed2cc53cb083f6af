from __future__ import annotations

import pytest


def test_builtin_scrapers_registered():
    # Import package to trigger registration
    import scrapers  # noqa: F401
    from scrapers.registry import available_scrapers, get_scraper

    names = available_scrapers().keys()
    assert "linkedin" in names
    assert "instagram" in names
    assert get_scraper("instagram") is scrapers.scrape_instagram


def test_unknown_platform_raises_key_error():
    from scrapers.registry import get_scraper

    with pytest.raises(KeyError):
        get_scraper("myspace")
