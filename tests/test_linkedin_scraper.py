from __future__ import annotations

import pytest

from scrapers import linkedin


URL = "https://www.linkedin.com/in/ada-lovelace/"

PROFILE_HTML = (
    "<html><body><main>"
    '<section class="pv-top-card">'
    '<h1 class="text-heading-xlarge">Ada Lovelace</h1>'
    '<div class="text-body-medium break-words">Analytical Engine Programmer</div>'
    '<span class="text-body-small inline t-black--light break-words">London, United Kingdom</span>'
    '<ul><li><a href="#followers">2,345 followers</a></li><li><span>500+ connections</span></li></ul>'
    "</section>"
    "<section><h2>About</h2>"
    '<div class="inline-show-more-text">I write programs for machines that do not exist yet.</div>'
    "</section>"
    "</main></body></html>"
)


def test_full_profile():
    profile = linkedin.scrape(PROFILE_HTML, URL)
    assert profile.platform == "linkedin"
    assert profile.url == URL
    assert profile.name == "Ada Lovelace"
    assert profile.headline == "Analytical Engine Programmer"
    assert profile.location == "London, United Kingdom"
    assert profile.about == "I write programs for machines that do not exist yet."
    assert profile.follower_count == 2345
    assert profile.connection_count == 500


def test_og_title_fallback_for_name_and_headline():
    html = (
        '<html><head><meta property="og:title" content="Grace Hopper - Rear Admiral | LinkedIn"></head>'
        "<body></body></html>"
    )
    profile = linkedin.scrape(html, URL)
    assert profile.name == "Grace Hopper"
    assert profile.headline == "Rear Admiral"


def test_location_skips_contact_info():
    html = (
        "<html><body>"
        '<span class="text-body-small inline t-black--light break-words">Contact info</span>'
        '<ul class="pv-top-card--list-bullet"><li>Berlin, Germany</li></ul>'
        "</body></html>"
    )
    profile = linkedin.scrape(html, URL)
    assert profile.location == "Berlin, Germany"


def test_about_from_raw_markup():
    html = (
        "<html><body>"
        "<div><span>About</span></div><div>Building tools for data teams since 2010.</div>"
        "<section><p>Experience</p></section>"
        "</body></html>"
    )
    profile = linkedin.scrape(html, URL)
    assert profile.about == "Building tools for data teams since 2010."


def test_about_from_long_text_block():
    summary = "Engineer " * 15
    html = (
        "<html><body>"
        "<header><p>" + "Navigation text " * 10 + "</p></header>"
        f"<div><p>{summary}</p></div>"
        "</body></html>"
    )
    profile = linkedin.scrape(html, URL)
    assert profile.about == summary.strip()


def test_counts_from_body_text():
    html = "<html><body><div>1.2K followers</div><div>321 connections</div></body></html>"
    profile = linkedin.scrape(html, URL)
    assert profile.follower_count == 1200
    assert profile.connection_count == 321


@pytest.mark.parametrize("html", ["", "<html></html>"])
def test_missing_data_yields_empty_profile(html):
    profile = linkedin.scrape(html, URL)
    assert profile.name == ""
    assert profile.about == ""
    assert profile.follower_count == 0
    assert profile.connection_count == 0


def test_failure_returns_partial_profile(monkeypatch):
    def _boom(page):
        raise RuntimeError("count parsing exploded")

    monkeypatch.setattr(linkedin, "_follower_count", _boom)
    profile = linkedin.scrape(PROFILE_HTML, URL)
    assert profile.name == "Ada Lovelace"
    assert profile.about.startswith("I write programs")
    assert profile.follower_count == 0


def test_follower_count_with_plus_suffix():
    html = '<html><body><a href="#followers">10,000+ followers</a></body></html>'
    profile = linkedin.scrape(html, URL)
    assert profile.follower_count == 10000


def test_about_from_summary_selector():
    html = (
        "<html><body>"
        '<section data-section="summary">'
        '<div class="pv-shared-text-with-see-more">Curious about compilers and coffee.</div>'
        "</section>"
        "</body></html>"
    )
    profile = linkedin.scrape(html, URL)
    assert profile.about == "Curious about compilers and coffee."
