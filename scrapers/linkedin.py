"""
LinkedIn Profile Extractor

Parses a captured LinkedIn /in/ page into a LinkedInProfile. Each field is
resolved by an ordered table of strategies; the first non-empty result wins.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Callable, Optional, Tuple

from bs4 import BeautifulSoup

from config.settings import get_settings
from models import LinkedInProfile
from scrapers.base import clean_text, first_match, parse_document, select_first_text
from scrapers.registry import register
from services.platform_detector import LINKEDIN
from utils.number_parsing import parse_connection_count, parse_linkedin_count

logger = logging.getLogger(__name__)

NAME_SELECTORS: Tuple[str, ...] = (
    "h1.text-heading-xlarge",
    ".pv-text-details__left-panel h1",
    "h1.inline.t-24.v-align-middle.break-words",
    ".pv-top-card--list li:first-child",
    "div.ph5 h1",
)

HEADLINE_SELECTORS: Tuple[str, ...] = (
    ".text-body-medium.break-words",
    ".pv-text-details__left-panel .text-body-medium",
    "div.text-body-medium.break-words",
    ".pv-top-card--list.pv-top-card--list-bullet.mt1 li:first-child",
)

LOCATION_SELECTORS: Tuple[str, ...] = (
    ".text-body-small.inline.t-black--light.break-words",
    ".pv-text-details__left-panel .text-body-small",
    "span.text-body-small.inline.t-black--light.break-words",
    ".pv-top-card--list-bullet li",
)

ABOUT_SELECTORS: Tuple[str, ...] = (
    "#about ~ * .display-flex.ph5.pv3",
    'section[data-section="summary"] .pv-shared-text-with-see-more',
    ".pv-about-section .pv-about__summary-text",
    'div[id="about"] ~ div .inline-show-more-text',
)

# Content holders inside the section that owns the "About" heading
ABOUT_CONTENT_SELECTORS: Tuple[str, ...] = (
    ".inline-show-more-text",
    ".pv-shared-text-with-see-more",
    ".display-flex",
    "p",
)

COUNT_ELEMENT_SELECTOR = "a, button"

_ABOUT_HEADING_RE = re.compile(r"^about(?:\s+about)?$", re.IGNORECASE)
_ABOUT_RAW_RE = re.compile(
    r">\s*About\s*</(?:h2|h3|span|div)>(.*?)<(?:section|h2|h3)\b",
    re.IGNORECASE | re.DOTALL,
)
_LEADING_ABOUT_RE = re.compile(r"^(?:about\s+)+", re.IGNORECASE)
_MIN_RAW_ABOUT_LENGTH = 20
_OG_TITLE_SUFFIX_RE = re.compile(r"\s*\|\s*LinkedIn.*$", re.IGNORECASE)
_FOLLOWERS_RE = re.compile(r"(\d[\d,.]*[KM]?\+?)\s*followers?", re.IGNORECASE)
_CONNECTIONS_RE = re.compile(r"(\d[\d,.]*[KM]?\+?)\s*connections?", re.IGNORECASE)

_NON_CONTENT_PARENTS = ["header", "nav", "footer", "script", "style", "noscript"]


@dataclass
class _Page:
    soup: BeautifulSoup
    html: str


def _is_contact_info(text: str) -> bool:
    return "contact info" in text.lower()


def _og_title_parts(page: _Page) -> Tuple[str, str]:
    tag = page.soup.find("meta", attrs={"property": "og:title"})
    content = tag.get("content") if tag is not None else None
    if not isinstance(content, str):
        return "", ""
    title = _OG_TITLE_SUFFIX_RE.sub("", content).strip()
    if " - " in title:
        name, headline = title.split(" - ", 1)
        return name.strip(), headline.strip()
    return title, ""


def _name_from_selectors(page: _Page) -> str:
    return select_first_text(page.soup, NAME_SELECTORS)


def _name_from_og_title(page: _Page) -> str:
    return _og_title_parts(page)[0]


def _headline_from_selectors(page: _Page) -> str:
    return select_first_text(page.soup, HEADLINE_SELECTORS)


def _headline_from_og_title(page: _Page) -> str:
    return _og_title_parts(page)[1]


def _location_from_selectors(page: _Page) -> str:
    return select_first_text(page.soup, LOCATION_SELECTORS, reject=_is_contact_info)


def _about_from_heading(page: _Page) -> str:
    """Text of the content block that shares a section with an "About" heading."""
    for heading in page.soup.find_all(["h2", "h3"]):
        if not _ABOUT_HEADING_RE.match(clean_text(heading.get_text(" "))):
            continue
        container = heading.find_parent("section")
        if container is None and heading.parent is not None:
            container = heading.parent.parent
        if container is not None:
            for selector in ABOUT_CONTENT_SELECTORS:
                for element in container.select(selector):
                    if any(node is heading for node in element.descendants):
                        continue
                    text = clean_text(element.get_text(" "))
                    if text and not _ABOUT_HEADING_RE.match(text):
                        return text
        for sibling in heading.find_next_siblings():
            text = clean_text(sibling.get_text(" "))
            if text:
                return text
    return ""


def _about_from_selectors(page: _Page) -> str:
    return select_first_text(page.soup, ABOUT_SELECTORS)


def _about_from_raw_html(page: _Page) -> str:
    for m in _ABOUT_RAW_RE.finditer(page.html):
        fragment = BeautifulSoup(m.group(1), "html.parser")
        text = clean_text(fragment.get_text(" "))
        text = _LEADING_ABOUT_RE.sub("", text)
        if len(text) >= _MIN_RAW_ABOUT_LENGTH:
            return text
    return ""


def _about_from_text_blocks(page: _Page) -> str:
    """Last resort: the first substantial, unlabeled paragraph on the page."""
    min_length = get_settings().min_about_length
    headline = _headline_from_selectors(page)
    for element in page.soup.find_all(["p", "span"]):
        if element.find_parent(_NON_CONTENT_PARENTS) is not None:
            continue
        text = clean_text(element.get_text(" "))
        if len(text) >= min_length and text != headline:
            return text
    return ""


NAME_STRATEGIES: Tuple[Callable[[_Page], str], ...] = (_name_from_selectors, _name_from_og_title)
HEADLINE_STRATEGIES: Tuple[Callable[[_Page], str], ...] = (_headline_from_selectors, _headline_from_og_title)
LOCATION_STRATEGIES: Tuple[Callable[[_Page], str], ...] = (_location_from_selectors,)
ABOUT_STRATEGIES: Tuple[Callable[[_Page], str], ...] = (
    _about_from_heading,
    _about_from_selectors,
    _about_from_raw_html,
    _about_from_text_blocks,
)


def _count_from_elements(page: _Page, keyword: str, pattern: re.Pattern) -> Optional[str]:
    for element in page.soup.select(COUNT_ELEMENT_SELECTOR):
        text = clean_text(element.get_text(" "))
        if keyword not in text.lower():
            continue
        m = pattern.search(text)
        if m:
            return m.group(1)
    return None


def _count_from_body(page: _Page, pattern: re.Pattern) -> Optional[str]:
    root = page.soup.body or page.soup
    m = pattern.search(clean_text(root.get_text(" ")))
    return m.group(1) if m else None


def _follower_count(page: _Page) -> int:
    token = _count_from_elements(page, "follower", _FOLLOWERS_RE) or _count_from_body(page, _FOLLOWERS_RE)
    return parse_linkedin_count(token)


def _connection_count(page: _Page) -> int:
    token = _count_from_elements(page, "connection", _CONNECTIONS_RE) or _count_from_body(page, _CONNECTIONS_RE)
    return parse_connection_count(token)


def scrape(html: str, url: str) -> LinkedInProfile:
    """Extract a LinkedIn profile from captured page HTML.

    Never raises: on an unexpected failure the fields gathered so far are returned.
    """
    profile = LinkedInProfile(url=url)
    try:
        page = _Page(soup=parse_document(html), html=html or "")
        profile.name = first_match(NAME_STRATEGIES, page)
        profile.headline = first_match(HEADLINE_STRATEGIES, page)
        profile.location = first_match(LOCATION_STRATEGIES, page)
        profile.about = first_match(ABOUT_STRATEGIES, page)
        profile.follower_count = _follower_count(page)
        profile.connection_count = _connection_count(page)
        logger.info(
            "LinkedIn profile scraped: %s followers=%d connections=%d",
            profile.name or "-",
            profile.follower_count,
            profile.connection_count,
            extra={"platform": LINKEDIN, "status": "ok"},
        )
    except Exception as e:
        logger.exception(
            "Error scraping LinkedIn profile %s", url,
            extra={"platform": LINKEDIN, "status": "partial", "error": type(e).__name__},
        )
    return profile


register(LINKEDIN, scrape)
