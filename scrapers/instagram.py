"""
Instagram Profile Extractor

Parses a captured Instagram profile page and fills an InstagramProfile for the
account named in the page URL. Instagram pages also embed data about other
accounts (suggestions, tagged users), so every structured lookup is anchored
on the target username.

Strategies, most structured first:
1. Embedded JSON (window._sharedData, application/json script blobs, inline user fragments)
2. Social-preview meta tags ("16M Followers, 405 Following, 870 Posts - bio")
3. Header / bio DOM selectors and the verified badge
4. Main content text for counts and the private-account marker
"""

from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional, Tuple

from bs4 import BeautifulSoup

from config.settings import get_settings
from models import InstagramProfile
from scrapers.base import (
    clean_text,
    fill_missing,
    find_user_object,
    missing_fields,
    parse_document,
    select_first_text,
)
from scrapers.registry import register
from services.platform_detector import INSTAGRAM, extract_username
from utils.number_parsing import parse_instagram_count

logger = logging.getLogger(__name__)

_COUNT = r"(\d[\d,]*(?:\.\d+)?[KMB]?)"

_SHARED_DATA_RE = re.compile(r"^\s*window\._sharedData\s*=\s*(\{.*\})\s*;?\s*$", re.DOTALL)

_TITLE_HANDLE_RE = re.compile(r"^([^(]+?)\s*\(@[^)]+\)")
_TITLE_BULLET_RE = re.compile(r"^([^•|]+)")
_META_BIO_RE = re.compile(r"Posts?\s*-\s*(.+)$", re.IGNORECASE | re.DOTALL)
_META_QUOTED_BIO_RE = re.compile(r"on Instagram:\s*[\"“](.*)[\"”]\s*$", re.DOTALL)
_META_BOILERPLATE_PREFIX = "see instagram photos and videos from"

_FOLLOWERS_RE = re.compile(_COUNT + r"\s*Followers?", re.IGNORECASE)
_FOLLOWING_RE = re.compile(_COUNT + r"\s*Following", re.IGNORECASE)
_POSTS_RE = re.compile(_COUNT + r"\s*Posts?", re.IGNORECASE)
_COUNT_LINE_RE = re.compile(r"^\d[\d,.]*[KMB]?\s+(?:followers?|following|posts?)", re.IGNORECASE)
_PRIVATE_RE = re.compile(r"this account is private", re.IGNORECASE)

NAME_SELECTORS: Tuple[str, ...] = (
    "h1",
    "h2",
    ".x1lliihq",
    '[class*="Title"]',
    'span[dir="auto"]',
)

BIO_SELECTORS: Tuple[str, ...] = (
    "div._aa_c span",
    "header + div span",
    '[class*="biography"]',
    'section div span[dir="auto"]',
)

VERIFIED_BADGE_SELECTOR = 'svg[aria-label*="Verified"], span[aria-label*="Verified"]'
MAIN_CONTENT_SELECTOR = 'main, section[role="main"], article'


@dataclass
class _Page:
    soup: BeautifulSoup
    html: str
    username: str


def _as_text(value: Any) -> str:
    return value if isinstance(value, str) else ""


def _edge_count(user: Dict[str, Any], edge: str) -> Any:
    value = user.get(edge)
    if isinstance(value, dict):
        return value.get("count")
    return None


def _user_fields(user: Dict[str, Any]) -> Dict[str, Any]:
    """Map an Instagram user object (graphql or web API shape) to profile fields."""
    return {
        "display_name": clean_text(_as_text(user.get("full_name")) or _as_text(user.get("fullName"))),
        "bio": (_as_text(user.get("biography")) or _as_text(user.get("bio"))).strip(),
        "follower_count": parse_instagram_count(
            _edge_count(user, "edge_followed_by") or user.get("follower_count")
        ),
        "following_count": parse_instagram_count(
            _edge_count(user, "edge_follow") or user.get("following_count")
        ),
        "post_count": parse_instagram_count(
            _edge_count(user, "edge_owner_to_timeline_media") or user.get("media_count")
        ),
        "is_verified": bool(user.get("is_verified") or user.get("verified")),
        "is_private": bool(user.get("is_private")),
    }


def _script_text(script) -> str:
    return script.string or script.get_text() or ""


def _from_shared_data(page: _Page) -> Optional[Dict[str, Any]]:
    for script in page.soup.find_all("script"):
        m = _SHARED_DATA_RE.match(_script_text(script))
        if not m:
            continue
        try:
            data = json.loads(m.group(1))
        except (ValueError, RecursionError):
            logger.debug("Skipping unparsable window._sharedData block")
            continue
        try:
            user = data["entry_data"]["ProfilePage"][0]["graphql"]["user"]
        except (KeyError, IndexError, TypeError):
            continue
        if isinstance(user, dict) and _as_text(user.get("username")).lower() == page.username.lower():
            return _user_fields(user)
    return None


def _from_json_scripts(page: _Page) -> Optional[Dict[str, Any]]:
    max_depth = get_settings().json_search_max_depth
    for script in page.soup.find_all("script", attrs={"type": "application/json"}):
        text = _script_text(script).strip()
        if not text:
            continue
        try:
            data = json.loads(text)
        except (ValueError, RecursionError):
            logger.debug("Skipping unparsable application/json script (%d chars)", len(text))
            continue
        user = find_user_object(data, page.username, max_depth=max_depth)
        if user is not None:
            logger.debug("Found user data in JSON blob for %s", page.username)
            return _user_fields(user)
    return None


def _decode_json_string(raw: str) -> str:
    try:
        return json.loads(f'"{raw}"')
    except (ValueError, RecursionError):
        return raw.replace("\\n", "\n").replace('\\"', '"')


def _from_inline_fragments(page: _Page) -> Optional[Dict[str, Any]]:
    handle = re.escape(page.username)
    string = r'"((?:[^"\\]|\\.)*)"'
    patterns = (
        re.compile(
            rf'"username":"{handle}"[^}}]{{0,500}}"full_name":{string}[^}}]{{0,500}}'
            rf'"biography":{string}[^}}]{{0,500}}"edge_followed_by":\{{"count":(\d+)\}}',
            re.IGNORECASE,
        ),
        re.compile(
            rf'"username":"{handle}"[^}}]{{0,300}}"full_name":{string}[^}}]{{0,300}}"biography":{string}',
            re.IGNORECASE,
        ),
    )
    for pattern in patterns:
        m = pattern.search(page.html)
        if not m:
            continue
        groups = m.groups()
        return {
            "display_name": clean_text(_decode_json_string(groups[0])),
            "bio": _decode_json_string(groups[1]).strip(),
            "follower_count": parse_instagram_count(groups[2]) if len(groups) > 2 else 0,
        }
    return None


def _from_embedded_json(page: _Page) -> Optional[Dict[str, Any]]:
    if not page.username:
        return None
    for method in (_from_shared_data, _from_json_scripts, _from_inline_fragments):
        data = method(page)
        if data:
            return data
    return None


def _meta_content(soup: BeautifulSoup, **attrs: str) -> str:
    tag = soup.find("meta", attrs=attrs)
    content = tag.get("content") if tag is not None else None
    return content.strip() if isinstance(content, str) else ""


def _display_name_from_title(title: str) -> str:
    m = _TITLE_HANDLE_RE.match(title) or _TITLE_BULLET_RE.match(title)
    if not m:
        return ""
    name = clean_text(m.group(1))
    return "" if name.lower() == "instagram" else name


def _bio_from_description(description: str) -> str:
    m = _META_BIO_RE.search(description)
    if not m:
        return ""
    bio = m.group(1).strip()
    quoted = _META_QUOTED_BIO_RE.search(bio)
    if quoted:
        return quoted.group(1).strip()
    if bio.lower().startswith(_META_BOILERPLATE_PREFIX):
        return ""
    return bio


def _from_meta_tags(page: _Page) -> Dict[str, Any]:
    og_title = _meta_content(page.soup, property="og:title")
    og_description = _meta_content(page.soup, property="og:description")
    description = _meta_content(page.soup, name="description")
    text = og_description or description

    followers = _FOLLOWERS_RE.search(text)
    following = _FOLLOWING_RE.search(text)
    posts = _POSTS_RE.search(text)
    return {
        "display_name": _display_name_from_title(og_title),
        "bio": _bio_from_description(og_description),
        "follower_count": parse_instagram_count(followers.group(1)) if followers else 0,
        "following_count": parse_instagram_count(following.group(1)) if following else 0,
        "post_count": parse_instagram_count(posts.group(1)) if posts else 0,
    }


def _from_dom(page: _Page) -> Dict[str, Any]:
    username = page.username.lower()
    header = page.soup.select_one("header")

    def _is_handle(text: str) -> bool:
        return text.startswith("@") or text.lower() == username

    display_name = select_first_text(header, NAME_SELECTORS, reject=_is_handle)

    min_bio_length = get_settings().min_bio_length
    bio = ""
    for selector in BIO_SELECTORS:
        for element in page.soup.select(selector):
            text = clean_text(element.get_text(" "))
            if (
                len(text) > min_bio_length
                and text.lower() != username
                and text != display_name
                and not _COUNT_LINE_RE.match(text)
            ):
                bio = text
                break
        if bio:
            break

    badge_scope = header if header is not None else page.soup
    return {
        "display_name": display_name,
        "bio": bio,
        "is_verified": badge_scope.select_one(VERIFIED_BADGE_SELECTOR) is not None,
    }


def _from_main_content(page: _Page) -> Dict[str, Any]:
    main = page.soup.select_one(MAIN_CONTENT_SELECTOR)
    if main is None:
        logger.debug("Could not find main content area")
        return {}
    text = clean_text(main.get_text(" "))
    followers = _FOLLOWERS_RE.search(text)
    following = _FOLLOWING_RE.search(text)
    posts = _POSTS_RE.search(text)
    return {
        "follower_count": parse_instagram_count(followers.group(1)) if followers else 0,
        "following_count": parse_instagram_count(following.group(1)) if following else 0,
        "post_count": parse_instagram_count(posts.group(1)) if posts else 0,
        "is_private": bool(_PRIVATE_RE.search(text)),
    }


# (strategy, fields whose absence triggers it); an empty tuple always runs
_CASCADE: Tuple[Tuple[Callable[[_Page], Optional[Dict[str, Any]]], Tuple[str, ...]], ...] = (
    (_from_embedded_json, ()),
    (_from_meta_tags, ("display_name", "follower_count")),
    (_from_dom, ("display_name",)),
    (_from_main_content, ("follower_count", "following_count")),
)


def scrape(html: str, url: str) -> InstagramProfile:
    """Extract the profile named in ``url`` from a captured Instagram page.

    Never raises: on an unexpected failure the fields gathered so far are returned.
    """
    profile = InstagramProfile(url=url)
    try:
        profile.username = extract_username(url, INSTAGRAM).lower()
        page = _Page(soup=parse_document(html), html=html or "", username=profile.username)
        for strategy, triggers in _CASCADE:
            if triggers and not missing_fields(profile, triggers):
                continue
            filled = fill_missing(profile, strategy(page))
            if filled:
                logger.debug("%s filled %s", strategy.__name__, ", ".join(filled))
        logger.info(
            "Instagram profile scraped: %s followers=%d following=%d posts=%d verified=%s",
            profile.username or "-",
            profile.follower_count,
            profile.following_count,
            profile.post_count,
            profile.is_verified,
            extra={"platform": INSTAGRAM, "status": "ok"},
        )
    except Exception as e:
        logger.exception(
            "Error scraping Instagram profile %s", url,
            extra={"platform": INSTAGRAM, "status": "partial", "error": type(e).__name__},
        )
    return profile


register(INSTAGRAM, scrape)
