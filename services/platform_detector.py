from __future__ import annotations

import re
from typing import Any, List
from urllib.parse import urlparse, unquote


LINKEDIN = "linkedin"
INSTAGRAM = "instagram"
UNSUPPORTED = "unsupported"

SUPPORTED_PLATFORMS: List[str] = [LINKEDIN, INSTAGRAM]

_SCHEME_RE = re.compile(r"^[a-z][a-z0-9+.-]*://", re.IGNORECASE)
_LINKEDIN_HOST_RE = re.compile(r"(?:^|\.)linkedin\.com$")
_INSTAGRAM_HOST_RE = re.compile(r"(?:^|\.)instagram\.com$")
_INSTAGRAM_HANDLE_RE = re.compile(r"^[A-Za-z0-9_.]+$")

# Top-level Instagram routes that are not profiles
_INSTAGRAM_RESERVED = frozenset({
    "p", "reel", "reels", "explore", "stories", "accounts", "direct", "tv",
})


def _split(url: str) -> tuple[str, List[str]]:
    text = url.strip()
    if not _SCHEME_RE.match(text):
        text = f"https://{text}"
    parsed = urlparse(text)
    host = (parsed.hostname or "").lower()
    segments = [unquote(p) for p in (parsed.path or "").split("/") if p]
    return host, segments


def detect(url: Any) -> str:
    """Classify a profile URL as 'linkedin', 'instagram' or 'unsupported'."""
    if not url or not isinstance(url, str):
        return UNSUPPORTED
    try:
        host, segments = _split(url)
    except ValueError:
        return UNSUPPORTED

    if _LINKEDIN_HOST_RE.search(host):
        if len(segments) >= 2 and segments[0].lower() == "in":
            return LINKEDIN
        return UNSUPPORTED

    if _INSTAGRAM_HOST_RE.search(host):
        if (
            len(segments) == 1
            and segments[0].lower() not in _INSTAGRAM_RESERVED
            and _INSTAGRAM_HANDLE_RE.match(segments[0])
        ):
            return INSTAGRAM
        return UNSUPPORTED

    return UNSUPPORTED


def is_supported(url: Any) -> bool:
    return detect(url) != UNSUPPORTED


def supported_platforms() -> List[str]:
    return list(SUPPORTED_PLATFORMS)


def extract_username(url: Any, platform: str) -> str:
    """Return the profile slug (LinkedIn) or handle (Instagram), '' if absent."""
    if detect(url) != platform:
        return ""
    _host, segments = _split(url)
    if platform == LINKEDIN:
        return segments[1]
    if platform == INSTAGRAM:
        return segments[0]
    return ""
