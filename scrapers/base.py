"""
Shared pieces of the extraction cascade.

Every extractor builds a profile with empty defaults and then runs an ordered
list of strategies over the parsed document. A strategy returns a partial
mapping of field -> value; ``fill_missing`` merges it so that a value found by
an earlier (more reliable) strategy is never replaced by a later one.
"""

from __future__ import annotations

import logging
import re
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Sequence

from bs4 import BeautifulSoup
from pydantic import BaseModel

logger = logging.getLogger(__name__)

_WHITESPACE_RE = re.compile(r"\s+")

# Keys that mark a nested JSON object as a populated user record
_USER_PROFILE_KEYS = ("full_name", "fullName", "biography", "edge_followed_by")


def parse_document(html: str) -> BeautifulSoup:
    return BeautifulSoup(html or "", "html.parser")


def clean_text(text: Optional[str]) -> str:
    if not text:
        return ""
    return _WHITESPACE_RE.sub(" ", text).strip()


def is_missing(value: Any) -> bool:
    return value is None or value == "" or value is False or value == 0


def missing_fields(profile: BaseModel, fields: Iterable[str]) -> List[str]:
    return [f for f in fields if is_missing(getattr(profile, f))]


def fill_missing(profile: BaseModel, data: Optional[Mapping[str, Any]]) -> List[str]:
    """Copy non-empty values from ``data`` into fields of ``profile`` that are still empty.

    Returns the names of the fields that were filled.
    """
    filled: List[str] = []
    if not data:
        return filled
    for field, value in data.items():
        if is_missing(value) or not hasattr(profile, field):
            continue
        if is_missing(getattr(profile, field)):
            setattr(profile, field, value)
            filled.append(field)
    return filled


def first_match(strategies: Sequence[Callable[..., Optional[str]]], *args: Any) -> str:
    """Run strategies in order and return the first non-empty result."""
    for strategy in strategies:
        result = strategy(*args)
        if result:
            logger.debug("Strategy %s matched", getattr(strategy, "__name__", strategy))
            return result
    return ""


def select_first_text(
    root: Any,
    selectors: Sequence[str],
    reject: Optional[Callable[[str], bool]] = None,
) -> str:
    """Return the stripped text of the first element matched by the ordered selectors."""
    if root is None:
        return ""
    for selector in selectors:
        element = root.select_one(selector)
        if element is None:
            continue
        text = clean_text(element.get_text(" "))
        if text and not (reject and reject(text)):
            return text
    return ""


def find_user_object(
    data: Any,
    username: str,
    max_depth: int = 15,
    _depth: int = 0,
) -> Optional[Dict[str, Any]]:
    """Depth-bounded search for the dict describing ``username`` inside nested JSON."""
    if _depth > max_depth or not username:
        return None
    if isinstance(data, dict):
        candidate = data.get("username")
        if (
            isinstance(candidate, str)
            and candidate.lower() == username.lower()
            and any(data.get(key) for key in _USER_PROFILE_KEYS)
        ):
            return data
        children: Iterable[Any] = data.values()
    elif isinstance(data, list):
        children = data
    else:
        return None
    for child in children:
        found = find_user_object(child, username, max_depth, _depth + 1)
        if found is not None:
            return found
    return None
