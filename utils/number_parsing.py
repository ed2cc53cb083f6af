from __future__ import annotations

import re
from typing import Any, Dict


INSTAGRAM_SUFFIXES: Dict[str, int] = {"K": 1000, "M": 1000000, "B": 1000000000}
# LinkedIn never abbreviates to billions
LINKEDIN_SUFFIXES: Dict[str, int] = {"K": 1000, "M": 1000000}

_SHORTHAND_RE = re.compile(r"^([0-9]+(?:\.[0-9]+)?)([A-Z]?)$")


def parse_count(value: Any, suffixes: Dict[str, int] = INSTAGRAM_SUFFIXES) -> int:
    """Parse strings like '1.5K', '16M', '12,345', '500+' into an integer.

    Returns 0 for empty or unparsable inputs.
    """
    if value is None or isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return value if value >= 0 else 0
    try:
        s = str(value).strip().upper().replace(",", "").replace(" ", "")
        if s.endswith("+"):
            s = s[:-1]
        m = _SHORTHAND_RE.match(s)
        if not m:
            return 0
        suffix = m.group(2)
        if suffix and suffix not in suffixes:
            return 0
        factor = suffixes.get(suffix, 1) if suffix else 1
        return int(round(float(m.group(1)) * factor))
    except (TypeError, ValueError, OverflowError):
        return 0


def parse_instagram_count(value: Any) -> int:
    return parse_count(value, INSTAGRAM_SUFFIXES)


def parse_linkedin_count(value: Any) -> int:
    return parse_count(value, LINKEDIN_SUFFIXES)


def parse_connection_count(value: Any) -> int:
    """LinkedIn shows '500+' for anyone past 500 connections; that is stored as 500."""
    return parse_count(value, LINKEDIN_SUFFIXES)
