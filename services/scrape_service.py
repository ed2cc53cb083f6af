"""
Request handling for profile scraping.

Every function returns ``(status, body)`` where ``body`` is a JSON-ready dict,
so a web route, a queue worker or the CLI can serve it unchanged.
"""

from __future__ import annotations

import logging
import sqlite3
from typing import Any, Dict, Mapping, Optional, Tuple

from config.settings import get_settings
from db.repos import repo_for_platform
from pipelines.runner import Pipeline, RunContext
from pipelines.steps import ExtractProfile, PersistProfile, ValidateRequest
from services import platform_detector

logger = logging.getLogger(__name__)

Response = Tuple[int, Dict[str, Any]]


def handle_scrape_request(payload: Any, conn: Optional[sqlite3.Connection] = None) -> Response:
    """Validate, extract and (when ``conn`` is given) store one captured profile page."""
    if not isinstance(payload, Mapping):
        payload = {}
    ctx = RunContext(url=payload.get("url"), html=payload.get("html"))
    pipeline = Pipeline([
        ValidateRequest(),
        ExtractProfile(),
        PersistProfile(conn),
    ])
    try:
        ctx = pipeline.run(ctx)
    except Exception as e:
        logger.exception(
            "Scrape request failed for %s", ctx.url,
            extra={"step": "scrape", "platform": ctx.platform or "-", "status": "error", "error": type(e).__name__},
        )
        return 500, {
            "success": False,
            "message": "Failed to scrape profile",
            "error": str(e),
        }

    if ctx.errors:
        return 400, {
            "success": False,
            "message": "Invalid request",
            "errors": list(ctx.errors),
        }

    return 200, {
        "success": True,
        "platform": ctx.platform,
        "message": f"Successfully scraped {ctx.platform} profile",
        "data": ctx.profile.model_dump(),
        "saved": ctx.saved,
    }


def list_profiles(conn: sqlite3.Connection, platform: str, limit: Optional[int] = None) -> Response:
    if platform not in platform_detector.SUPPORTED_PLATFORMS:
        return 400, {
            "success": False,
            "message": "Invalid platform",
            "errors": [f"Platform must be one of: {', '.join(platform_detector.supported_platforms())}"],
        }
    if limit is None:
        limit = get_settings().default_list_limit
    rows = repo_for_platform(conn, platform).list_recent(limit)
    return 200, {
        "success": True,
        "platform": platform,
        "count": len(rows),
        "data": rows,
    }


def supported_platforms_response() -> Dict[str, Any]:
    platforms = platform_detector.supported_platforms()
    return {
        "success": True,
        "platforms": platforms,
        "count": len(platforms),
    }
