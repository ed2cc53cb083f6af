from __future__ import annotations

import logging
import sqlite3
from typing import Optional

from db.repos import repo_for_platform
from pipelines.runner import RunContext
from ports.repos import ProfileRepoPort

logger = logging.getLogger(__name__)


class PersistProfile:
    """Upsert the extracted profile; a storage failure leaves ``ctx.saved`` False."""

    def __init__(self, conn: Optional[sqlite3.Connection]) -> None:
        self.conn = conn

    def _repo(self, platform: str) -> ProfileRepoPort:
        return repo_for_platform(self.conn, platform)

    def run(self, ctx: RunContext) -> RunContext:
        ctx.saved = False
        if self.conn is None or ctx.profile is None:
            return ctx
        try:
            profile_id, created = self._repo(ctx.platform).upsert(ctx.profile)
        except (sqlite3.Error, ValueError) as e:
            logger.warning(
                "Could not save %s profile %s: %s", ctx.platform, ctx.url, e,
                extra={"step": "persist", "platform": ctx.platform, "status": "failed", "error": type(e).__name__},
            )
            return ctx
        ctx.saved = True
        ctx.meta["profile_id"] = profile_id
        ctx.meta["created"] = created
        logger.info(
            "%s %s profile id=%d", "Inserted" if created else "Updated", ctx.platform, profile_id,
            extra={"step": "persist", "platform": ctx.platform, "status": "saved"},
        )
        return ctx
