from __future__ import annotations

import logging
import time

from pipelines.runner import RunContext
from scrapers.coordinator import ExtractionCoordinator

logger = logging.getLogger(__name__)


class ExtractProfile:
    def __init__(self, coordinator: type[ExtractionCoordinator] = ExtractionCoordinator) -> None:
        self.coordinator = coordinator

    def run(self, ctx: RunContext) -> RunContext:
        started = time.perf_counter()
        ctx.profile = self.coordinator.scrape_profile(ctx.url, ctx.html)
        ctx.platform = ctx.profile.platform
        duration_ms = int((time.perf_counter() - started) * 1000)
        ctx.meta["extract_ms"] = duration_ms
        logger.info(
            "Extracted %s profile from %s", ctx.platform, ctx.url,
            extra={"step": "extract", "platform": ctx.platform, "status": "ok", "duration_ms": duration_ms},
        )
        return ctx
