from __future__ import annotations

import logging

from pipelines.runner import RunContext
from scrapers.coordinator import ExtractionCoordinator
from services import platform_detector

logger = logging.getLogger(__name__)


class ValidateRequest:
    def run(self, ctx: RunContext) -> RunContext:
        result = ExtractionCoordinator.validate(ctx.url, ctx.html)
        if not result.is_valid:
            ctx.errors.extend(result.errors)
            logger.info(
                "Rejected scrape request: %s", "; ".join(result.errors),
                extra={"step": "validate", "status": "invalid"},
            )
            return ctx
        ctx.platform = platform_detector.detect(ctx.url)
        return ctx
