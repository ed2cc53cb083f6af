from __future__ import annotations

import logging
import os
import sys
from typing import IO, Optional, Tuple

from config.settings import get_settings


# Extras that scrapers and pipeline steps attach via ``extra={...}``
STRUCTURED_FIELDS: Tuple[str, ...] = ("platform", "step", "status", "duration_ms", "error", "run_id")

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s " + " ".join(
    f"{name}=%({name})s" for name in STRUCTURED_FIELDS
)

_configured: bool = False


class SafeExtraFormatter(logging.Formatter):
    """Fills every structured field so a format string can name them unconditionally."""

    placeholder = "-"

    def format(self, record: logging.LogRecord) -> str:  # type: ignore[override]
        for name in STRUCTURED_FIELDS:
            if getattr(record, name, None) in (None, ""):
                setattr(record, name, self.placeholder)
        # CLI invocations export RUN_ID so every line of one run can be grouped
        if record.run_id == self.placeholder:
            record.run_id = os.getenv("RUN_ID") or self.placeholder
        return super().format(record)


def _resolve_level(level: Optional[str]) -> int:
    resolved = logging.getLevelName((level or get_settings().log_level).upper())
    return resolved if isinstance(resolved, int) else logging.INFO


def init_logging(level: Optional[str] = None, stream: Optional[IO[str]] = None) -> None:
    """Attach one stdout handler to the root logger; later calls are no-ops."""
    global _configured
    if _configured:
        return

    root = logging.getLogger()
    root.setLevel(_resolve_level(level))
    if not root.handlers:
        handler = logging.StreamHandler(stream or sys.stdout)
        handler.setFormatter(SafeExtraFormatter(LOG_FORMAT))
        root.addHandler(handler)

    _configured = True
