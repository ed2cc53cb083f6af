from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, List

from pydantic import TypeAdapter

from config.settings import get_settings
from models import ProfileRecord
from scrapers import registry
from scrapers.registry import ScrapeFunc
from services import platform_detector

import scrapers  # noqa: F401 ensure registration

logger = logging.getLogger(__name__)

_RECORD_ADAPTER: TypeAdapter[ProfileRecord] = TypeAdapter(ProfileRecord)


class UnsupportedPlatformError(ValueError):
    """Raised when a URL does not belong to a platform with a registered scraper."""


@dataclass
class ValidationResult:
    errors: List[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors


class ExtractionCoordinator:
    """Routes captured page HTML to the extractor for the URL's platform."""

    @staticmethod
    def supported_platforms() -> List[str]:
        return platform_detector.supported_platforms()

    @staticmethod
    def get_scraper(platform: str) -> ScrapeFunc:
        try:
            return registry.get_scraper(platform)
        except KeyError as e:
            raise UnsupportedPlatformError(str(e.args[0])) from e

    @classmethod
    def validate(cls, url: Any, html: Any) -> ValidationResult:
        result = ValidationResult()
        if not url or not isinstance(url, str):
            result.errors.append("URL is required and must be a string")
        if not html or not isinstance(html, str):
            result.errors.append("HTML is required and must be a string")
        elif len(html) < get_settings().min_html_length:
            result.errors.append("HTML seems too short to be a valid page")
        if url and isinstance(url, str) and not platform_detector.is_supported(url):
            result.errors.append(
                f"Unsupported URL. Supported platforms: {', '.join(cls.supported_platforms())}"
            )
        return result

    @classmethod
    def scrape_profile(cls, url: str, html: str) -> ProfileRecord:
        platform = platform_detector.detect(url)
        if platform == platform_detector.UNSUPPORTED:
            raise UnsupportedPlatformError(f"Unsupported platform or invalid URL: {url}")

        logger.info("Detected platform %s, HTML length %d", platform, len(html or ""), extra={"platform": platform})
        profile = cls.get_scraper(platform)(html, url)
        # Any registered scraper's output is re-read as the record type its platform tag selects
        return _RECORD_ADAPTER.validate_python({**profile.model_dump(), "platform": platform, "url": url})
