from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

from dotenv import load_dotenv


def _load_env() -> None:
    # Centralized dotenv loading; safe if .env missing
    load_dotenv()


@dataclass(frozen=True)
class Settings:
    log_level: str

    # Core/runtime
    db_path: str

    # Request validation
    min_html_length: int

    # Extraction tuning
    json_search_max_depth: int
    min_about_length: int
    min_bio_length: int

    # Reporting
    default_list_limit: int = 50


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    _load_env()
    return Settings(
        log_level=os.getenv("LOG_LEVEL", "INFO"),
        db_path=os.getenv("DB_PATH", "profiles.db"),
        min_html_length=int(os.getenv("MIN_HTML_LENGTH", "100")),
        json_search_max_depth=int(os.getenv("JSON_SEARCH_MAX_DEPTH", "15")),
        min_about_length=int(os.getenv("MIN_ABOUT_LENGTH", "100")),
        min_bio_length=int(os.getenv("MIN_BIO_LENGTH", "10")),
        default_list_limit=int(os.getenv("DEFAULT_LIST_LIMIT", "50")),
    )
