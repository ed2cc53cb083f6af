from __future__ import annotations

from datetime import datetime, timezone
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


def utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


class LinkedInProfile(BaseModel):
    """Profile extracted from a LinkedIn /in/ page snapshot."""

    platform: Literal["linkedin"] = "linkedin"
    url: str
    name: str = ""
    headline: str = ""
    location: str = ""
    about: str = ""
    follower_count: int = Field(default=0, ge=0)
    connection_count: int = Field(default=0, ge=0)
    scraped_at: str = Field(default_factory=utc_timestamp)

    model_config = ConfigDict(extra="ignore")
