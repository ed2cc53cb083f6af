from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from .linkedin_profile import utc_timestamp


class InstagramProfile(BaseModel):
    """Profile extracted from an Instagram profile page snapshot.

    ``username`` is the persistence key; it is taken from the page URL.
    """

    platform: Literal["instagram"] = "instagram"
    url: str
    username: str = ""
    display_name: str = ""
    bio: str = ""
    follower_count: int = Field(default=0, ge=0)
    following_count: int = Field(default=0, ge=0)
    post_count: int = Field(default=0, ge=0)
    is_verified: bool = False
    is_private: bool = False
    scraped_at: str = Field(default_factory=utc_timestamp)

    model_config = ConfigDict(extra="ignore")
