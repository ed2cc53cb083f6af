from __future__ import annotations

import sqlite3
from typing import Union

from .instagram_profiles_repo import InstagramProfilesRepo
from .linkedin_profiles_repo import LinkedInProfilesRepo


def repo_for_platform(conn: sqlite3.Connection, platform: str) -> Union[LinkedInProfilesRepo, InstagramProfilesRepo]:
    if platform == "linkedin":
        return LinkedInProfilesRepo(conn)
    if platform == "instagram":
        return InstagramProfilesRepo(conn)
    raise KeyError(f"No repository for platform: {platform}")


__all__ = [
    "InstagramProfilesRepo",
    "LinkedInProfilesRepo",
    "repo_for_platform",
]
