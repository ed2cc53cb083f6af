from __future__ import annotations

import sqlite3
from typing import Any, Dict, List, Tuple

from db.repos.instagram_profiles_repo import _rows_to_dicts
from models import LinkedInProfile


_COLUMNS = (
    "name",
    "url",
    "headline",
    "location",
    "about",
    "follower_count",
    "connection_count",
    "scraped_at",
)


class LinkedInProfilesRepo:
    def __init__(self, conn: sqlite3.Connection):
        self.conn = conn

    def upsert(self, profile: LinkedInProfile) -> Tuple[int, bool]:
        """Insert or overwrite a profile keyed by (name, url); returns (id, created)."""
        values = (
            profile.name,
            profile.url,
            profile.headline,
            profile.location,
            profile.about,
            profile.follower_count,
            profile.connection_count,
            profile.scraped_at,
        )
        cur = self.conn.cursor()
        cur.execute(
            "SELECT id FROM linkedin_profiles WHERE name = ? AND url = ?",
            (profile.name, profile.url),
        )
        row = cur.fetchone()
        if row:
            profile_id = int(row[0])
            assignments = ", ".join(f"{col} = ?" for col in _COLUMNS)
            cur.execute(
                f"UPDATE linkedin_profiles SET {assignments}, updated_at = datetime('now') WHERE id = ?",
                (*values, profile_id),
            )
            self.conn.commit()
            return profile_id, False
        placeholders = ", ".join("?" for _ in _COLUMNS)
        cur.execute(
            f"INSERT INTO linkedin_profiles ({', '.join(_COLUMNS)}) VALUES ({placeholders})",
            values,
        )
        self.conn.commit()
        return int(cur.lastrowid), True

    def list_recent(self, limit: int = 50) -> List[Dict[str, Any]]:
        cur = self.conn.cursor()
        cur.execute(
            "SELECT * FROM linkedin_profiles ORDER BY created_at DESC, id DESC LIMIT ?",
            (limit,),
        )
        return _rows_to_dicts(cur)
