from __future__ import annotations

import sqlite3
from typing import Any, Dict, List, Tuple

from models import InstagramProfile


_COLUMNS = (
    "username",
    "display_name",
    "url",
    "bio",
    "follower_count",
    "following_count",
    "post_count",
    "is_verified",
    "is_private",
    "scraped_at",
)


def _rows_to_dicts(cur: sqlite3.Cursor) -> List[Dict[str, Any]]:
    keys = [d[0] for d in cur.description]
    return [{k: row[i] for i, k in enumerate(keys)} for row in cur.fetchall()]


class InstagramProfilesRepo:
    def __init__(self, conn: sqlite3.Connection):
        self.conn = conn

    def upsert(self, profile: InstagramProfile) -> Tuple[int, bool]:
        """Insert or overwrite a profile keyed by username; returns (id, created)."""
        if not profile.username:
            raise ValueError("Instagram profile has no username to key on")
        values = (
            profile.username,
            profile.display_name,
            profile.url,
            profile.bio,
            profile.follower_count,
            profile.following_count,
            profile.post_count,
            1 if profile.is_verified else 0,
            1 if profile.is_private else 0,
            profile.scraped_at,
        )
        cur = self.conn.cursor()
        cur.execute("SELECT id FROM instagram_profiles WHERE username = ?", (profile.username,))
        row = cur.fetchone()
        if row:
            profile_id = int(row[0])
            # A later capture replaces every field of the earlier one
            assignments = ", ".join(f"{col} = ?" for col in _COLUMNS)
            cur.execute(
                f"UPDATE instagram_profiles SET {assignments}, updated_at = datetime('now') WHERE id = ?",
                (*values, profile_id),
            )
            self.conn.commit()
            return profile_id, False
        placeholders = ", ".join("?" for _ in _COLUMNS)
        cur.execute(
            f"INSERT INTO instagram_profiles ({', '.join(_COLUMNS)}) VALUES ({placeholders})",
            values,
        )
        self.conn.commit()
        return int(cur.lastrowid), True

    def list_recent(self, limit: int = 50) -> List[Dict[str, Any]]:
        cur = self.conn.cursor()
        cur.execute(
            "SELECT * FROM instagram_profiles ORDER BY created_at DESC, id DESC LIMIT ?",
            (limit,),
        )
        rows = _rows_to_dicts(cur)
        for r in rows:
            r["is_verified"] = bool(r.get("is_verified"))
            r["is_private"] = bool(r.get("is_private"))
        return rows
