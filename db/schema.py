from __future__ import annotations

import sqlite3


def bootstrap(conn: sqlite3.Connection) -> None:
    """Create profile tables and indexes (idempotent)."""
    cur = conn.cursor()

    # LinkedIn profiles: one row per (name, url)
    cur.execute(
        (
            "CREATE TABLE IF NOT EXISTS linkedin_profiles (\n"
            "  id INTEGER PRIMARY KEY AUTOINCREMENT,\n"
            "  name TEXT NOT NULL DEFAULT '',\n"
            "  url TEXT NOT NULL,\n"
            "  headline TEXT,\n"
            "  location TEXT,\n"
            "  about TEXT,\n"
            "  follower_count INTEGER NOT NULL DEFAULT 0,\n"
            "  connection_count INTEGER NOT NULL DEFAULT 0,\n"
            "  scraped_at TEXT,\n"
            "  created_at TEXT NOT NULL DEFAULT (datetime('now')),\n"
            "  updated_at TEXT NOT NULL DEFAULT (datetime('now')),\n"
            "  UNIQUE (name, url)\n"
            ")"
        )
    )
    cur.execute("CREATE INDEX IF NOT EXISTS idx_linkedin_profiles_created ON linkedin_profiles(created_at);")

    # Instagram profiles: username is the natural key
    cur.execute(
        (
            "CREATE TABLE IF NOT EXISTS instagram_profiles (\n"
            "  id INTEGER PRIMARY KEY AUTOINCREMENT,\n"
            "  username TEXT NOT NULL UNIQUE,\n"
            "  display_name TEXT,\n"
            "  url TEXT NOT NULL,\n"
            "  bio TEXT,\n"
            "  follower_count INTEGER NOT NULL DEFAULT 0,\n"
            "  following_count INTEGER NOT NULL DEFAULT 0,\n"
            "  post_count INTEGER NOT NULL DEFAULT 0,\n"
            "  is_verified INTEGER NOT NULL DEFAULT 0,\n"
            "  is_private INTEGER NOT NULL DEFAULT 0,\n"
            "  scraped_at TEXT,\n"
            "  created_at TEXT NOT NULL DEFAULT (datetime('now')),\n"
            "  updated_at TEXT NOT NULL DEFAULT (datetime('now'))\n"
            ")"
        )
    )
    cur.execute("CREATE INDEX IF NOT EXISTS idx_instagram_profiles_created ON instagram_profiles(created_at);")

    conn.commit()
