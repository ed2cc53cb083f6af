from __future__ import annotations

import sqlite3
from typing import Optional


def get_connection(db_path: str, timeout: Optional[float] = 30.0) -> sqlite3.Connection:
    """Open a SQLite connection for profile storage.

    - WAL journal so readers are not blocked by the writer
    - NORMAL synchronous for performance
    - rows come back as sqlite3.Row for name-based access
    """
    conn = sqlite3.connect(db_path, timeout=timeout or 30.0)
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA journal_mode=WAL;")
    conn.execute("PRAGMA synchronous=NORMAL;")
    return conn
