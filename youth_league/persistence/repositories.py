"""
Repository for stored league snapshots.
No business logic, only read/write of the opaque payload.
"""
from __future__ import annotations

import sqlite3
from datetime import datetime


class SnapshotRepository:
    """Key/value access to league_snapshots. Payloads are opaque strings here."""

    def get(self, conn: sqlite3.Connection, key: str) -> str | None:
        row = conn.execute(
            "SELECT payload FROM league_snapshots WHERE key = ?", (key,)
        ).fetchone()
        if row is None:
            return None
        return row["payload"]

    def put(self, conn: sqlite3.Connection, key: str, payload: str) -> None:
        """Insert or overwrite the snapshot stored under key."""
        now = datetime.now().isoformat()
        conn.execute(
            "INSERT INTO league_snapshots (key, payload, saved_at) VALUES (?, ?, ?) "
            "ON CONFLICT(key) DO UPDATE SET payload = excluded.payload, saved_at = excluded.saved_at",
            (key, payload, now),
        )
        conn.commit()
