"""
SQLite schema for the league snapshot store.
Migration-friendly: each table created with IF NOT EXISTS.
"""
from __future__ import annotations


def league_snapshots_schema() -> str:
    """One row per storage key; payload is the JSON-encoded LeagueState."""
    return """
    CREATE TABLE IF NOT EXISTS league_snapshots (
        key TEXT PRIMARY KEY,
        payload TEXT NOT NULL,
        saved_at TEXT NOT NULL
    );
    """


def all_schema_sql() -> str:
    return league_snapshots_schema()
