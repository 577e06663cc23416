"""
Load/save contract for the league aggregate.

load() never raises on bad data: a missing, non-JSON or structurally invalid
snapshot is reported as absent and load_or_seed() substitutes the seed state.
A missing snapshot is replaced by a stored seed; an unusable one is only
overwritten when the caller allows it.
No schema version is stored.
"""
from __future__ import annotations

import json
import logging
from pathlib import Path

from youth_league.models import LeagueState, default_state

from .db import get_connection, init_db
from .repositories import SnapshotRepository

logger = logging.getLogger(__name__)

SNAPSHOT_KEY = "youth-league-state-v1"


class LeagueStore:
    """Snapshot store over one SQLite file. Each save overwrites the previous snapshot."""

    def __init__(self, db_path: str | Path | None = None, key: str = SNAPSHOT_KEY) -> None:
        self._db_path = db_path
        self._key = key
        self._repo = SnapshotRepository()
        init_db(db_path)

    def _read_raw(self) -> str | None:
        conn = get_connection(self._db_path)
        try:
            return self._repo.get(conn, self._key)
        finally:
            conn.close()

    def _decode(self, raw: str) -> LeagueState | None:
        try:
            return LeagueState.from_dict(json.loads(raw))
        except ValueError as e:
            # json.JSONDecodeError is a ValueError subclass
            logger.warning("Stored league snapshot %r is unusable: %s", self._key, e)
            return None

    def load(self) -> LeagueState | None:
        raw = self._read_raw()
        if raw is None:
            return None
        return self._decode(raw)

    def load_or_seed(self, overwrite_unusable: bool = True) -> LeagueState:
        """
        Stored state, or the seed. Without any snapshot the seed is saved so later
        loads see the same team ids. An unusable snapshot is kept in place unless
        overwrite_unusable is set; read-only callers pass False.
        """
        raw = self._read_raw()
        if raw is not None:
            state = self._decode(raw)
            if state is not None:
                return state
        state = default_state()
        if raw is None:
            logger.info("No league snapshot; starting from seed state")
            self.save(state)
        elif overwrite_unusable:
            logger.warning("Replacing unusable league snapshot %r with seed state", self._key)
            self.save(state)
        else:
            logger.warning("Serving seed state; unusable snapshot %r left in place", self._key)
        return state

    def save(self, state: LeagueState) -> None:
        payload = json.dumps(state.to_dict(), ensure_ascii=False)
        conn = get_connection(self._db_path)
        try:
            self._repo.put(conn, self._key, payload)
        finally:
            conn.close()
        logger.info(
            "League snapshot saved: %d teams, %d matches",
            len(state.teams), len(state.matches),
        )
