"""
Persistence layer for league snapshots.
No business logic, only load/save of the serialized LeagueState.
"""
from .db import get_connection, init_db
from .repositories import SnapshotRepository
from .store import SNAPSHOT_KEY, LeagueStore

__all__ = [
    "get_connection",
    "init_db",
    "SnapshotRepository",
    "SNAPSHOT_KEY",
    "LeagueStore",
]
