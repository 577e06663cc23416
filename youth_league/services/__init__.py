"""
Service layer: league mutations and queries, standings, fixture generation.
No persistence here; callers load and save LeagueState through the store.
"""
from .league_service import (
    ConflictError,
    LeagueError,
    LeagueService,
    NotFoundError,
    ValidationError,
    parse_goals,
)
from .standings import compute_standings

__all__ = [
    "LeagueService",
    "LeagueError",
    "ValidationError",
    "ConflictError",
    "NotFoundError",
    "parse_goals",
    "compute_standings",
]
