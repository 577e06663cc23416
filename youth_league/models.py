"""
Data models for the youth league engine.
Domain objects only; no persistence or API logic.

One aggregate (LeagueState) holds teams and matches. Standings rows are derived,
never stored.
"""
from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any


def new_id() -> str:
    return str(uuid.uuid4())


def to_local_naive(value: datetime) -> datetime:
    """Kick-off times are stored as naive local time; aware inputs are converted."""
    if value.tzinfo is not None:
        return value.astimezone().replace(tzinfo=None)
    return value


# ---------- Match status ----------
class MatchStatus(str, Enum):
    """Scheduled -> finished, one way. "Live" is a view over a scheduled match."""
    SCHEDULED = "scheduled"
    FINISHED = "finished"


# ---------- Team ----------
@dataclass
class Team:
    """
    A league team. id is immutable; edits replace name/short_code only.
    short_code is display-only and need not be unique.
    """
    id: str
    name: str
    short_code: str

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "name": self.name, "short_code": self.short_code}

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> Team:
        team_id = d["id"]
        name = d["name"]
        short_code = d.get("short_code", "")
        if not isinstance(team_id, str) or not team_id:
            raise ValueError(f"team id must be a non-empty string: {team_id!r}")
        if not isinstance(name, str) or not name.strip():
            raise ValueError(f"team {team_id} has an empty name")
        if not isinstance(short_code, str):
            raise ValueError(f"team {team_id} short_code must be a string")
        return cls(id=team_id, name=name, short_code=short_code)


# ---------- Match ----------
@dataclass
class Match:
    """
    A fixture between two distinct teams. scheduled_at is local time (naive).
    Goals stay editable after the match is finished (corrections).
    """
    id: str
    home_team_id: str
    away_team_id: str
    scheduled_at: datetime
    status: MatchStatus = MatchStatus.SCHEDULED
    home_goals: int = 0
    away_goals: int = 0

    @property
    def is_finished(self) -> bool:
        return self.status == MatchStatus.FINISHED

    def involves(self, team_id: str) -> bool:
        return team_id in (self.home_team_id, self.away_team_id)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "home_team_id": self.home_team_id,
            "away_team_id": self.away_team_id,
            "scheduled_at": self.scheduled_at.isoformat(),
            "status": self.status.value,
            "home_goals": self.home_goals,
            "away_goals": self.away_goals,
        }

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> Match:
        match_id = d["id"]
        if not isinstance(match_id, str) or not match_id:
            raise ValueError(f"match id must be a non-empty string: {match_id!r}")
        home_team_id = d["home_team_id"]
        away_team_id = d["away_team_id"]
        for tid in (home_team_id, away_team_id):
            if not isinstance(tid, str) or not tid:
                raise ValueError(f"match {match_id} team id must be a non-empty string: {tid!r}")
        home_goals = d.get("home_goals", 0)
        away_goals = d.get("away_goals", 0)
        for goals in (home_goals, away_goals):
            # bool is an int subclass; reject it explicitly
            if isinstance(goals, bool) or not isinstance(goals, int) or goals < 0:
                raise ValueError(f"match {match_id} has invalid goals: {goals!r}")
        return cls(
            id=match_id,
            home_team_id=home_team_id,
            away_team_id=away_team_id,
            scheduled_at=to_local_naive(datetime.fromisoformat(d["scheduled_at"])),
            status=MatchStatus(d.get("status", MatchStatus.SCHEDULED.value)),
            home_goals=home_goals,
            away_goals=away_goals,
        )


# ---------- Standings row ----------
@dataclass
class StandingRow:
    """Per-team aggregate derived from finished matches. Rank is the row's position."""
    team_id: str
    name: str
    short_code: str
    played: int = 0
    won: int = 0
    drawn: int = 0
    lost: int = 0
    goals_for: int = 0
    goals_against: int = 0
    goal_diff: int = 0
    points: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "team_id": self.team_id,
            "name": self.name,
            "short_code": self.short_code,
            "played": self.played,
            "won": self.won,
            "drawn": self.drawn,
            "lost": self.lost,
            "goals_for": self.goals_for,
            "goals_against": self.goals_against,
            "goal_diff": self.goal_diff,
            "points": self.points,
        }


# ---------- LeagueState (aggregate) ----------
@dataclass
class LeagueState:
    """
    Teams in insertion order plus matches. The only shared mutable resource.

    Invariants (checked by check_invariants):
    1. every match references two distinct, existing teams
    2. goals are integers >= 0
    3. a referenced team cannot be removed (enforced by the service)
    4. team ids and match ids are unique within their containers
    """
    teams: list[Team] = field(default_factory=list)
    matches: list[Match] = field(default_factory=list)

    def check_invariants(self) -> None:
        """Raise ValueError describing the first violated invariant."""
        team_ids: set[str] = set()
        for t in self.teams:
            if t.id in team_ids:
                raise ValueError(f"duplicate team id: {t.id}")
            team_ids.add(t.id)
        match_ids: set[str] = set()
        for m in self.matches:
            if m.id in match_ids:
                raise ValueError(f"duplicate match id: {m.id}")
            match_ids.add(m.id)
            if m.home_team_id == m.away_team_id:
                raise ValueError(f"match {m.id} has the same home and away team")
            for tid in (m.home_team_id, m.away_team_id):
                if tid not in team_ids:
                    raise ValueError(f"match {m.id} references unknown team {tid}")
            if m.home_goals < 0 or m.away_goals < 0:
                raise ValueError(f"match {m.id} has negative goals")

    def to_dict(self) -> dict[str, Any]:
        return {
            "teams": [t.to_dict() for t in self.teams],
            "matches": [m.to_dict() for m in self.matches],
        }

    @classmethod
    def from_dict(cls, d: Any) -> LeagueState:
        """Build and validate a state from its dict form. Raises ValueError if malformed."""
        if not isinstance(d, dict):
            raise ValueError("league state must be an object")
        raw_teams = d.get("teams")
        raw_matches = d.get("matches", [])
        if not isinstance(raw_teams, list) or not isinstance(raw_matches, list):
            raise ValueError("teams and matches must be lists")
        try:
            state = cls(
                teams=[Team.from_dict(t) for t in raw_teams],
                matches=[Match.from_dict(m) for m in raw_matches],
            )
            state.check_invariants()
        except (KeyError, TypeError) as e:
            raise ValueError(f"malformed league state: {e}") from e
        return state


def default_state() -> LeagueState:
    """Seed used when no usable snapshot exists: two example teams, no matches."""
    return LeagueState(
        teams=[
            Team(id=new_id(), name="Tim Alpha", short_code="ALP"),
            Team(id=new_id(), name="Tim Beta", short_code="BET"),
        ],
        matches=[],
    )
