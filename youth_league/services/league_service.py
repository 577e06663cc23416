"""
League service: the only sanctioned way to change a LeagueState.

Team registry, match scheduler, score controller and the read-only query surface
all live here. Every mutation validates first and only then touches state, so a
rejected call leaves the aggregate exactly as it was.

Authorization is not checked here; callers gate mutations on their admin context.
"""
from __future__ import annotations

import logging
import math
import re
from datetime import datetime, timedelta
from typing import Any, Callable

from youth_league.models import (
    LeagueState,
    Match,
    MatchStatus,
    StandingRow,
    Team,
    default_state,
    new_id,
    to_local_naive,
)
from youth_league.services.scheduling import round_dates, round_robin_pairings
from youth_league.services.standings import compute_standings

logger = logging.getLogger(__name__)

SHORT_CODE_LENGTH = 3
UNKNOWN_TEAM_NAME = "?"

# ---------- Exceptions ----------


class LeagueError(ValueError):
    """Base for rejected league operations. State is unchanged when raised."""


class ValidationError(LeagueError):
    """Malformed input: empty name, same home/away team, unknown team at creation."""


class ConflictError(LeagueError):
    """Operation blocked by a reference, e.g. deleting a team that has matches."""


class NotFoundError(LeagueError):
    """Target id does not exist."""


# ---------- Input helpers ----------

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def parse_goals(value: Any) -> int:
    """
    Read a goal count permissively: leading integer of the input, floored at 0.
    Anything unparseable counts as 0.
    """
    if isinstance(value, bool):
        n = 0
    elif isinstance(value, int):
        n = value
    elif isinstance(value, float):
        n = int(value) if math.isfinite(value) else 0
    elif isinstance(value, str):
        m = _LEADING_INT.match(value)
        n = int(m.group(1)) if m else 0
    else:
        n = 0
    return max(0, n)


def derive_short_code(short_code: str | None, name: str) -> str:
    """First three characters of the given code, or of the name when blank, upper-cased."""
    source = (short_code or "").strip() or name
    return source[:SHORT_CODE_LENGTH].upper()


Listener = Callable[[str, dict[str, Any]], None]


# ---------- LeagueService ----------


class LeagueService:
    """
    Owns one LeagueState and exposes its operations.
    Listeners registered with subscribe() are told about every successful mutation.
    Listener errors are logged and do not propagate.
    """

    def __init__(self, state: LeagueState | None = None) -> None:
        self._state = state if state is not None else default_state()
        self._listeners: list[Listener] = []

    @property
    def state(self) -> LeagueState:
        return self._state

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register listener(event, payload). Returns a function that unsubscribes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _emit(self, event: str, **payload: Any) -> None:
        # State is already changed here; listener failures are logged only
        for listener in list(self._listeners):
            try:
                listener(event, payload)
            except Exception:
                logger.exception("League listener failed on %s", event)

    def reset(self) -> None:
        """Replace the whole state with the seed (two example teams, no matches)."""
        self._state = default_state()
        logger.info("League reset to seed state")
        self._emit("league_reset")

    # ---------- Lookups ----------

    def find_team_by_id(self, team_id: str) -> Team | None:
        for t in self._state.teams:
            if t.id == team_id:
                return t
        return None

    def find_match_by_id(self, match_id: str) -> Match | None:
        for m in self._state.matches:
            if m.id == match_id:
                return m
        return None

    def team_name(self, team_id: str) -> str:
        team = self.find_team_by_id(team_id)
        return team.name if team else UNKNOWN_TEAM_NAME

    def _require_team(self, team_id: str) -> Team:
        team = self.find_team_by_id(team_id)
        if team is None:
            raise NotFoundError(f"Team not found: {team_id}")
        return team

    def _require_match(self, match_id: str) -> Match:
        match = self.find_match_by_id(match_id)
        if match is None:
            raise NotFoundError(f"Match not found: {match_id}")
        return match

    # ---------- Team registry ----------

    def list_teams(self) -> list[Team]:
        """Teams in insertion order."""
        return list(self._state.teams)

    def add_team(self, name: str, short_code: str | None = None) -> Team:
        clean = (name or "").strip()
        if not clean:
            raise ValidationError("Team name must not be empty")
        team = Team(id=new_id(), name=clean, short_code=derive_short_code(short_code, clean))
        self._state.teams.append(team)
        logger.info("Team added: %s (%s) id=%s", team.name, team.short_code, team.id)
        self._emit("team_added", team_id=team.id)
        return team

    def update_team(self, team_id: str, name: str, short_code: str | None = None) -> Team:
        """Replace name and short code; id is preserved."""
        team = self._require_team(team_id)
        clean = (name or "").strip()
        if not clean:
            raise ValidationError("Team name must not be empty")
        team.name = clean
        team.short_code = derive_short_code(short_code, clean)
        logger.info("Team updated: id=%s name=%s", team.id, team.name)
        self._emit("team_updated", team_id=team.id)
        return team

    def is_team_in_use(self, team_id: str) -> bool:
        return any(m.involves(team_id) for m in self._state.matches)

    def remove_team(self, team_id: str) -> None:
        """Delete a team that no match references."""
        self._require_team(team_id)
        if self.is_team_in_use(team_id):
            raise ConflictError(f"Team in use: {team_id} has scheduled or played matches")
        self._state.teams = [t for t in self._state.teams if t.id != team_id]
        logger.info("Team removed: id=%s", team_id)
        self._emit("team_removed", team_id=team_id)

    # ---------- Match scheduler ----------

    def schedule_match(self, home_team_id: str, away_team_id: str, scheduled_at: datetime) -> Match:
        if not home_team_id or not away_team_id or home_team_id == away_team_id:
            raise ValidationError("Choose two different teams")
        for tid in (home_team_id, away_team_id):
            if self.find_team_by_id(tid) is None:
                raise ValidationError(f"Unknown team: {tid}")
        if not isinstance(scheduled_at, datetime):
            raise ValidationError("scheduled_at must be a datetime")
        match = Match(
            id=new_id(),
            home_team_id=home_team_id,
            away_team_id=away_team_id,
            scheduled_at=to_local_naive(scheduled_at),
        )
        self._state.matches.append(match)
        logger.info(
            "Match scheduled: %s vs %s at %s id=%s",
            self.team_name(home_team_id), self.team_name(away_team_id),
            scheduled_at.isoformat(), match.id,
        )
        self._emit("match_scheduled", match_id=match.id)
        return match

    def schedule_round_robin(self, start_at: datetime, interval_days: int = 7) -> list[Match]:
        """
        Schedule every pairing of the current teams once, one round per interval.
        Odd team counts give each team one bye round.
        """
        team_ids = [t.id for t in self._state.teams]
        if len(team_ids) < 2:
            raise ValidationError("At least 2 teams are needed for a round robin")
        if interval_days < 0:
            raise ValidationError("interval_days must be >= 0")
        if not isinstance(start_at, datetime):
            raise ValidationError("start_at must be a datetime")
        pairings = round_robin_pairings(team_ids)
        rounds = max(r for r, _, _ in pairings)
        dates = round_dates(to_local_naive(start_at), rounds, timedelta(days=interval_days))
        created = [
            Match(id=new_id(), home_team_id=h, away_team_id=a, scheduled_at=dates[r])
            for r, h, a in pairings
        ]
        self._state.matches.extend(created)
        logger.info("Round robin scheduled: %d matches over %d rounds", len(created), rounds)
        self._emit("round_robin_scheduled", match_ids=[m.id for m in created])
        return created

    def remove_match(self, match_id: str) -> None:
        self._require_match(match_id)
        self._state.matches = [m for m in self._state.matches if m.id != match_id]
        logger.info("Match removed: id=%s", match_id)
        self._emit("match_removed", match_id=match_id)

    def upcoming(self) -> list[Match]:
        """Scheduled matches, earliest first."""
        return sorted(
            (m for m in self._state.matches if m.status == MatchStatus.SCHEDULED),
            key=lambda m: m.scheduled_at,
        )

    def played(self) -> list[Match]:
        """Finished matches, most recent first."""
        return sorted(
            (m for m in self._state.matches if m.status == MatchStatus.FINISHED),
            key=lambda m: m.scheduled_at,
            reverse=True,
        )

    def live_candidates(self) -> list[Match]:
        """Matches that can be followed live: every scheduled match, in upcoming order."""
        return self.upcoming()

    # ---------- Score controller ----------

    def set_score(self, match_id: str, home_goals: Any, away_goals: Any) -> Match:
        """Set both scores. Works on finished matches too (corrections)."""
        match = self._require_match(match_id)
        match.home_goals = parse_goals(home_goals)
        match.away_goals = parse_goals(away_goals)
        logger.debug("Score set: id=%s %d:%d", match.id, match.home_goals, match.away_goals)
        self._emit("score_changed", match_id=match.id)
        return match

    def adjust_score(self, match_id: str, delta_home: int = 0, delta_away: int = 0) -> Match:
        """Apply signed deltas; each side is floored at 0 independently."""
        match = self._require_match(match_id)
        for delta in (delta_home, delta_away):
            if isinstance(delta, bool) or not isinstance(delta, int):
                raise ValidationError(f"Score delta must be an integer: {delta!r}")
        match.home_goals = max(0, match.home_goals + delta_home)
        match.away_goals = max(0, match.away_goals + delta_away)
        logger.debug("Score adjusted: id=%s %d:%d", match.id, match.home_goals, match.away_goals)
        self._emit("score_changed", match_id=match.id)
        return match

    def finish(self, match_id: str) -> Match:
        """Mark finished. Finishing a finished match is a no-op."""
        match = self._require_match(match_id)
        if match.status == MatchStatus.FINISHED:
            return match
        match.status = MatchStatus.FINISHED
        logger.info(
            "Match finished: %s %d:%d %s id=%s",
            self.team_name(match.home_team_id), match.home_goals, match.away_goals,
            self.team_name(match.away_team_id), match.id,
        )
        self._emit("match_finished", match_id=match.id)
        return match

    # ---------- Standings ----------

    def standings(self) -> list[StandingRow]:
        return compute_standings(self._state.teams, self._state.matches)
