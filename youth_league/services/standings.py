"""
Standings table: pure projection from teams + matches to ranked rows.

Only finished matches count. Win = 3 points, draw = 1, loss = 0.
Order: points desc, goal difference desc, goals for desc, name asc, team id asc.
The final id key makes the order total even for identically named teams.
"""
from __future__ import annotations

from typing import Iterable

from youth_league.models import Match, StandingRow, Team

POINTS_WIN = 3
POINTS_DRAW = 1


def _ranking_key(row: StandingRow) -> tuple:
    return (-row.points, -row.goal_diff, -row.goals_for, row.name, row.team_id)


def compute_standings(teams: Iterable[Team], matches: Iterable[Match]) -> list[StandingRow]:
    """
    Build one row per team, fold in every finished match, then rank.
    Matches pointing at unknown teams are skipped.
    """
    rows = [StandingRow(team_id=t.id, name=t.name, short_code=t.short_code) for t in teams]
    by_id = {r.team_id: r for r in rows}
    for m in matches:
        if not m.is_finished:
            continue
        home = by_id.get(m.home_team_id)
        away = by_id.get(m.away_team_id)
        if home is None or away is None:
            continue
        home.played += 1
        away.played += 1
        home.goals_for += m.home_goals
        home.goals_against += m.away_goals
        away.goals_for += m.away_goals
        away.goals_against += m.home_goals
        if m.home_goals > m.away_goals:
            home.won += 1
            away.lost += 1
            home.points += POINTS_WIN
        elif m.home_goals < m.away_goals:
            away.won += 1
            home.lost += 1
            away.points += POINTS_WIN
        else:
            home.drawn += 1
            away.drawn += 1
            home.points += POINTS_DRAW
            away.points += POINTS_DRAW
    for r in rows:
        r.goal_diff = r.goals_for - r.goals_against
    return sorted(rows, key=_ranking_key)
