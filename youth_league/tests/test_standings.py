"""
Tests for the standings table: aggregation, points, ordering and tie-breaks.
"""
from __future__ import annotations

from datetime import datetime

from youth_league.models import Match, MatchStatus, Team
from youth_league.services.standings import compute_standings


def _team(tid: str, name: str) -> Team:
    return Team(id=tid, name=name, short_code=name[:3].upper())


def _finished(mid: str, home: str, away: str, hg: int, ag: int, day: int = 1) -> Match:
    return Match(
        id=mid,
        home_team_id=home,
        away_team_id=away,
        scheduled_at=datetime(2025, 3, day, 18, 0),
        status=MatchStatus.FINISHED,
        home_goals=hg,
        away_goals=ag,
    )


def test_no_matches_all_zero_ordered_by_name():
    teams = [_team("c", "C"), _team("a", "A"), _team("b", "B")]
    rows = compute_standings(teams, [])
    assert [r.name for r in rows] == ["A", "B", "C"]
    for r in rows:
        assert (r.played, r.won, r.drawn, r.lost, r.points, r.goal_diff) == (0, 0, 0, 0, 0, 0)


def test_single_win():
    """A 3-1 B: A tops the table; untouched C (GD 0) ranks above B (GD -2)."""
    teams = [_team("a", "A"), _team("b", "B"), _team("c", "C")]
    rows = compute_standings(teams, [_finished("m1", "a", "b", 3, 1)])
    by_name = {r.name: r for r in rows}
    a, b, c = by_name["A"], by_name["B"], by_name["C"]
    assert (a.played, a.won, a.points, a.goal_diff) == (1, 1, 3, 2)
    assert (b.played, b.lost, b.points, b.goal_diff) == (1, 1, 0, -2)
    assert (c.played, c.points) == (0, 0)
    assert rows[0].name == "A"
    # B and C both have 0 points; C's goal difference (0) beats B's (-2)
    assert [r.name for r in rows] == ["A", "C", "B"]


def test_draw_gives_one_point_each():
    teams = [_team("a", "A"), _team("b", "B")]
    rows = compute_standings(teams, [_finished("m1", "a", "b", 2, 2)])
    for r in rows:
        assert r.drawn == 1
        assert r.points == 1
        assert r.goals_for == 2
        assert r.goals_against == 2


def test_away_win_scores_for_away_team():
    teams = [_team("a", "A"), _team("b", "B")]
    rows = compute_standings(teams, [_finished("m1", "a", "b", 0, 2)])
    assert rows[0].team_id == "b"
    assert rows[0].won == 1 and rows[0].points == 3
    assert rows[1].lost == 1 and rows[1].goals_against == 2


def test_unfinished_matches_never_count():
    teams = [_team("a", "A"), _team("b", "B")]
    scheduled = Match(
        id="m1", home_team_id="a", away_team_id="b",
        scheduled_at=datetime(2025, 3, 1), home_goals=5, away_goals=0,
    )
    rows = compute_standings(teams, [scheduled])
    assert all(r.played == 0 and r.points == 0 and r.goals_for == 0 for r in rows)


def test_match_with_unknown_team_is_skipped():
    teams = [_team("a", "A")]
    rows = compute_standings(teams, [_finished("m1", "a", "ghost", 4, 0)])
    assert rows[0].played == 0
    assert rows[0].goals_for == 0


def test_goals_for_breaks_tie_on_points_and_difference():
    # A and B: 3 pts, GD +1 each; A scored more
    teams = [_team("b", "B"), _team("a", "A"), _team("c", "C"), _team("d", "D")]
    matches = [
        _finished("m1", "b", "c", 1, 0, day=1),
        _finished("m2", "a", "d", 3, 2, day=2),
    ]
    rows = compute_standings(teams, matches)
    assert [r.name for r in rows[:2]] == ["A", "B"]


def test_name_breaks_remaining_tie_case_sensitive():
    teams = [_team("1", "beta"), _team("2", "Alpha"), _team("3", "Beta")]
    rows = compute_standings(teams, [])
    # Uppercase sorts before lowercase
    assert [r.name for r in rows] == ["Alpha", "Beta", "beta"]


def test_identical_names_ordered_by_team_id():
    teams = [_team("z", "Same"), _team("k", "Same")]
    rows = compute_standings(teams, [])
    assert [r.team_id for r in rows] == ["k", "z"]
    rows_again = compute_standings(list(reversed(teams)), [])
    assert [r.team_id for r in rows_again] == ["k", "z"]


def test_repeated_computation_is_deterministic():
    teams = [_team(str(i), f"T{i}") for i in range(6)]
    matches = [
        _finished("m1", "0", "1", 2, 2),
        _finished("m2", "2", "3", 1, 0),
        _finished("m3", "4", "5", 0, 1),
        _finished("m4", "1", "2", 3, 3),
    ]
    first = [r.team_id for r in compute_standings(teams, matches)]
    for _ in range(5):
        assert [r.team_id for r in compute_standings(teams, matches)] == first


def test_goal_difference_and_totals_over_season():
    teams = [_team("a", "A"), _team("b", "B"), _team("c", "C")]
    matches = [
        _finished("m1", "a", "b", 2, 0, day=1),
        _finished("m2", "b", "c", 1, 1, day=2),
        _finished("m3", "c", "a", 3, 1, day=3),
    ]
    rows = {r.name: r for r in compute_standings(teams, matches)}
    assert (rows["A"].played, rows["A"].won, rows["A"].lost, rows["A"].points) == (2, 1, 1, 3)
    assert (rows["A"].goals_for, rows["A"].goals_against, rows["A"].goal_diff) == (3, 3, 0)
    assert (rows["C"].won, rows["C"].drawn, rows["C"].points, rows["C"].goal_diff) == (1, 1, 4, 2)
    assert (rows["B"].drawn, rows["B"].lost, rows["B"].points, rows["B"].goal_diff) == (1, 1, 1, -2)
    ordered = [r.name for r in compute_standings(teams, matches)]
    assert ordered == ["C", "A", "B"]
