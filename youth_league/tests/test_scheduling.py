"""
Tests for round-robin fixture generation.
Deterministic; no duplicate matchups; at most one game per team per round.
"""
from __future__ import annotations

from collections import Counter
from datetime import datetime, timedelta

from youth_league.services.scheduling import BYE, round_dates, round_robin_pairings


def test_round_robin_fewer_than_two_teams():
    assert round_robin_pairings([]) == []
    assert round_robin_pairings(["A"]) == []


def test_round_robin_two_teams():
    """2 teams: 1 round, 1 match."""
    pairings = round_robin_pairings(["A", "B"])
    assert len(pairings) == 1
    r, h, a = pairings[0]
    assert r == 1
    assert {h, a} == {"A", "B"}


def test_round_robin_three_teams_drops_byes():
    """3 teams: 3 rounds, one real match per round, each pair exactly once."""
    pairings = round_robin_pairings(["A", "B", "C"])
    assert len(pairings) == 3
    assert all(BYE not in (h, a) for _, h, a in pairings)
    pairs = {tuple(sorted([h, a])) for _, h, a in pairings}
    assert pairs == {("A", "B"), ("A", "C"), ("B", "C")}
    assert sorted(r for r, _, _ in pairings) == [1, 2, 3]


def test_round_robin_four_teams():
    """4 teams: 3 rounds, 2 matches per round, 6 matches total. Each pair once."""
    pairings = round_robin_pairings(["A", "B", "C", "D"])
    assert len(pairings) == 6
    pairs = {tuple(sorted([h, a])) for _, h, a in pairings}
    expected = {("A", "B"), ("A", "C"), ("A", "D"), ("B", "C"), ("B", "D"), ("C", "D")}
    assert pairs == expected


def test_round_robin_one_game_per_team_per_round():
    teams = [f"T{i}" for i in range(7)]
    pairings = round_robin_pairings(teams)
    assert len(pairings) == 21
    for rnd in {r for r, _, _ in pairings}:
        seen = Counter()
        for r, h, a in pairings:
            if r == rnd:
                seen[h] += 1
                seen[a] += 1
        assert all(v == 1 for v in seen.values())


def test_round_robin_deterministic():
    teams = ["X", "Y", "Z", "W", "V"]
    assert round_robin_pairings(teams) == round_robin_pairings(teams)


def test_round_dates():
    start = datetime(2025, 9, 6, 9, 0)
    dates = round_dates(start, 3, timedelta(days=7))
    assert dates == {
        1: start,
        2: start + timedelta(days=7),
        3: start + timedelta(days=14),
    }
