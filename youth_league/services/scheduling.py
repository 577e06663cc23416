"""
Deterministic round-robin fixture generation.

Every team meets every other team exactly once; N-1 rounds for N even, N rounds for
N odd. With an odd count a virtual BYE slot is added and the team drawn against it
sits the round out (no fixture is produced for it).

Circle method: slot 0 stays fixed, the rest rotate one step per round. The same
team list always yields the same fixtures.
"""
from __future__ import annotations

from datetime import datetime, timedelta

# Sentinel for bye when number of teams is odd
BYE = "BYE"


def round_robin_pairings(team_ids: list[str]) -> list[tuple[int, str, str]]:
    """
    Return (round_number, home_team_id, away_team_id) for every real pairing.
    Bye pairings are dropped.
    """
    ids = list(team_ids)
    if len(ids) < 2:
        return []
    if len(ids) % 2 == 1:
        ids.append(BYE)
    n = len(ids)
    order = list(range(n))
    result: list[tuple[int, str, str]] = []
    for rnd in range(1, n):
        for i in range(n // 2):
            home_id = ids[order[i]]
            away_id = ids[order[n - 1 - i]]
            if BYE in (home_id, away_id):
                continue
            # Alternate home advantage for the fixed slot so it is not always at home
            if i == 0 and rnd % 2 == 0:
                home_id, away_id = away_id, home_id
            result.append((rnd, home_id, away_id))
        order = [order[0], order[n - 1]] + order[1 : n - 1]
    return result


def round_dates(start_at: datetime, rounds: int, interval: timedelta) -> dict[int, datetime]:
    """Kick-off time per 1-based round number."""
    return {r: start_at + interval * (r - 1) for r in range(1, rounds + 1)}
