#!/usr/bin/env python3
"""
Vertical slice: Add teams → Schedule → Score live → Finish → Persist → Reload → Standings.
Run from project root: python3 scripts/vertical_slice.py
"""
from __future__ import annotations

import logging
import sys
from datetime import datetime, timedelta
from pathlib import Path

# Ensure project root on path
PROJECT_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from youth_league.models import LeagueState
from youth_league.persistence import LeagueStore
from youth_league.services import LeagueService


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    # Use data/vertical_slice.db for demo (distinct from league.db)
    db_path = PROJECT_ROOT / "data" / "vertical_slice.db"
    store = LeagueStore(db_path)

    # 1. Fresh league with four teams
    svc = LeagueService(LeagueState())
    for name, code in [("Lavovi", "LAV"), ("Orlovi", ""), ("Vukovi", "VUK"), ("Sokolovi", None)]:
        team = svc.add_team(name, code)
        print(f"Added team: {team.name} [{team.short_code}] (id={team.id})")

    # 2. Full round robin, one round per week
    kickoff = datetime.now().replace(second=0, microsecond=0) - timedelta(days=21)
    fixtures = svc.schedule_round_robin(kickoff, interval_days=7)
    print(f"Scheduled {len(fixtures)} fixtures")

    # 3. Play the first round: score goal by goal, then finish
    first_round = [m for m in svc.upcoming() if m.scheduled_at == kickoff]
    for i, m in enumerate(first_round):
        for _ in range(i + 1):
            svc.adjust_score(m.id, 1, 0)
        svc.adjust_score(m.id, 0, 1)
        svc.finish(m.id)
        print(f"  {svc.team_name(m.home_team_id)} {m.home_goals}:{m.away_goals} {svc.team_name(m.away_team_id)}")

    # 4. Persist and reload
    store.save(svc.state)
    reloaded = LeagueService(store.load_or_seed())
    assert reloaded.state.to_dict() == svc.state.to_dict()
    print(f"Reloaded: {len(reloaded.list_teams())} teams, {len(reloaded.played())} played, {len(reloaded.upcoming())} upcoming")

    # 5. Standings
    print("\n #  Team        P  W  D  L  GF GA  GD PTS")
    for rank, r in enumerate(reloaded.standings(), start=1):
        print(
            f"{rank:2d}  {r.name:<10} {r.played:2d} {r.won:2d} {r.drawn:2d} {r.lost:2d} "
            f"{r.goals_for:3d} {r.goals_against:2d} {r.goal_diff:3d} {r.points:3d}"
        )

    print("\nVertical slice complete.")


if __name__ == "__main__":
    main()
