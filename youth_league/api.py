"""
REST API for the youth league engine.
Thin wrappers around LeagueService and the snapshot store.

Reads are open to everyone (guest view). Mutations need a Bearer admin token
from POST /admin/login. Each request loads the snapshot, runs one operation and,
for mutations, saves the result; a process-local lock serializes that cycle.
"""
from __future__ import annotations

import logging
import os
from contextlib import asynccontextmanager, contextmanager
from datetime import datetime
from threading import RLock
from typing import Any, AsyncGenerator, Generator

from fastapi import Depends, FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from pydantic import BaseModel, Field

from youth_league.auth import create_admin_token, is_admin_token, verify_admin_code
from youth_league.models import Match, Team
from youth_league.persistence import LeagueStore
from youth_league.persistence.db import get_db_path
from youth_league.services.league_service import (
    ConflictError,
    LeagueError,
    LeagueService,
    NotFoundError,
    ValidationError,
)

logger = logging.getLogger(__name__)

# Load-mutate-save must not interleave between requests in this process
_STATE_LOCK = RLock()


def parse_origins(value: str | None) -> list[str]:
    """Comma-separated origins; blank entries are ignored."""
    return [o.strip() for o in (value or "").split(",") if o.strip()]


# Browser origins allowed to call the API, e.g. "https://league.example.org". Empty by default.
CORS_ORIGINS = parse_origins(os.environ.get("LEAGUE_CORS_ORIGINS"))

_ERROR_STATUS: dict[type[LeagueError], int] = {
    ValidationError: 400,
    NotFoundError: 404,
    ConflictError: 409,
}


def _status_for(error: LeagueError) -> int:
    for cls, status in _ERROR_STATUS.items():
        if isinstance(error, cls):
            return status
    return 400


@contextmanager
def league_session(write: bool = False) -> Generator[LeagueService, None, None]:
    """
    Yield a LeagueService over the stored state. On success with write=True the
    state is saved; a rejected operation is mapped to an HTTP error and nothing is saved.
    """
    with _STATE_LOCK:
        store = LeagueStore(get_db_path())
        # Unusable snapshots survive reads; a successful mutation replaces them on save
        svc = LeagueService(store.load_or_seed(overwrite_unusable=False))
        try:
            yield svc
        except LeagueError as e:
            raise HTTPException(status_code=_status_for(e), detail=str(e)) from e
        if write:
            store.save(svc.state)


# ---------- Lifespan ----------
@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    with league_session():
        pass
    yield


# ---------- FastAPI app ----------
app = FastAPI(
    title="Youth League API",
    description="Teams, fixtures, live scores and standings for a small league",
    version="0.1.0",
    lifespan=lifespan,
)
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

security = HTTPBearer(auto_error=False)


# ---------- Request models ----------


class AdminLoginRequest(BaseModel):
    code: str


class TeamRequest(BaseModel):
    name: str = Field(..., max_length=200)
    short_code: str | None = Field(None, max_length=20, description="Blank: derived from name")


class ScheduleMatchRequest(BaseModel):
    home_team_id: str
    away_team_id: str
    scheduled_at: datetime


class RoundRobinRequest(BaseModel):
    start_at: datetime
    interval_days: int = Field(7, ge=0, le=365)


class ScoreRequest(BaseModel):
    # Unparseable values count as 0
    home_goals: Any = 0
    away_goals: Any = 0


class AdjustScoreRequest(BaseModel):
    delta_home: int = 0
    delta_away: int = 0


# ---------- Auth dependencies ----------


def _is_admin(credentials: HTTPAuthorizationCredentials | None = Depends(security)) -> bool:
    if credentials is None:
        return False
    return is_admin_token(credentials.credentials)


def require_admin(credentials: HTTPAuthorizationCredentials | None = Depends(security)) -> None:
    """Reject callers without a valid admin token."""
    if credentials is None:
        raise HTTPException(status_code=401, detail="Admin login required")
    if not is_admin_token(credentials.credentials):
        raise HTTPException(status_code=403, detail="Admin token invalid or expired")


# ---------- Serialization ----------


def _match_out(svc: LeagueService, m: Match) -> dict[str, Any]:
    out = m.to_dict()
    out["home_team_name"] = svc.team_name(m.home_team_id)
    out["away_team_name"] = svc.team_name(m.away_team_id)
    return out


def _team_out(svc: LeagueService, t: Team) -> dict[str, Any]:
    out = t.to_dict()
    out["in_use"] = svc.is_team_in_use(t.id)
    return out


# ---------- Admin ----------


@app.post("/admin/login")
def admin_login(req: AdminLoginRequest) -> dict[str, Any]:
    if not verify_admin_code(req.code):
        logger.warning("Rejected admin login attempt")
        raise HTTPException(status_code=401, detail="Invalid admin code")
    return {"token": create_admin_token(), "is_admin": True}


@app.get("/admin/me")
def admin_me(is_admin: bool = Depends(_is_admin)) -> dict[str, Any]:
    return {"is_admin": is_admin}


# ---------- Teams ----------


@app.get("/teams")
def list_teams() -> dict[str, Any]:
    with league_session() as svc:
        return {"teams": [_team_out(svc, t) for t in svc.list_teams()]}


@app.get("/teams/{team_id}")
def get_team(team_id: str) -> dict[str, Any]:
    with league_session() as svc:
        team = svc.find_team_by_id(team_id)
        if team is None:
            raise HTTPException(status_code=404, detail="Team not found")
        return _team_out(svc, team)


@app.post("/teams", dependencies=[Depends(require_admin)])
def add_team(req: TeamRequest) -> dict[str, Any]:
    with league_session(write=True) as svc:
        team = svc.add_team(req.name, req.short_code)
        return _team_out(svc, team)


@app.patch("/teams/{team_id}", dependencies=[Depends(require_admin)])
def update_team(team_id: str, req: TeamRequest) -> dict[str, Any]:
    with league_session(write=True) as svc:
        team = svc.update_team(team_id, req.name, req.short_code)
        return _team_out(svc, team)


@app.delete("/teams/{team_id}", dependencies=[Depends(require_admin)])
def remove_team(team_id: str) -> dict[str, Any]:
    with league_session(write=True) as svc:
        svc.remove_team(team_id)
        return {"team_id": team_id, "deleted": True}


# ---------- Matches ----------


@app.get("/matches/upcoming")
def upcoming_matches() -> dict[str, Any]:
    with league_session() as svc:
        return {"matches": [_match_out(svc, m) for m in svc.upcoming()]}


@app.get("/matches/played")
def played_matches() -> dict[str, Any]:
    with league_session() as svc:
        return {"matches": [_match_out(svc, m) for m in svc.played()]}


@app.get("/matches/live")
def live_matches() -> dict[str, Any]:
    """Matches that can be followed live (every scheduled match)."""
    with league_session() as svc:
        return {"matches": [_match_out(svc, m) for m in svc.live_candidates()]}


@app.get("/matches/{match_id}")
def get_match(match_id: str) -> dict[str, Any]:
    with league_session() as svc:
        match = svc.find_match_by_id(match_id)
        if match is None:
            raise HTTPException(status_code=404, detail="Match not found")
        return _match_out(svc, match)


@app.post("/matches", dependencies=[Depends(require_admin)])
def schedule_match(req: ScheduleMatchRequest) -> dict[str, Any]:
    with league_session(write=True) as svc:
        match = svc.schedule_match(req.home_team_id, req.away_team_id, req.scheduled_at)
        return _match_out(svc, match)


@app.post("/matches/round-robin", dependencies=[Depends(require_admin)])
def schedule_round_robin(req: RoundRobinRequest) -> dict[str, Any]:
    with league_session(write=True) as svc:
        created = svc.schedule_round_robin(req.start_at, req.interval_days)
        return {"matches": [_match_out(svc, m) for m in created]}


@app.delete("/matches/{match_id}", dependencies=[Depends(require_admin)])
def remove_match(match_id: str) -> dict[str, Any]:
    with league_session(write=True) as svc:
        svc.remove_match(match_id)
        return {"match_id": match_id, "deleted": True}


@app.put("/matches/{match_id}/score", dependencies=[Depends(require_admin)])
def set_score(match_id: str, req: ScoreRequest) -> dict[str, Any]:
    with league_session(write=True) as svc:
        match = svc.set_score(match_id, req.home_goals, req.away_goals)
        return _match_out(svc, match)


@app.post("/matches/{match_id}/adjust", dependencies=[Depends(require_admin)])
def adjust_score(match_id: str, req: AdjustScoreRequest) -> dict[str, Any]:
    with league_session(write=True) as svc:
        match = svc.adjust_score(match_id, req.delta_home, req.delta_away)
        return _match_out(svc, match)


@app.post("/matches/{match_id}/finish", dependencies=[Depends(require_admin)])
def finish_match(match_id: str) -> dict[str, Any]:
    with league_session(write=True) as svc:
        match = svc.finish(match_id)
        return _match_out(svc, match)


# ---------- Standings & league ----------


@app.get("/standings")
def standings() -> dict[str, Any]:
    with league_session() as svc:
        return {
            "standings": [
                {"rank": i, **row.to_dict()}
                for i, row in enumerate(svc.standings(), start=1)
            ],
        }


@app.post("/league/reset", dependencies=[Depends(require_admin)])
def reset_league() -> dict[str, Any]:
    with league_session(write=True) as svc:
        svc.reset()
        return {"teams": [_team_out(svc, t) for t in svc.list_teams()], "matches": []}
