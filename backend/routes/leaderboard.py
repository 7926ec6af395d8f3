from typing import Union

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel

import store
from ranking.errors import (
    LeaderboardError,
    LoadInProgress,
    RefreshConfirmationRequired,
    UpstreamError,
    ValidationError,
)
from ranking.selection import select_part, select_player, set_view
from ranking.views import DashboardView, build_dashboard_view

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


# ---------- Request schemas ----------

class LoadRequest(BaseModel):
    year: Union[int, str]
    leaderboard_code: str
    session_token: str
    force: bool = False         # bypass a fresh cache entry
    confirmed: bool = False     # user accepted the polling warning


class SelectPartRequest(BaseModel):
    day: str
    part: str


class SelectPlayerRequest(BaseModel):
    player_id: str


class ViewRequest(BaseModel):
    view: str       # "leaderboard" | "player"


# ---------- Helpers ----------

def _status_for(exc: LeaderboardError) -> int:
    if isinstance(exc, ValidationError):
        return 400
    if isinstance(exc, (RefreshConfirmationRequired, LoadInProgress)):
        return 409
    # UpstreamError / TransportError: the board could not be fetched
    return 502


def _raise_http(exc: LeaderboardError):
    detail = {"message": str(exc)}
    if isinstance(exc, UpstreamError):
        detail["upstream_status"] = exc.status_code
    raise HTTPException(status_code=_status_for(exc), detail=detail) from exc


# ---------- Endpoints ----------

@router.get("", response_model=DashboardView)
async def get_dashboard():
    """Current selection, day grid and rows for whatever view is active."""
    return build_dashboard_view(store.dashboard)


@router.post("/load", response_model=DashboardView)
async def load_leaderboard(body: LoadRequest):
    """
    Loads a private leaderboard (from cache when fetched < 15 minutes ago)
    and resets the selection to the earliest day with completions.
    """
    try:
        await store.dashboard.load(
            body.year,
            body.leaderboard_code,
            body.session_token,
            force=body.force,
            confirmed=body.confirmed,
        )
    except LeaderboardError as exc:
        _raise_http(exc)
    return build_dashboard_view(store.dashboard)


@router.post("/select", response_model=DashboardView)
async def choose_part(body: SelectPartRequest):
    try:
        select_part(store.dashboard.selection, body.day, body.part)
        set_view(store.dashboard.selection, "leaderboard")
    except LeaderboardError as exc:
        _raise_http(exc)
    return build_dashboard_view(store.dashboard)


@router.post("/player", response_model=DashboardView)
async def choose_player(body: SelectPlayerRequest):
    select_player(store.dashboard.selection, body.player_id)
    set_view(store.dashboard.selection, "player")
    return build_dashboard_view(store.dashboard)


@router.post("/view", response_model=DashboardView)
async def toggle_view(body: ViewRequest):
    try:
        set_view(store.dashboard.selection, body.view)
    except LeaderboardError as exc:
        _raise_http(exc)
    return build_dashboard_view(store.dashboard)
