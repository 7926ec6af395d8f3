"""
Dashboard view models.

Turns the Dashboard state into everything a thin frontend needs to render:
the day grid, the heading, the table rows and the empty-state message.
"""

from typing import Optional, Union

from pydantic import BaseModel

from config import PARTS
from models.rows import PlayerOption, RankedRow, SubmissionRow
from models.selection import Selection, ViewMode
from ranking.dashboard import Dashboard
from ranking.transform import (
    build_leaderboard,
    build_player_submissions,
    compute_part_availability,
    day_numbers,
    find_member,
    list_players,
)

EMPTY_BOARD = "Load a leaderboard to see per-part rankings here."
EMPTY_PART = "No completions yet for this part."
EMPTY_DAY = "No completions yet"
UNKNOWN_PLAYER = "Select a player to see their submissions."


# ---------- Response schema ----------

class PartButton(BaseModel):
    part: str
    selected: bool
    has_data: bool


class DayTile(BaseModel):
    day: str
    parts: list[PartButton]
    availability: Optional[str] = None   # only for days with any member entry


class DashboardView(BaseModel):
    selection: Selection
    loading: bool
    error: str
    loaded: bool
    heading: str
    days: list[DayTile]
    players: list[PlayerOption]
    rows: list[Union[RankedRow, SubmissionRow]]
    message: Optional[str] = None


# ---------- Builders ----------

def _star(solved: bool) -> str:
    return "★" if solved else "✦"


def _availability_label(flags: dict[int, bool]) -> str:
    if not (flags[1] or flags[2]):
        return EMPTY_DAY
    return f"{_star(flags[1])} Part 1 · {_star(flags[2])} Part 2"


def build_day_tiles(dashboard: Dashboard) -> list[DayTile]:
    availability = compute_part_availability(dashboard.document)
    selection = dashboard.selection
    show_selected = selection.view == ViewMode.LEADERBOARD

    tiles = []
    for day in day_numbers():
        flags = availability.get(day)
        parts = [
            PartButton(
                part=part,
                selected=show_selected and selection.day == day and selection.part == part,
                has_data=bool(flags and flags[int(part)]),
            )
            for part in PARTS
        ]
        tiles.append(
            DayTile(
                day=day,
                parts=parts,
                availability=_availability_label(flags) if flags else None,
            )
        )
    return tiles


def build_dashboard_view(dashboard: Dashboard) -> DashboardView:
    selection = dashboard.selection
    doc = dashboard.document

    if selection.view == ViewMode.PLAYER:
        member = find_member(doc, selection.player_id)
        heading = member.display_name if member else "Player submissions"
        rows = build_player_submissions(doc, selection.player_id, day_numbers())
    else:
        heading = f"Day {selection.day} · Part {selection.part}"
        rows = build_leaderboard(doc, selection.day, selection.part)

    message = None
    if doc is None:
        message = EMPTY_BOARD
    elif not rows:
        message = UNKNOWN_PLAYER if selection.view == ViewMode.PLAYER else EMPTY_PART

    return DashboardView(
        selection=selection,
        loading=dashboard.loading,
        error=dashboard.error,
        loaded=doc is not None,
        heading=heading,
        days=build_day_tiles(dashboard),
        players=list_players(doc),
        rows=rows,
        message=message,
    )
