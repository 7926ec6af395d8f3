"""
Selection state transitions.

The Selection model itself is plain data (models.selection); these helpers
validate user choices and derive defaults from a freshly loaded document.
"""

from typing import Optional

from config import PARTS, TOTAL_DAYS
from models.leaderboard import LeaderboardDocument
from models.selection import Selection, ViewMode
from ranking.errors import ValidationError
from ranking.transform import find_default_player_id, find_default_selection


def apply_defaults(selection: Selection, doc: Optional[LeaderboardDocument]) -> Selection:
    defaults = find_default_selection(doc)
    selection.day = defaults["day"]
    selection.part = defaults["part"]
    selection.player_id = find_default_player_id(doc)
    return selection


def select_part(selection: Selection, day, part) -> Selection:
    day, part = str(day), str(part)
    if not day.isdigit() or not 1 <= int(day) <= TOTAL_DAYS:
        raise ValidationError(f"Day must be between 1 and {TOTAL_DAYS}.")
    if part not in PARTS:
        raise ValidationError("Part must be 1 or 2.")

    selection.day = str(int(day))
    selection.part = part
    return selection


def select_player(selection: Selection, player_id) -> Selection:
    selection.player_id = str(player_id or "")
    return selection


def set_view(selection: Selection, view) -> Selection:
    try:
        selection.view = ViewMode(view)
    except ValueError:
        raise ValidationError(f"Unknown view {view!r}.") from None
    return selection
