"""
Pure leaderboard transformations.

Every function takes an already-parsed LeaderboardDocument (or None before
anything is loaded) and derives rows for the dashboard. Nothing here mutates
the document or touches the network.

  find_default_selection    earliest day with data, preferring part 2
  build_leaderboard         ranked solvers of one (day, part)
  find_default_player_id    first member alphabetically
  build_player_submissions  one row per (day, part) for a single member
  compute_part_availability which parts anyone has solved, per day
"""

from datetime import datetime
from typing import Iterable, Optional

from config import DISPLAY_TIMEZONE, PARTS, TOTAL_DAYS
from models.leaderboard import LeaderboardDocument, Member
from models.rows import PlayerOption, RankedRow, SubmissionRow


def day_numbers() -> list[str]:
    return [str(day) for day in range(1, TOTAL_DAYS + 1)]


def format_completion_time(timestamp: int, tz=None) -> str:
    moment = datetime.fromtimestamp(timestamp, tz or DISPLAY_TIMEZONE)
    return moment.strftime("%Y-%m-%d %H:%M:%S")


def _members(doc: Optional[LeaderboardDocument]) -> list[Member]:
    if doc is None:
        return []
    return list(doc.members.values())


# ---------- Day / part selection ----------

def find_default_selection(doc: Optional[LeaderboardDocument]) -> dict[str, str]:
    """
    Earliest day that appears under any member's completions ("1" when the
    board is empty). Part 2 is preferred when anybody has solved it that day.
    """
    members = _members(doc)
    days = sorted({int(day) for member in members for day in member.completion_day_level})
    first_day = str(days[0]) if days else "1"

    has_part2 = any(m.completion(first_day, "2") for m in members)
    return {"day": first_day, "part": "2" if has_part2 else "1"}


def build_leaderboard(
    doc: Optional[LeaderboardDocument], day: str, part: str
) -> list[RankedRow]:
    """
    Members who solved (day, part), fastest first.

    Equal timestamps keep the document's member order (sorted() is stable);
    no further tie-break is applied.
    """
    solved = []
    for member in _members(doc):
        completion = member.completion(day, part)
        if completion is None:
            continue
        solved.append((member, completion.get_star_ts))

    solved.sort(key=lambda pair: pair[1])

    return [
        RankedRow(
            id=member.id,
            name=member.display_name,
            completed_at=format_completion_time(ts),
            timestamp=ts,
            rank=rank,
        )
        for rank, (member, ts) in enumerate(solved, start=1)
    ]


def compute_part_availability(
    doc: Optional[LeaderboardDocument],
) -> dict[str, dict[int, bool]]:
    availability: dict[str, dict[int, bool]] = {}

    for member in _members(doc):
        for day, parts in member.completion_day_level.items():
            flags = availability.setdefault(day, {1: False, 2: False})
            if "1" in parts:
                flags[1] = True
            if "2" in parts:
                flags[2] = True

    return availability


# ---------- Player history ----------

def list_players(doc: Optional[LeaderboardDocument]) -> list[PlayerOption]:
    """All members, alphabetical by display name (case-insensitive)."""
    members = sorted(_members(doc), key=lambda m: m.display_name.casefold())
    return [PlayerOption(id=str(m.id), name=m.display_name) for m in members]


def find_default_player_id(doc: Optional[LeaderboardDocument]) -> str:
    players = list_players(doc)
    return players[0].id if players else ""


def find_member(doc: Optional[LeaderboardDocument], player_id) -> Optional[Member]:
    if not player_id:
        return None
    for member in _members(doc):
        if str(member.id) == str(player_id):
            return member
    return None


def build_player_submissions(
    doc: Optional[LeaderboardDocument],
    player_id,
    days: Iterable[str],
) -> list[SubmissionRow]:
    """Exactly one row per day x part, day-major, for the given member."""
    member = find_member(doc, player_id)
    if member is None:
        return []

    rows = []
    for day in days:
        for part in PARTS:
            completion = member.completion(day, part)
            if completion is None:
                rows.append(SubmissionRow(day=str(day), part=part, status="not_completed"))
            else:
                rows.append(
                    SubmissionRow(
                        day=str(day),
                        part=part,
                        status="completed",
                        completed_at=format_completion_time(completion.get_star_ts),
                        timestamp=completion.get_star_ts,
                    )
                )
    return rows
