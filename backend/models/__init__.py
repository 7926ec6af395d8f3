from models.leaderboard import Completion, LeaderboardDocument, Member
from models.rows import PlayerOption, RankedRow, SubmissionRow
from models.selection import Selection, ViewMode

__all__ = [
    "Completion", "LeaderboardDocument", "Member",
    "PlayerOption", "RankedRow", "SubmissionRow",
    "Selection", "ViewMode",
]
