from enum import Enum
from pydantic import BaseModel


class ViewMode(str, Enum):
    LEADERBOARD = "leaderboard"
    PLAYER = "player"


class Selection(BaseModel):
    year: str
    day: str = "1"
    part: str = "1"
    player_id: str = ""
    view: ViewMode = ViewMode.LEADERBOARD
