from typing import Optional
from pydantic import BaseModel, Field


class Completion(BaseModel):
    get_star_ts: int    # Unix timestamp in seconds


class Member(BaseModel):
    id: int
    name: Optional[str] = None
    stars: int = 0
    local_score: int = 0
    global_score: int = 0
    last_star_ts: int = 0
    # day -> part -> Completion; only solved parts are present
    completion_day_level: dict[str, dict[str, Completion]] = Field(default_factory=dict)

    @property
    def display_name(self) -> str:
        return self.name or f"Anonymous #{self.id}"

    def completion(self, day: str, part: str) -> Optional[Completion]:
        return self.completion_day_level.get(str(day), {}).get(str(part))


class LeaderboardDocument(BaseModel):
    members: dict[str, Member] = Field(default_factory=dict)
    event: Optional[str] = None
    owner_id: Optional[int] = None
