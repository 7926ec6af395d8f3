from typing import Literal, Optional
from pydantic import BaseModel, computed_field

NOT_COMPLETED = "Not completed"


class RankedRow(BaseModel):
    id: int
    name: str
    completed_at: str       # formatted in the display time zone
    timestamp: int
    rank: int               # 1-based, ascending timestamp


class SubmissionRow(BaseModel):
    day: str
    part: str
    status: Literal["completed", "not_completed"]
    completed_at: Optional[str] = None
    timestamp: Optional[int] = None

    @computed_field
    @property
    def label(self) -> str:
        return self.completed_at if self.status == "completed" else NOT_COMPLETED


class PlayerOption(BaseModel):
    id: str
    name: str
