from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, List
from datetime import date, datetime


class MetricSample(BaseModel):
    model_config = ConfigDict(frozen=True)

    subject_id: int
    value: float
    tie_break_time: Optional[datetime] = None


class BoardDefinition(BaseModel):
    model_config = ConfigDict(frozen=True)

    board_key: str
    higher_is_better: bool = True
    exclude_non_positive: bool = False


class BoardAward(BaseModel):
    model_config = ConfigDict(frozen=True)

    board_key: str
    subject_id: int
    rank: int = Field(..., ge=1)
    board_points: int


class StudentBoardAward(BaseModel):
    board_key: str
    rank: int
    board_points: int


class LeaderboardSnapshotSchema(BaseModel):
    snapshot_date: date
    awards: List[BoardAward]
