from pydantic import BaseModel, Field
from typing import Optional, List, Dict
from datetime import date, datetime

from app.core.constants import CampRoleStatusEnum, DEFAULT_SKILL_TRACKER_POINTS_PER_REP
from app.schemas.leaderboard import StudentBoardAward


class ModifierStack(BaseModel):
    """Combined modifiers of a student's equipped avatar, effect and corner border."""
    rule_keeper_multiplier: float = 1.0
    rule_breaker_multiplier: float = 1.0
    skill_pulse_multiplier: float = 1.0
    spotlight_multiplier: float = 1.0
    daily_free_points: int = 0
    challenge_completion_bonus_pct: float = 0.0
    mvp_bonus_pct: float = 0.0


class ModifierBundle(BaseModel):
    avatar_name: str = "Avatar"
    stack: ModifierStack = Field(default_factory=ModifierStack)
    base_skill_pulse_points_per_rep: int = DEFAULT_SKILL_TRACKER_POINTS_PER_REP


class RedeemModifiers(ModifierStack):
    camp_role_daily_points: int = 0
    base_skill_pulse_points_per_rep: int = DEFAULT_SKILL_TRACKER_POINTS_PER_REP
    skill_pulse_points_per_rep: int = DEFAULT_SKILL_TRACKER_POINTS_PER_REP


class EventContribution(BaseModel):
    criteria_key: str
    label: str
    daily_points: int


class CampRoleBreakdown(BaseModel):
    points: int = 0
    roles: List[str] = []
    status: CampRoleStatusEnum = CampRoleStatusEnum.NONE
    unlocks_at: Optional[datetime] = None


class RedeemStatus(BaseModel):
    student_id: int
    can_redeem: bool = False
    available_points: int = 0
    next_redeem_at: datetime
    cooldown_ms: int = 0
    regular_points: int = 0
    avatar_points: int = 0
    leaderboard_points: int = 0
    camp_role_points: int = 0
    camp_role_status: CampRoleStatusEnum = CampRoleStatusEnum.NONE
    camp_role_unlocks_at: Optional[datetime] = None
    event_points: int = 0
    events: List[EventContribution] = []
    leaderboard_boards: List[str] = []
    leaderboard_awards: List[StudentBoardAward] = []
    leaderboard_snapshot_date: date
    contribution_chips: List[str] = []
    avatar_name: str = "Avatar"
    modifiers: RedeemModifiers = Field(default_factory=RedeemModifiers)


class BatchRedeemStatusRequest(BaseModel):
    student_ids: List[int] = []


class BatchRedeemStatus(BaseModel):
    leaderboard_snapshot_date: Optional[date] = None
    statuses: Dict[int, RedeemStatus] = {}
