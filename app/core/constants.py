from enum import Enum


BOARD_POINTS_TOP1 = 50
BOARD_POINTS_PER_TOP10 = 15
# Written only by the retired points scheme; any snapshot row carrying it is stale.
LEGACY_BOARD_POINTS_TOP1 = 30
MAX_AWARD_RANK = 10

PERFORMANCE_STAT_BOARD_PREFIX = "performance_stat:"

DEFAULT_CAMP_ROLE_DAILY_POINTS = {
    "seller": 300,
    "cleaner": 500,
}

DEFAULT_SKILL_TRACKER_POINTS_PER_REP = 2


class BoardKeyEnum(str, Enum):
    TOTAL = "total"
    WEEKLY = "weekly"
    LIFETIME = "lifetime"
    ACTIVITY_TODAY = "activity_today"
    MVP = "mvp"


class ActivityKindEnum(str, Enum):
    PRACTICE_SESSION = "practice_session"
    REMEDIATION_SESSION = "remediation_session"
    SKILL_ATTEMPT = "skill_attempt"
    CONTEST_ATTEMPT = "contest_attempt"


class WeekdayCodeEnum(str, Enum):
    MONDAY = "m"
    TUESDAY = "t"
    WEDNESDAY = "w"
    THURSDAY = "r"
    FRIDAY = "f"
    SATURDAY = "sa"
    SUNDAY = "su"


# Indexed by date.weekday()
WEEKDAY_CODES = [
    WeekdayCodeEnum.MONDAY,
    WeekdayCodeEnum.TUESDAY,
    WeekdayCodeEnum.WEDNESDAY,
    WeekdayCodeEnum.THURSDAY,
    WeekdayCodeEnum.FRIDAY,
    WeekdayCodeEnum.SATURDAY,
    WeekdayCodeEnum.SUNDAY,
]


class CampRoleStatusEnum(str, Enum):
    NONE = "none"
    PENDING = "pending"
    CLAIMED = "claimed"
    AVAILABLE = "available"
