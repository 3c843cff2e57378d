import math
from typing import Any, Optional

from sqlalchemy.orm import Session

from app.core.constants import DEFAULT_SKILL_TRACKER_POINTS_PER_REP
from app.crud.avatar import (
    avatar as crud_avatar,
    avatar_effect as crud_avatar_effect,
    corner_border as crud_corner_border,
    leaderboard_bonus_settings as crud_bonus_settings,
    student_avatar_settings as crud_avatar_settings,
)
from app.schemas.daily_redeem import ModifierBundle, ModifierStack

MULTIPLIER_FIELDS = (
    "rule_keeper_multiplier",
    "rule_breaker_multiplier",
    "skill_pulse_multiplier",
    "spotlight_multiplier",
)
PERCENT_FIELDS = ("challenge_completion_bonus_pct", "mvp_bonus_pct")


def _number(value: Any, fallback: float) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError):
        return fallback
    return number if math.isfinite(number) else fallback


def combine_modifiers(*sources: Optional[Any]) -> ModifierStack:
    """
    Stack modifier rows additively: each multiplier contributes its delta from 1,
    points and percentages add up, negatives are ignored.
    """
    present = [source for source in sources if source is not None]
    combined = {}
    for field in MULTIPLIER_FIELDS:
        delta = sum(_number(getattr(source, field, None), 1.0) - 1.0 for source in present)
        combined[field] = max(0.0, 1.0 + delta)
    for field in PERCENT_FIELDS:
        combined[field] = sum(max(0.0, _number(getattr(source, field, None), 0.0)) for source in present)
    combined["daily_free_points"] = sum(
        max(0, round(_number(getattr(source, "daily_free_points", None), 0.0))) for source in present
    )
    return ModifierStack(**combined)


class ModifierStackService:

    def get_student_modifiers(self, db: Session, student_id: int) -> ModifierBundle:
        settings_row = crud_avatar_settings.get_by_student(db, student_id=student_id)
        bonus_settings = crud_bonus_settings.get_current(db)
        base_per_rep = (
            max(0, int(bonus_settings.skill_tracker_points_per_rep or 0))
            if bonus_settings is not None
            else DEFAULT_SKILL_TRACKER_POINTS_PER_REP
        )
        if settings_row is None:
            return ModifierBundle(base_skill_pulse_points_per_rep=base_per_rep)

        avatar = crud_avatar.get(db, id=settings_row.avatar_id) if settings_row.avatar_id else None
        effect_key = str(settings_row.particle_style or "").strip()
        border_key = str(settings_row.corner_border_key or "").strip()
        effect = crud_avatar_effect.get_by_key(db, key=effect_key) if effect_key else None
        border = crud_corner_border.get_by_key(db, key=border_key) if border_key else None

        if effect is not None and effect.enabled is False:
            effect = None
        if border is not None and border.enabled is False:
            border = None

        return ModifierBundle(
            avatar_name=str(avatar.name) if avatar is not None and avatar.name else "Avatar",
            stack=combine_modifiers(avatar, effect, border),
            base_skill_pulse_points_per_rep=base_per_rep,
        )


modifier_stack_service = ModifierStackService()
