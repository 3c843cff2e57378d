import logging
from datetime import datetime, timedelta, timezone
from typing import Callable, Iterable, List, Optional, Tuple

from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.constants import (
    BOARD_POINTS_PER_TOP10,
    BOARD_POINTS_TOP1,
    DEFAULT_CAMP_ROLE_DAILY_POINTS,
    CampRoleStatusEnum,
)
from app.crud.avatar import (
    leaderboard_bonus_grant as crud_bonus_grant,
    student_avatar_settings as crud_avatar_settings,
)
from app.crud.camp import (
    camp_role_daily_claim as crud_camp_claim,
    camp_role_setting as crud_camp_role_setting,
    camp_roster as crud_camp_roster,
    camp_roster_member as crud_camp_member,
)
from app.crud.student import student as crud_student
from app.crud.unlock_criteria import (
    student_unlock_criteria as crud_student_criteria,
    unlock_criteria_daily_claim as crud_event_claim,
    unlock_criteria_definition as crud_criteria_definition,
)
from app.schemas.daily_redeem import (
    BatchRedeemStatus,
    CampRoleBreakdown,
    EventContribution,
    ModifierBundle,
    RedeemModifiers,
    RedeemStatus,
)
from app.schemas.leaderboard import StudentBoardAward
from app.services.leaderboard_snapshot import SnapshotBundle, leaderboard_snapshot_service
from app.services.modifier_stack import modifier_stack_service
from app.utils.calendar import (
    at_civil_time,
    civil_date,
    civil_hour,
    ensure_aware,
    format_civil_clock,
    is_within_window,
    snapshot_cycle_date,
    weekday_code,
)

logger = logging.getLogger(__name__)

ModifierProvider = Callable[[Session, int], ModifierBundle]


def _normalize_role(value) -> str:
    return str(value or "").strip().lower()


def _role_label(role: str) -> str:
    return role[:1].upper() + role[1:]


def _secondary_role_active(allowed_days, today_code: str) -> bool:
    allowed = {str(day).strip().lower() for day in (allowed_days or []) if str(day).strip()}
    return not allowed or today_code in allowed


def _plural(count: int, noun: str) -> str:
    return f"{count} {noun}" if count == 1 else f"{count} {noun}s"


def _format_duration(milliseconds: int) -> str:
    minutes = -(-milliseconds // 60000)
    hours, minutes = divmod(minutes, 60)
    if hours and minutes:
        return f"{hours}h {minutes}m"
    if hours:
        return f"{hours}h"
    return f"{minutes}m"


class DailyRedeemService:
    """
    Composes what a student can redeem right now from three independently gated
    buckets: regular (avatar + leaderboard bonus, 24h cooldown), camp role
    (daily claim, unlocks in the afternoon) and limited-time events (daily claim
    per event).
    """

    def __init__(self, modifier_provider: Optional[ModifierProvider] = None):
        self._modifier_provider = modifier_provider or modifier_stack_service.get_student_modifiers

    def compute_status(self, db: Session, student_id: int, now: Optional[datetime] = None) -> RedeemStatus:
        now = ensure_aware(now or datetime.now(timezone.utc))
        cycle_date = snapshot_cycle_date(now)
        if not crud_student.exists(db, student_id=student_id):
            logger.info(f"Redeem status requested for unknown student {student_id}")
            return self._empty_status(student_id, now, cycle_date)

        bundle = leaderboard_snapshot_service.get_bundle(db, cycle_date, now)
        return self._compose_status(db, student_id, now, bundle)

    def compute_statuses(self, db: Session, student_ids: Iterable[int], now: Optional[datetime] = None) -> BatchRedeemStatus:
        """Statuses for many students against one shared snapshot read."""
        now = ensure_aware(now or datetime.now(timezone.utc))
        unique_ids = list(dict.fromkeys(student_ids))
        if not unique_ids:
            return BatchRedeemStatus()

        cycle_date = snapshot_cycle_date(now)
        bundle = leaderboard_snapshot_service.get_bundle(db, cycle_date, now)
        statuses = {}
        for student_id in unique_ids:
            if crud_student.exists(db, student_id=student_id):
                statuses[student_id] = self._compose_status(db, student_id, now, bundle)
            else:
                statuses[student_id] = self._empty_status(student_id, now, cycle_date)
        return BatchRedeemStatus(leaderboard_snapshot_date=cycle_date, statuses=statuses)

    def _empty_status(self, student_id: int, now: datetime, cycle_date) -> RedeemStatus:
        return RedeemStatus(student_id=student_id, next_redeem_at=now, leaderboard_snapshot_date=cycle_date)

    def _compose_status(self, db: Session, student_id: int, now: datetime, bundle: SnapshotBundle) -> RedeemStatus:
        modifiers = self._modifier_provider(db, student_id)
        avatar_points = max(0, int(modifiers.stack.daily_free_points))
        leaderboard_points = max(0, bundle.points_for(student_id))
        board_awards = bundle.awards_for(student_id)

        next_redeem_at, cooldown_ms = self._regular_gate(db, student_id, now)
        regular_value = avatar_points + leaderboard_points
        # All or nothing: nothing from this bucket while the cooldown runs
        regular_points = regular_value if cooldown_ms == 0 else 0

        camp = self._camp_role_breakdown(db, student_id, now)
        camp_available = camp.points if camp.status == CampRoleStatusEnum.AVAILABLE else 0

        events = self._event_contributions(db, student_id, now)
        event_points = sum(event.daily_points for event in events)

        total = regular_points + camp_available + event_points

        chips = self._contribution_chips(
            avatar_points=avatar_points,
            board_awards=board_awards,
            regular_value=regular_value,
            cooldown_ms=cooldown_ms,
            camp=camp,
            events=events,
        )

        stack = modifiers.stack
        base_per_rep = modifiers.base_skill_pulse_points_per_rep
        return RedeemStatus(
            student_id=student_id,
            can_redeem=total > 0,
            available_points=total,
            next_redeem_at=next_redeem_at,
            cooldown_ms=cooldown_ms,
            regular_points=regular_points,
            avatar_points=avatar_points,
            leaderboard_points=leaderboard_points,
            camp_role_points=camp.points,
            camp_role_status=camp.status,
            camp_role_unlocks_at=camp.unlocks_at,
            event_points=event_points,
            events=events,
            leaderboard_boards=bundle.board_keys_for(student_id),
            leaderboard_awards=board_awards,
            leaderboard_snapshot_date=bundle.snapshot_date,
            contribution_chips=chips,
            avatar_name=modifiers.avatar_name,
            modifiers=RedeemModifiers(
                **stack.model_dump(),
                camp_role_daily_points=camp.points,
                base_skill_pulse_points_per_rep=base_per_rep,
                skill_pulse_points_per_rep=max(0, round(base_per_rep * stack.skill_pulse_multiplier)),
            ),
        )

    def _regular_gate(self, db: Session, student_id: int, now: datetime) -> Tuple[datetime, int]:
        avatar_settings = crud_avatar_settings.get_by_student(db, student_id=student_id)
        bonus_grant = crud_bonus_grant.get_by_student(db, student_id=student_id)
        granted = [
            ensure_aware(stamp)
            for stamp in (
                avatar_settings.avatar_daily_granted_at if avatar_settings else None,
                bonus_grant.last_granted_at if bonus_grant else None,
            )
            if stamp is not None
        ]
        if not granted:
            return now, 0
        next_redeem_at = max(granted) + timedelta(hours=settings.REDEEM_COOLDOWN_HOURS)
        cooldown_ms = max(0, int((next_redeem_at - now).total_seconds() * 1000))
        return next_redeem_at, cooldown_ms

    def _camp_role_breakdown(self, db: Session, student_id: int, now: datetime) -> CampRoleBreakdown:
        members = crud_camp_member.get_enabled_by_student(db, student_id=student_id)
        if not members:
            return CampRoleBreakdown()

        today = civil_date(now)
        roster_ids = sorted({member.roster_id for member in members if member.roster_id})
        active_roster_ids = {
            roster.id
            for roster in crud_camp_roster.get_enabled_by_ids(db, roster_ids=roster_ids)
            if is_within_window(today, roster.start_date, roster.end_date)
        }
        if not active_roster_ids:
            return CampRoleBreakdown()

        role_points = dict(DEFAULT_CAMP_ROLE_DAILY_POINTS)
        role_points.update(crud_camp_role_setting.get_points_by_role(db))
        today_code = weekday_code(now).value

        points = 0
        labels: List[str] = []
        for member in members:
            if member.roster_id not in active_roster_ids:
                continue
            roles = []
            primary = _normalize_role(member.display_role)
            if primary:
                roles.append(primary)
            secondary = _normalize_role(member.secondary_role)
            if secondary and secondary not in roles and _secondary_role_active(member.secondary_role_days, today_code):
                roles.append(secondary)
            for role in roles:
                role_value = int(role_points.get(role, 0))
                if role_value <= 0:
                    continue
                points += role_value
                label = _role_label(role)
                if label not in labels:
                    labels.append(label)

        if points <= 0:
            return CampRoleBreakdown()

        if crud_camp_claim.exists_for_date(db, student_id=student_id, claim_date=today):
            status = CampRoleStatusEnum.CLAIMED
        elif civil_hour(now) < settings.CAMP_ROLE_UNLOCK_HOUR:
            status = CampRoleStatusEnum.PENDING
        else:
            status = CampRoleStatusEnum.AVAILABLE

        unlocks_at = at_civil_time(today, settings.CAMP_ROLE_UNLOCK_HOUR) if status == CampRoleStatusEnum.PENDING else None
        return CampRoleBreakdown(points=points, roles=labels, status=status, unlocks_at=unlocks_at)

    def _event_contributions(self, db: Session, student_id: int, now: datetime) -> List[EventContribution]:
        definitions = crud_criteria_definition.get_enabled(db)
        if not definitions:
            return []

        today = civil_date(now)
        fulfilled = crud_student_criteria.get_fulfilled_keys(db, student_id=student_id)
        claimed = crud_event_claim.get_claimed_keys(db, student_id=student_id, claim_date=today)

        events: List[EventContribution] = []
        for definition in definitions:
            key = str(definition.key or "").strip()
            if not key:
                logger.warning(f"Skipping event definition {definition.id} ({definition.label}): missing key")
                continue
            # Plain unlock criteria carry no daily points and are not events
            daily_points = max(0, int(definition.daily_free_points or 0))
            if daily_points <= 0:
                continue
            if not is_within_window(today, definition.start_date, definition.end_date):
                continue
            if key not in fulfilled or key in claimed:
                continue
            events.append(EventContribution(criteria_key=key, label=definition.label or key, daily_points=daily_points))
        return events

    def _contribution_chips(
        self,
        *,
        avatar_points: int,
        board_awards: List[StudentBoardAward],
        regular_value: int,
        cooldown_ms: int,
        camp: CampRoleBreakdown,
        events: List[EventContribution],
    ) -> List[str]:
        chips: List[str] = []
        if avatar_points > 0:
            chips.append(f"+{avatar_points} avatar points")

        top1_count = sum(1 for award in board_awards if award.rank == 1)
        top10_count = len(board_awards) - top1_count
        if top1_count:
            chips.append(f"Top #1 bonus: +{BOARD_POINTS_TOP1} each ({_plural(top1_count, 'board')})")
        if top10_count:
            chips.append(f"Top 10 bonus: +{BOARD_POINTS_PER_TOP10} each ({_plural(top10_count, 'board')})")

        if cooldown_ms > 0 and regular_value > 0:
            chips.append(f"avatar & leaderboard points unlock in {_format_duration(cooldown_ms)}")

        if camp.status == CampRoleStatusEnum.AVAILABLE:
            chips.append(f"+{camp.points} camp role ({', '.join(camp.roles)})")
        elif camp.status == CampRoleStatusEnum.PENDING:
            chips.append(f"camp role points unlock at {format_civil_clock(settings.CAMP_ROLE_UNLOCK_HOUR)}")

        for event in events:
            chips.append(f"+{event.daily_points} {event.label}")
        return chips


daily_redeem_service = DailyRedeemService()
