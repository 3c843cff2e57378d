from datetime import date, datetime, timezone
from zoneinfo import ZoneInfo

from app.crud.avatar import (
    avatar as crud_avatar,
    avatar_effect as crud_avatar_effect,
    corner_border as crud_corner_border,
    leaderboard_bonus_grant as crud_bonus_grant,
    leaderboard_bonus_settings as crud_bonus_settings,
    student_avatar_settings as crud_avatar_settings,
)
from app.crud.camp import (
    camp_role_daily_claim as crud_camp_claim,
    camp_role_setting as crud_camp_role_setting,
    camp_roster as crud_camp_roster,
    camp_roster_member as crud_camp_member,
)
from app.crud.leaderboard_snapshot import leaderboard_snapshot as crud_snapshot
from app.crud.performance_stat import performance_stat as crud_performance_stat
from app.crud.performance_stat import student_stat_record as crud_stat_record
from app.crud.student import (
    activity_event as crud_activity_event,
    ledger_entry as crud_ledger_entry,
    mvp_award as crud_mvp_award,
    student as crud_student,
)
from app.crud.unlock_criteria import (
    student_unlock_criteria as crud_student_criteria,
    unlock_criteria_daily_claim as crud_event_claim,
    unlock_criteria_definition as crud_criteria_definition,
)

NEW_YORK = ZoneInfo("America/New_York")


def civil(year, month, day, hour=0, minute=0):
    """Wall-clock time in the reference timezone, as an aware datetime."""
    return datetime(year, month, day, hour, minute, tzinfo=NEW_YORK)


def utc(value: datetime) -> datetime:
    return value.astimezone(timezone.utc)


def create_student(db, full_name="Student", points_total=0, lifetime_points=0):
    return crud_student.create(
        db, obj_in={"full_name": full_name, "points_total": points_total, "lifetime_points": lifetime_points}
    )


def add_ledger_entry(db, student, points, created_at):
    return crud_ledger_entry.create(
        db, obj_in={"student_id": student.id, "points": points, "category": "manual", "created_at": utc(created_at)}
    )


def add_activity(db, student, kind, occurred_at, succeeded=True):
    return crud_activity_event.create(
        db, obj_in={"student_id": student.id, "kind": kind, "succeeded": succeeded, "occurred_at": utc(occurred_at)}
    )


def add_mvp_award(db, student, awarded_at):
    return crud_mvp_award.create(db, obj_in={"student_id": student.id, "awarded_at": utc(awarded_at)})


def create_performance_stat(db, key, name=None, higher_is_better=True, enabled=True):
    return crud_performance_stat.create(
        db,
        obj_in={"key": key, "name": name or str(key), "higher_is_better": higher_is_better, "enabled": enabled},
    )


def add_stat_record(db, stat, student, value, recorded_at):
    return crud_stat_record.create(
        db, obj_in={"stat_id": stat.id, "student_id": student.id, "value": value, "recorded_at": utc(recorded_at)}
    )


def add_snapshot_row(db, snapshot_date: date, board_key, student, rank, board_points):
    return crud_snapshot.create(
        db,
        obj_in={
            "snapshot_date": snapshot_date,
            "board_key": board_key,
            "student_id": student.id,
            "rank": rank,
            "board_points": board_points,
        },
    )


def create_avatar(db, name="Fox", **modifiers):
    return crud_avatar.create(db, obj_in={"name": name, **modifiers})


def create_avatar_effect(db, key, enabled=True, **modifiers):
    return crud_avatar_effect.create(db, obj_in={"key": key, "name": key, "enabled": enabled, **modifiers})


def create_corner_border(db, key, enabled=True, **modifiers):
    return crud_corner_border.create(db, obj_in={"key": key, "name": key, "enabled": enabled, **modifiers})


def equip_avatar(db, student, avatar=None, particle_style=None, corner_border_key=None, daily_granted_at=None):
    return crud_avatar_settings.create(
        db,
        obj_in={
            "student_id": student.id,
            "avatar_id": avatar.id if avatar is not None else None,
            "particle_style": particle_style,
            "corner_border_key": corner_border_key,
            "avatar_daily_granted_at": utc(daily_granted_at) if daily_granted_at else None,
        },
    )


def record_bonus_grant(db, student, granted_at):
    return crud_bonus_grant.create(db, obj_in={"student_id": student.id, "last_granted_at": utc(granted_at)})


def set_points_per_rep(db, points):
    return crud_bonus_settings.create(db, obj_in={"id": 1, "skill_tracker_points_per_rep": points})


def create_roster(db, name="Summer Camp", enabled=True, start_date=None, end_date=None):
    return crud_camp_roster.create(
        db, obj_in={"name": name, "enabled": enabled, "start_date": start_date, "end_date": end_date}
    )


def add_roster_member(db, roster, student, display_role=None, secondary_role=None, secondary_role_days=None, enabled=True):
    return crud_camp_member.create(
        db,
        obj_in={
            "roster_id": roster.id,
            "student_id": student.id,
            "enabled": enabled,
            "display_role": display_role,
            "secondary_role": secondary_role,
            "secondary_role_days": secondary_role_days or [],
        },
    )


def set_camp_role_points(db, role, daily_points):
    return crud_camp_role_setting.create(db, obj_in={"role": role, "daily_points": daily_points})


def add_camp_claim(db, student, claim_date, points=0):
    return crud_camp_claim.create(db, obj_in={"student_id": student.id, "claim_date": claim_date, "points": points})


def create_event(db, key, label, daily_free_points, start_date=None, end_date=None, enabled=True):
    return crud_criteria_definition.create(
        db,
        obj_in={
            "key": key,
            "label": label,
            "enabled": enabled,
            "start_date": start_date,
            "end_date": end_date,
            "daily_free_points": daily_free_points,
        },
    )


def fulfill_criteria(db, student, criteria_key, fulfilled=True):
    return crud_student_criteria.create(
        db, obj_in={"student_id": student.id, "criteria_key": criteria_key, "fulfilled": fulfilled}
    )


def add_event_claim(db, student, claim_date, criteria_key, points=0):
    return crud_event_claim.create(
        db,
        obj_in={"student_id": student.id, "claim_date": claim_date, "criteria_key": criteria_key, "points": points},
    )
