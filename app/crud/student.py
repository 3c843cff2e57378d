from datetime import datetime
from typing import Dict, List, Tuple
from sqlalchemy import and_, func, or_
from sqlalchemy.orm import Session
from app.core.constants import ActivityKindEnum
from app.crud.base import CRUDBase
from app.models.student import Student, LedgerEntry, ActivityEvent, MvpAward

SESSION_KINDS = [ActivityKindEnum.PRACTICE_SESSION.value, ActivityKindEnum.REMEDIATION_SESSION.value]
ATTEMPT_KINDS = [ActivityKindEnum.SKILL_ATTEMPT.value, ActivityKindEnum.CONTEST_ATTEMPT.value]


class CRUDStudent(CRUDBase[Student, dict, dict]):
    def get_point_totals(self, db: Session) -> List[Tuple[int, int, int]]:
        rows = db.query(Student.id, Student.points_total, Student.lifetime_points).all()
        return [(row.id, int(row.points_total or 0), int(row.lifetime_points or 0)) for row in rows]

    def exists(self, db: Session, *, student_id: int) -> bool:
        return db.query(Student.id).filter(Student.id == student_id).first() is not None


class CRUDLedgerEntry(CRUDBase[LedgerEntry, dict, dict]):
    def get_totals_since(self, db: Session, *, since: datetime) -> Dict[int, int]:
        rows = (
            db.query(LedgerEntry.student_id, func.sum(LedgerEntry.points).label("points"))
            .filter(LedgerEntry.created_at >= since)
            .group_by(LedgerEntry.student_id)
            .all()
        )
        return {row.student_id: int(row.points or 0) for row in rows}


class CRUDActivityEvent(CRUDBase[ActivityEvent, dict, dict]):
    def get_counts_since(self, db: Session, *, since: datetime) -> List[Tuple[int, int, datetime]]:
        """Sessions count as-is; skill and contest attempts only when they succeeded."""
        rows = (
            db.query(
                ActivityEvent.student_id,
                func.count(ActivityEvent.id).label("events"),
                func.max(ActivityEvent.occurred_at).label("latest"),
            )
            .filter(ActivityEvent.occurred_at >= since)
            .filter(
                or_(
                    ActivityEvent.kind.in_(SESSION_KINDS),
                    and_(ActivityEvent.kind.in_(ATTEMPT_KINDS), ActivityEvent.succeeded.is_(True)),
                )
            )
            .group_by(ActivityEvent.student_id)
            .all()
        )
        return [(row.student_id, int(row.events), row.latest) for row in rows]


class CRUDMvpAward(CRUDBase[MvpAward, dict, dict]):
    def get_counts(self, db: Session) -> Dict[int, int]:
        rows = (
            db.query(MvpAward.student_id, func.count(MvpAward.id).label("awards"))
            .group_by(MvpAward.student_id)
            .all()
        )
        return {row.student_id: int(row.awards) for row in rows}


student = CRUDStudent(Student)
ledger_entry = CRUDLedgerEntry(LedgerEntry)
activity_event = CRUDActivityEvent(ActivityEvent)
mvp_award = CRUDMvpAward(MvpAward)
