from typing import List
from sqlalchemy.orm import Session
from app.crud.base import CRUDBase
from app.models.leaderboard import PerformanceStat, StudentStatRecord


class CRUDPerformanceStat(CRUDBase[PerformanceStat, dict, dict]):
    def get_enabled(self, db: Session) -> List[PerformanceStat]:
        return (
            db.query(PerformanceStat)
            .filter(PerformanceStat.enabled.is_(True))
            .order_by(PerformanceStat.id.asc())
            .all()
        )


class CRUDStudentStatRecord(CRUDBase[StudentStatRecord, dict, dict]):
    def get_by_stat(self, db: Session, *, stat_id: int) -> List[StudentStatRecord]:
        return (
            db.query(StudentStatRecord)
            .filter(StudentStatRecord.stat_id == stat_id)
            .order_by(StudentStatRecord.recorded_at.asc(), StudentStatRecord.id.asc())
            .all()
        )


performance_stat = CRUDPerformanceStat(PerformanceStat)
student_stat_record = CRUDStudentStatRecord(StudentStatRecord)
