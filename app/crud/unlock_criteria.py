from datetime import date
from typing import List, Set
from sqlalchemy.orm import Session
from app.crud.base import CRUDBase
from app.models.unlock_criteria import UnlockCriteriaDefinition, StudentUnlockCriteria, UnlockCriteriaDailyClaim


class CRUDUnlockCriteriaDefinition(CRUDBase[UnlockCriteriaDefinition, dict, dict]):
    def get_enabled(self, db: Session) -> List[UnlockCriteriaDefinition]:
        return (
            db.query(UnlockCriteriaDefinition)
            .filter(UnlockCriteriaDefinition.enabled.is_(True))
            .order_by(UnlockCriteriaDefinition.label.asc(), UnlockCriteriaDefinition.id.asc())
            .all()
        )


class CRUDStudentUnlockCriteria(CRUDBase[StudentUnlockCriteria, dict, dict]):
    def get_fulfilled_keys(self, db: Session, *, student_id: int) -> Set[str]:
        rows = (
            db.query(StudentUnlockCriteria.criteria_key)
            .filter(StudentUnlockCriteria.student_id == student_id)
            .filter(StudentUnlockCriteria.fulfilled.is_(True))
            .all()
        )
        return {str(row.criteria_key).strip() for row in rows if str(row.criteria_key or "").strip()}


class CRUDUnlockCriteriaDailyClaim(CRUDBase[UnlockCriteriaDailyClaim, dict, dict]):
    def get_claimed_keys(self, db: Session, *, student_id: int, claim_date: date) -> Set[str]:
        rows = (
            db.query(UnlockCriteriaDailyClaim.criteria_key)
            .filter(UnlockCriteriaDailyClaim.student_id == student_id)
            .filter(UnlockCriteriaDailyClaim.claim_date == claim_date)
            .all()
        )
        return {str(row.criteria_key).strip() for row in rows}


unlock_criteria_definition = CRUDUnlockCriteriaDefinition(UnlockCriteriaDefinition)
student_unlock_criteria = CRUDStudentUnlockCriteria(StudentUnlockCriteria)
unlock_criteria_daily_claim = CRUDUnlockCriteriaDailyClaim(UnlockCriteriaDailyClaim)
