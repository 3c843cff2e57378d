from datetime import date
from typing import Dict, List
from sqlalchemy.orm import Session
from app.crud.base import CRUDBase
from app.models.camp import CampRoster, CampRosterMember, CampRoleSetting, CampRoleDailyClaim


class CRUDCampRoster(CRUDBase[CampRoster, dict, dict]):
    def get_enabled_by_ids(self, db: Session, *, roster_ids: List[int]) -> List[CampRoster]:
        if not roster_ids:
            return []
        return (
            db.query(CampRoster)
            .filter(CampRoster.id.in_(roster_ids))
            .filter(CampRoster.enabled.is_(True))
            .all()
        )


class CRUDCampRosterMember(CRUDBase[CampRosterMember, dict, dict]):
    def get_enabled_by_student(self, db: Session, *, student_id: int) -> List[CampRosterMember]:
        return (
            db.query(CampRosterMember)
            .filter(CampRosterMember.student_id == student_id)
            .filter(CampRosterMember.enabled.is_(True))
            .order_by(CampRosterMember.id.asc())
            .all()
        )


class CRUDCampRoleSetting(CRUDBase[CampRoleSetting, dict, dict]):
    def get_points_by_role(self, db: Session) -> Dict[str, int]:
        return {
            str(row.role).strip().lower(): int(row.daily_points or 0)
            for row in db.query(CampRoleSetting).all()
        }


class CRUDCampRoleDailyClaim(CRUDBase[CampRoleDailyClaim, dict, dict]):
    def exists_for_date(self, db: Session, *, student_id: int, claim_date: date) -> bool:
        return (
            db.query(CampRoleDailyClaim.id)
            .filter(CampRoleDailyClaim.student_id == student_id)
            .filter(CampRoleDailyClaim.claim_date == claim_date)
            .first()
        ) is not None


camp_roster = CRUDCampRoster(CampRoster)
camp_roster_member = CRUDCampRosterMember(CampRosterMember)
camp_role_setting = CRUDCampRoleSetting(CampRoleSetting)
camp_role_daily_claim = CRUDCampRoleDailyClaim(CampRoleDailyClaim)
