from typing import Optional
from sqlalchemy.orm import Session
from app.crud.base import CRUDBase
from app.models.avatar import (
    Avatar,
    AvatarEffect,
    CornerBorder,
    StudentAvatarSettings,
    StudentLeaderboardBonusGrant,
    LeaderboardBonusSettings,
)


class CRUDKeyed(CRUDBase):
    def get_by_key(self, db: Session, *, key: str):
        return db.query(self.model).filter(self.model.key == key).first()


class CRUDStudentAvatarSettings(CRUDBase[StudentAvatarSettings, dict, dict]):
    def get_by_student(self, db: Session, *, student_id: int) -> Optional[StudentAvatarSettings]:
        return db.query(StudentAvatarSettings).filter(StudentAvatarSettings.student_id == student_id).first()


class CRUDLeaderboardBonusGrant(CRUDBase[StudentLeaderboardBonusGrant, dict, dict]):
    def get_by_student(self, db: Session, *, student_id: int) -> Optional[StudentLeaderboardBonusGrant]:
        return (
            db.query(StudentLeaderboardBonusGrant)
            .filter(StudentLeaderboardBonusGrant.student_id == student_id)
            .first()
        )


class CRUDLeaderboardBonusSettings(CRUDBase[LeaderboardBonusSettings, dict, dict]):
    def get_current(self, db: Session) -> Optional[LeaderboardBonusSettings]:
        return self.get(db, id=1)


avatar = CRUDBase(Avatar)
avatar_effect = CRUDKeyed(AvatarEffect)
corner_border = CRUDKeyed(CornerBorder)
student_avatar_settings = CRUDStudentAvatarSettings(StudentAvatarSettings)
leaderboard_bonus_grant = CRUDLeaderboardBonusGrant(StudentLeaderboardBonusGrant)
leaderboard_bonus_settings = CRUDLeaderboardBonusSettings(LeaderboardBonusSettings)
