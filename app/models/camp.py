from sqlalchemy import Column, String, Integer, Date, DateTime, ForeignKey, Boolean, JSON, UniqueConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from app.core.database import Base


class CampRoster(Base):
    __tablename__ = "camp_rosters"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    enabled = Column(Boolean(), default=True, nullable=False)
    start_date = Column(Date, nullable=True)
    end_date = Column(Date, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    members = relationship("CampRosterMember", back_populates="roster", cascade="all, delete-orphan")


class CampRosterMember(Base):
    __tablename__ = "camp_roster_members"

    id = Column(Integer, primary_key=True, index=True)
    roster_id = Column(Integer, ForeignKey("camp_rosters.id"), nullable=False, index=True)
    student_id = Column(Integer, ForeignKey("students.id"), nullable=False, index=True)
    enabled = Column(Boolean(), default=True, nullable=False)
    display_role = Column(String, nullable=True)
    secondary_role = Column(String, nullable=True)
    # Weekday codes (m,t,w,r,f,sa,su) the secondary role is active on; empty means every day
    secondary_role_days = Column(JSON, nullable=False, default=list)

    roster = relationship("CampRoster", back_populates="members")


class CampRoleSetting(Base):
    __tablename__ = "camp_role_settings"

    id = Column(Integer, primary_key=True, index=True)
    role = Column(String, unique=True, nullable=False)
    daily_points = Column(Integer, default=0, nullable=False)


class CampRoleDailyClaim(Base):
    __tablename__ = "camp_role_daily_claims"
    __table_args__ = (
        UniqueConstraint("student_id", "claim_date", name="uq_camp_role_claim_student_date"),
    )

    id = Column(Integer, primary_key=True, index=True)
    student_id = Column(Integer, ForeignKey("students.id"), nullable=False, index=True)
    claim_date = Column(Date, nullable=False)
    points = Column(Integer, default=0, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
