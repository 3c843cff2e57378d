from sqlalchemy import Column, String, Integer, Date, DateTime, ForeignKey, Boolean, Text, UniqueConstraint
from sqlalchemy.sql import func
from app.core.database import Base


class UnlockCriteriaDefinition(Base):
    """Limited-time event definition; the criteria key doubles as the event key."""
    __tablename__ = "unlock_criteria_definitions"

    id = Column(Integer, primary_key=True, index=True)
    key = Column(String, unique=True, nullable=True, index=True)
    label = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    enabled = Column(Boolean(), default=True, nullable=False)
    start_date = Column(Date, nullable=True)
    end_date = Column(Date, nullable=True)
    daily_free_points = Column(Integer, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())


class StudentUnlockCriteria(Base):
    __tablename__ = "student_unlock_criteria"
    __table_args__ = (
        UniqueConstraint("student_id", "criteria_key", name="uq_student_unlock_criteria"),
    )

    id = Column(Integer, primary_key=True, index=True)
    student_id = Column(Integer, ForeignKey("students.id"), nullable=False, index=True)
    criteria_key = Column(String, nullable=False)
    fulfilled = Column(Boolean(), default=False, nullable=False)
    fulfilled_at = Column(DateTime(timezone=True), nullable=True)
    note = Column(Text, nullable=True)


class UnlockCriteriaDailyClaim(Base):
    __tablename__ = "unlock_criteria_daily_claims"
    __table_args__ = (
        UniqueConstraint("student_id", "claim_date", "criteria_key", name="uq_event_claim_student_date_key"),
    )

    id = Column(Integer, primary_key=True, index=True)
    student_id = Column(Integer, ForeignKey("students.id"), nullable=False, index=True)
    claim_date = Column(Date, nullable=False)
    criteria_key = Column(String, nullable=False)
    points = Column(Integer, default=0, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
