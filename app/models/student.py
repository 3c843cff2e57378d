from sqlalchemy import Column, String, Integer, DateTime, ForeignKey, Boolean, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from app.core.database import Base


class Student(Base):
    __tablename__ = "students"

    id = Column(Integer, primary_key=True, index=True)
    full_name = Column(String, index=True)
    points_total = Column(Integer, default=0, nullable=False)
    lifetime_points = Column(Integer, default=0, nullable=False)
    is_active = Column(Boolean(), default=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    ledger_entries = relationship("LedgerEntry", back_populates="student", cascade="all, delete-orphan")
    activity_events = relationship("ActivityEvent", back_populates="student", cascade="all, delete-orphan")
    mvp_awards = relationship("MvpAward", back_populates="student", cascade="all, delete-orphan")
    avatar_settings = relationship("StudentAvatarSettings", back_populates="student", uselist=False, cascade="all, delete-orphan")


class LedgerEntry(Base):
    __tablename__ = "ledger_entries"

    id = Column(Integer, primary_key=True, index=True)
    student_id = Column(Integer, ForeignKey("students.id"), nullable=False, index=True)
    points = Column(Integer, nullable=False)
    category = Column(String, nullable=True)
    note = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, index=True)

    student = relationship("Student", back_populates="ledger_entries")


class ActivityEvent(Base):
    """Practice/remediation sessions and logged skill or contest attempts."""
    __tablename__ = "activity_events"

    id = Column(Integer, primary_key=True, index=True)
    student_id = Column(Integer, ForeignKey("students.id"), nullable=False, index=True)
    kind = Column(String, nullable=False, index=True)
    succeeded = Column(Boolean(), default=True, nullable=False)
    occurred_at = Column(DateTime(timezone=True), nullable=False, index=True)

    student = relationship("Student", back_populates="activity_events")


class MvpAward(Base):
    __tablename__ = "mvp_awards"

    id = Column(Integer, primary_key=True, index=True)
    student_id = Column(Integer, ForeignKey("students.id"), nullable=False, index=True)
    awarded_at = Column(DateTime(timezone=True), server_default=func.now())

    student = relationship("Student", back_populates="mvp_awards")
