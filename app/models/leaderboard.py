from sqlalchemy import Column, String, Integer, Date, DateTime, ForeignKey, Boolean, Float, UniqueConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from app.core.database import Base


class LeaderboardSnapshot(Base):
    __tablename__ = "leaderboard_bonus_daily_snapshots"
    __table_args__ = (
        UniqueConstraint("snapshot_date", "board_key", "student_id", name="uq_leaderboard_snapshot_day_board_student"),
    )

    id = Column(Integer, primary_key=True, index=True)
    snapshot_date = Column(Date, nullable=False, index=True)
    board_key = Column(String, nullable=False)
    student_id = Column(Integer, ForeignKey("students.id"), nullable=False, index=True)
    rank = Column(Integer, nullable=False)
    board_points = Column(Integer, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())


class PerformanceStat(Base):
    __tablename__ = "performance_stats"

    id = Column(Integer, primary_key=True, index=True)
    key = Column(String, unique=True, nullable=True)
    name = Column(String, nullable=False)
    higher_is_better = Column(Boolean(), default=True, nullable=False)
    enabled = Column(Boolean(), default=True, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    records = relationship("StudentStatRecord", back_populates="stat", cascade="all, delete-orphan")


class StudentStatRecord(Base):
    __tablename__ = "student_stat_records"

    id = Column(Integer, primary_key=True, index=True)
    stat_id = Column(Integer, ForeignKey("performance_stats.id"), nullable=False, index=True)
    student_id = Column(Integer, ForeignKey("students.id"), nullable=False, index=True)
    value = Column(Float, nullable=False)
    recorded_at = Column(DateTime(timezone=True), nullable=False)

    stat = relationship("PerformanceStat", back_populates="records")
