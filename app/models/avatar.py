from sqlalchemy import Column, String, Integer, DateTime, ForeignKey, Boolean, Float
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from app.core.database import Base


class ModifierColumnsMixin:
    rule_keeper_multiplier = Column(Float, nullable=True)
    rule_breaker_multiplier = Column(Float, nullable=True)
    skill_pulse_multiplier = Column(Float, nullable=True)
    spotlight_multiplier = Column(Float, nullable=True)
    daily_free_points = Column(Integer, nullable=True)
    challenge_completion_bonus_pct = Column(Float, nullable=True)
    mvp_bonus_pct = Column(Float, nullable=True)


class Avatar(ModifierColumnsMixin, Base):
    __tablename__ = "avatars"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    enabled = Column(Boolean(), default=True, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())


class AvatarEffect(ModifierColumnsMixin, Base):
    __tablename__ = "avatar_effects"

    id = Column(Integer, primary_key=True, index=True)
    key = Column(String, unique=True, nullable=False, index=True)
    name = Column(String, nullable=True)
    enabled = Column(Boolean(), default=True, nullable=False)


class CornerBorder(ModifierColumnsMixin, Base):
    __tablename__ = "corner_borders"

    id = Column(Integer, primary_key=True, index=True)
    key = Column(String, unique=True, nullable=False, index=True)
    name = Column(String, nullable=True)
    enabled = Column(Boolean(), default=True, nullable=False)


class StudentAvatarSettings(Base):
    __tablename__ = "student_avatar_settings"

    id = Column(Integer, primary_key=True, index=True)
    student_id = Column(Integer, ForeignKey("students.id"), unique=True, nullable=False)
    avatar_id = Column(Integer, ForeignKey("avatars.id"), nullable=True)
    particle_style = Column(String, nullable=True)
    corner_border_key = Column(String, nullable=True)
    avatar_set_at = Column(DateTime(timezone=True), nullable=True)
    avatar_daily_granted_at = Column(DateTime(timezone=True), nullable=True)

    student = relationship("Student", back_populates="avatar_settings")
    avatar = relationship("Avatar")


class StudentLeaderboardBonusGrant(Base):
    __tablename__ = "student_leaderboard_bonus_grants"

    id = Column(Integer, primary_key=True, index=True)
    student_id = Column(Integer, ForeignKey("students.id"), unique=True, nullable=False)
    last_granted_at = Column(DateTime(timezone=True), nullable=True)


class LeaderboardBonusSettings(Base):
    __tablename__ = "leaderboard_bonus_settings"

    id = Column(Integer, primary_key=True)
    skill_tracker_points_per_rep = Column(Integer, default=2, nullable=False)
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())
