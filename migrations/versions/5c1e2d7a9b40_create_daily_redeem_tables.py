"""create daily redeem tables

Revision ID: 5c1e2d7a9b40
Revises:
Create Date: 2026-10-19 09:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


revision: str = '5c1e2d7a9b40'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _modifier_columns():
    return [
        sa.Column('rule_keeper_multiplier', sa.Float(), nullable=True),
        sa.Column('rule_breaker_multiplier', sa.Float(), nullable=True),
        sa.Column('skill_pulse_multiplier', sa.Float(), nullable=True),
        sa.Column('spotlight_multiplier', sa.Float(), nullable=True),
        sa.Column('daily_free_points', sa.Integer(), nullable=True),
        sa.Column('challenge_completion_bonus_pct', sa.Float(), nullable=True),
        sa.Column('mvp_bonus_pct', sa.Float(), nullable=True),
    ]


def upgrade() -> None:
    op.create_table(
        'students',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('full_name', sa.String(), nullable=True),
        sa.Column('points_total', sa.Integer(), server_default='0', nullable=False),
        sa.Column('lifetime_points', sa.Integer(), server_default='0', nullable=False),
        sa.Column('is_active', sa.Boolean(), server_default=sa.true(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_students_id', 'students', ['id'], unique=False)
    op.create_index('ix_students_full_name', 'students', ['full_name'], unique=False)

    op.create_table(
        'ledger_entries',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('student_id', sa.Integer(), nullable=False),
        sa.Column('points', sa.Integer(), nullable=False),
        sa.Column('category', sa.String(), nullable=True),
        sa.Column('note', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['student_id'], ['students.id'], ),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_ledger_entries_student_id', 'ledger_entries', ['student_id'], unique=False)
    op.create_index('ix_ledger_entries_created_at', 'ledger_entries', ['created_at'], unique=False)

    op.create_table(
        'activity_events',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('student_id', sa.Integer(), nullable=False),
        sa.Column('kind', sa.String(), nullable=False),
        sa.Column('succeeded', sa.Boolean(), server_default=sa.true(), nullable=False),
        sa.Column('occurred_at', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['student_id'], ['students.id'], ),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_activity_events_student_id', 'activity_events', ['student_id'], unique=False)
    op.create_index('ix_activity_events_kind', 'activity_events', ['kind'], unique=False)
    op.create_index('ix_activity_events_occurred_at', 'activity_events', ['occurred_at'], unique=False)

    op.create_table(
        'mvp_awards',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('student_id', sa.Integer(), nullable=False),
        sa.Column('awarded_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=True),
        sa.ForeignKeyConstraint(['student_id'], ['students.id'], ),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_mvp_awards_student_id', 'mvp_awards', ['student_id'], unique=False)

    op.create_table(
        'leaderboard_bonus_daily_snapshots',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('snapshot_date', sa.Date(), nullable=False),
        sa.Column('board_key', sa.String(), nullable=False),
        sa.Column('student_id', sa.Integer(), nullable=False),
        sa.Column('rank', sa.Integer(), nullable=False),
        sa.Column('board_points', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(['student_id'], ['students.id'], ),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('snapshot_date', 'board_key', 'student_id', name='uq_leaderboard_snapshot_day_board_student')
    )
    op.create_index('ix_leaderboard_bonus_daily_snapshots_snapshot_date', 'leaderboard_bonus_daily_snapshots', ['snapshot_date'], unique=False)
    op.create_index('ix_leaderboard_bonus_daily_snapshots_student_id', 'leaderboard_bonus_daily_snapshots', ['student_id'], unique=False)

    op.create_table(
        'performance_stats',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('key', sa.String(), nullable=True),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('higher_is_better', sa.Boolean(), server_default=sa.true(), nullable=False),
        sa.Column('enabled', sa.Boolean(), server_default=sa.true(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('key')
    )

    op.create_table(
        'student_stat_records',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('stat_id', sa.Integer(), nullable=False),
        sa.Column('student_id', sa.Integer(), nullable=False),
        sa.Column('value', sa.Float(), nullable=False),
        sa.Column('recorded_at', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['stat_id'], ['performance_stats.id'], ),
        sa.ForeignKeyConstraint(['student_id'], ['students.id'], ),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_student_stat_records_stat_id', 'student_stat_records', ['stat_id'], unique=False)
    op.create_index('ix_student_stat_records_student_id', 'student_stat_records', ['student_id'], unique=False)

    op.create_table(
        'avatars',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('enabled', sa.Boolean(), server_default=sa.true(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=True),
        *_modifier_columns(),
        sa.PrimaryKeyConstraint('id')
    )

    for table_name in ('avatar_effects', 'corner_borders'):
        op.create_table(
            table_name,
            sa.Column('id', sa.Integer(), nullable=False),
            sa.Column('key', sa.String(), nullable=False),
            sa.Column('name', sa.String(), nullable=True),
            sa.Column('enabled', sa.Boolean(), server_default=sa.true(), nullable=False),
            *_modifier_columns(),
            sa.PrimaryKeyConstraint('id')
        )
        op.create_index(f'ix_{table_name}_key', table_name, ['key'], unique=True)

    op.create_table(
        'student_avatar_settings',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('student_id', sa.Integer(), nullable=False),
        sa.Column('avatar_id', sa.Integer(), nullable=True),
        sa.Column('particle_style', sa.String(), nullable=True),
        sa.Column('corner_border_key', sa.String(), nullable=True),
        sa.Column('avatar_set_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('avatar_daily_granted_at', sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(['student_id'], ['students.id'], ),
        sa.ForeignKeyConstraint(['avatar_id'], ['avatars.id'], ),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('student_id')
    )

    op.create_table(
        'student_leaderboard_bonus_grants',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('student_id', sa.Integer(), nullable=False),
        sa.Column('last_granted_at', sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(['student_id'], ['students.id'], ),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('student_id')
    )

    op.create_table(
        'leaderboard_bonus_settings',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('skill_tracker_points_per_rep', sa.Integer(), server_default='2', nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint('id')
    )

    op.create_table(
        'camp_rosters',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('enabled', sa.Boolean(), server_default=sa.true(), nullable=False),
        sa.Column('start_date', sa.Date(), nullable=True),
        sa.Column('end_date', sa.Date(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=True),
        sa.PrimaryKeyConstraint('id')
    )

    op.create_table(
        'camp_roster_members',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('roster_id', sa.Integer(), nullable=False),
        sa.Column('student_id', sa.Integer(), nullable=False),
        sa.Column('enabled', sa.Boolean(), server_default=sa.true(), nullable=False),
        sa.Column('display_role', sa.String(), nullable=True),
        sa.Column('secondary_role', sa.String(), nullable=True),
        sa.Column('secondary_role_days', sa.JSON(), nullable=False),
        sa.ForeignKeyConstraint(['roster_id'], ['camp_rosters.id'], ),
        sa.ForeignKeyConstraint(['student_id'], ['students.id'], ),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_camp_roster_members_roster_id', 'camp_roster_members', ['roster_id'], unique=False)
    op.create_index('ix_camp_roster_members_student_id', 'camp_roster_members', ['student_id'], unique=False)

    op.create_table(
        'camp_role_settings',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('role', sa.String(), nullable=False),
        sa.Column('daily_points', sa.Integer(), server_default='0', nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('role')
    )

    op.create_table(
        'camp_role_daily_claims',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('student_id', sa.Integer(), nullable=False),
        sa.Column('claim_date', sa.Date(), nullable=False),
        sa.Column('points', sa.Integer(), server_default='0', nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=True),
        sa.ForeignKeyConstraint(['student_id'], ['students.id'], ),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('student_id', 'claim_date', name='uq_camp_role_claim_student_date')
    )
    op.create_index('ix_camp_role_daily_claims_student_id', 'camp_role_daily_claims', ['student_id'], unique=False)

    op.create_table(
        'unlock_criteria_definitions',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('key', sa.String(), nullable=True),
        sa.Column('label', sa.String(), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('enabled', sa.Boolean(), server_default=sa.true(), nullable=False),
        sa.Column('start_date', sa.Date(), nullable=True),
        sa.Column('end_date', sa.Date(), nullable=True),
        sa.Column('daily_free_points', sa.Integer(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_unlock_criteria_definitions_key', 'unlock_criteria_definitions', ['key'], unique=True)

    op.create_table(
        'student_unlock_criteria',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('student_id', sa.Integer(), nullable=False),
        sa.Column('criteria_key', sa.String(), nullable=False),
        sa.Column('fulfilled', sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column('fulfilled_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('note', sa.Text(), nullable=True),
        sa.ForeignKeyConstraint(['student_id'], ['students.id'], ),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('student_id', 'criteria_key', name='uq_student_unlock_criteria')
    )
    op.create_index('ix_student_unlock_criteria_student_id', 'student_unlock_criteria', ['student_id'], unique=False)

    op.create_table(
        'unlock_criteria_daily_claims',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('student_id', sa.Integer(), nullable=False),
        sa.Column('claim_date', sa.Date(), nullable=False),
        sa.Column('criteria_key', sa.String(), nullable=False),
        sa.Column('points', sa.Integer(), server_default='0', nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=True),
        sa.ForeignKeyConstraint(['student_id'], ['students.id'], ),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('student_id', 'claim_date', 'criteria_key', name='uq_event_claim_student_date_key')
    )
    op.create_index('ix_unlock_criteria_daily_claims_student_id', 'unlock_criteria_daily_claims', ['student_id'], unique=False)


def downgrade() -> None:
    op.drop_table('unlock_criteria_daily_claims')
    op.drop_table('student_unlock_criteria')
    op.drop_table('unlock_criteria_definitions')
    op.drop_table('camp_role_daily_claims')
    op.drop_table('camp_role_settings')
    op.drop_table('camp_roster_members')
    op.drop_table('camp_rosters')
    op.drop_table('leaderboard_bonus_settings')
    op.drop_table('student_leaderboard_bonus_grants')
    op.drop_table('student_avatar_settings')
    op.drop_table('corner_borders')
    op.drop_table('avatar_effects')
    op.drop_table('avatars')
    op.drop_table('student_stat_records')
    op.drop_table('performance_stats')
    op.drop_table('leaderboard_bonus_daily_snapshots')
    op.drop_table('mvp_awards')
    op.drop_table('activity_events')
    op.drop_table('ledger_entries')
    op.drop_table('students')
