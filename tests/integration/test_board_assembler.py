import logging

from app.core.constants import ActivityKindEnum
from app.services.leaderboard_board import leaderboard_board_service
from tests.helpers.seed import (
    add_activity,
    add_ledger_entry,
    add_mvp_award,
    add_stat_record,
    civil,
    create_performance_stat,
    create_student,
)

NOW = civil(2026, 10, 21, 17, 0)


def _board(awards, board_key):
    return sorted(
        ((award.subject_id, award.rank, award.board_points) for award in awards if award.board_key == board_key),
        key=lambda row: (row[1], row[0]),
    )


def _seed_students(db):
    ada = create_student(db, "Ada", points_total=500, lifetime_points=900)
    ben = create_student(db, "Ben", points_total=300, lifetime_points=1200)
    cy = create_student(db, "Cy", points_total=300, lifetime_points=100)
    return ada, ben, cy


def test_point_boards_rank_every_student(db_session):
    ada, ben, cy = _seed_students(db_session)

    awards = leaderboard_board_service.compute_live_awards(db_session, NOW)

    assert _board(awards, "total") == [(ada.id, 1, 50), (ben.id, 2, 15), (cy.id, 2, 15)]
    assert _board(awards, "lifetime") == [(ben.id, 1, 50), (ada.id, 2, 15), (cy.id, 3, 15)]


def test_weekly_board_counts_this_week_only_and_keeps_zero(db_session):
    ada, ben, cy = _seed_students(db_session)
    add_ledger_entry(db_session, ada, 40, civil(2026, 10, 20, 9))
    add_ledger_entry(db_session, ben, 10, civil(2026, 10, 19, 0, 30))
    add_ledger_entry(db_session, cy, 100, civil(2026, 10, 18, 23, 0))

    awards = leaderboard_board_service.compute_live_awards(db_session, NOW)

    assert _board(awards, "weekly") == [(ada.id, 1, 50), (ben.id, 2, 15), (cy.id, 3, 15)]


def test_activity_today_counts_sessions_and_successful_attempts(db_session):
    ada, ben, cy = _seed_students(db_session)
    add_activity(db_session, ada, ActivityKindEnum.PRACTICE_SESSION.value, civil(2026, 10, 21, 9))
    add_activity(db_session, ada, ActivityKindEnum.SKILL_ATTEMPT.value, civil(2026, 10, 21, 10))
    add_activity(db_session, ben, ActivityKindEnum.CONTEST_ATTEMPT.value, civil(2026, 10, 21, 11), succeeded=False)
    add_activity(db_session, ben, ActivityKindEnum.REMEDIATION_SESSION.value, civil(2026, 10, 20, 15))
    add_activity(db_session, cy, ActivityKindEnum.REMEDIATION_SESSION.value, civil(2026, 10, 21, 12))

    awards = leaderboard_board_service.compute_live_awards(db_session, NOW)

    assert _board(awards, "activity_today") == [(ada.id, 1, 50), (cy.id, 2, 15)]


def test_mvp_board_counts_awards(db_session):
    ada, ben, cy = _seed_students(db_session)
    add_mvp_award(db_session, cy, civil(2026, 10, 1, 12))
    add_mvp_award(db_session, cy, civil(2026, 10, 8, 12))
    add_mvp_award(db_session, ada, civil(2026, 10, 15, 12))

    awards = leaderboard_board_service.compute_live_awards(db_session, NOW)

    assert _board(awards, "mvp") == [(cy.id, 1, 50), (ada.id, 2, 15), (ben.id, 3, 15)]


def test_performance_stat_uses_best_value_and_recency(db_session):
    ada, ben, cy = _seed_students(db_session)
    sprint = create_performance_stat(db_session, "sprint", higher_is_better=False)
    add_stat_record(db_session, sprint, ada, 12.0, civil(2026, 10, 1, 10))
    add_stat_record(db_session, sprint, ada, 11.5, civil(2026, 10, 2, 10))
    add_stat_record(db_session, sprint, ben, 11.5, civil(2026, 10, 3, 10))
    add_stat_record(db_session, sprint, cy, 0, civil(2026, 10, 3, 11))

    awards = leaderboard_board_service.compute_live_awards(db_session, NOW)

    assert _board(awards, "performance_stat:sprint") == [(ada.id, 1, 50), (ben.id, 1, 50)]


def test_misconfigured_and_disabled_stats_are_skipped(db_session, caplog, monkeypatch):
    monkeypatch.setattr(logging.getLogger("app"), "propagate", True)
    ada, _, _ = _seed_students(db_session)
    unnamed = create_performance_stat(db_session, None, name="Unnamed")
    retired = create_performance_stat(db_session, "retired", enabled=False)
    add_stat_record(db_session, unnamed, ada, 5, civil(2026, 10, 2, 10))
    add_stat_record(db_session, retired, ada, 5, civil(2026, 10, 2, 10))

    with caplog.at_level("WARNING", logger="app.services.leaderboard_board"):
        awards = leaderboard_board_service.compute_live_awards(db_session, NOW)

    board_keys = {award.board_key for award in awards}
    assert board_keys == {"total", "weekly", "lifetime", "mvp"}
    assert "missing key" in caplog.text


def test_stats_sharing_a_board_key_are_ranked_once(db_session, caplog, monkeypatch):
    monkeypatch.setattr(logging.getLogger("app"), "propagate", True)
    ada, _, _ = _seed_students(db_session)
    sprint = create_performance_stat(db_session, "sprint")
    padded = create_performance_stat(db_session, "sprint ")
    add_stat_record(db_session, sprint, ada, 9, civil(2026, 10, 2, 10))
    add_stat_record(db_session, padded, ada, 12, civil(2026, 10, 3, 10))

    with caplog.at_level("WARNING", logger="app.services.leaderboard_board"):
        awards = leaderboard_board_service.compute_live_awards(db_session, NOW)

    assert _board(awards, "performance_stat:sprint") == [(ada.id, 1, 50)]
    keys = [(award.board_key, award.subject_id) for award in awards]
    assert len(keys) == len(set(keys))
    assert "duplicate board key" in caplog.text
