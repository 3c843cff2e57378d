from datetime import date

from app.crud.leaderboard_snapshot import leaderboard_snapshot as crud_snapshot
from app.crud.student import student as crud_student
from app.services.leaderboard_snapshot import leaderboard_snapshot_service
from tests.helpers.seed import add_snapshot_row, civil, create_student

CYCLE = date(2026, 10, 21)
NOW = civil(2026, 10, 21, 12, 0)


def _award_set(awards):
    return {(award.board_key, award.subject_id, award.rank, award.board_points) for award in awards}


def test_first_read_freezes_the_day(db_session):
    ada = create_student(db_session, "Ada", points_total=500)
    ben = create_student(db_session, "Ben", points_total=100)

    awards = leaderboard_snapshot_service.get_or_build(db_session, CYCLE, NOW)

    rows = crud_snapshot.get_by_date(db_session, snapshot_date=CYCLE)
    assert _award_set(awards) == {(r.board_key, r.student_id, r.rank, r.board_points) for r in rows}
    assert ("total", ada.id, 1, 50) in _award_set(awards)
    assert ("total", ben.id, 2, 15) in _award_set(awards)


def test_snapshot_is_stable_within_the_cycle(db_session):
    ada = create_student(db_session, "Ada", points_total=500)
    ben = create_student(db_session, "Ben", points_total=100)
    first = leaderboard_snapshot_service.get_or_build(db_session, CYCLE, NOW)

    crud_student.update(db_session, db_obj=ben, obj_in={"points_total": 9000})
    second = leaderboard_snapshot_service.get_or_build(db_session, CYCLE, civil(2026, 10, 21, 20, 0))

    assert _award_set(first) == _award_set(second)
    assert ("total", ada.id, 1, 50) in _award_set(second)


def test_new_cycle_date_gets_its_own_snapshot(db_session):
    create_student(db_session, "Ada", points_total=500)
    ben = create_student(db_session, "Ben", points_total=100)
    leaderboard_snapshot_service.get_or_build(db_session, CYCLE, NOW)

    crud_student.update(db_session, db_obj=ben, obj_in={"points_total": 9000})
    next_day = leaderboard_snapshot_service.get_or_build(db_session, date(2026, 10, 22), civil(2026, 10, 21, 21, 45))

    assert ("total", ben.id, 1, 50) in _award_set(next_day)
    assert len(crud_snapshot.get_by_date(db_session, snapshot_date=CYCLE)) > 0


def test_legacy_rows_are_recomputed_and_stale_rows_removed(db_session):
    ada = create_student(db_session, "Ada", points_total=500)
    ben = create_student(db_session, "Ben", points_total=100)
    add_snapshot_row(db_session, CYCLE, "total", ben, 1, 30)
    add_snapshot_row(db_session, CYCLE, "retired_board", ada, 1, 30)

    awards = leaderboard_snapshot_service.get_or_build(db_session, CYCLE, NOW)

    rows = crud_snapshot.get_by_date(db_session, snapshot_date=CYCLE)
    assert all(row.board_points != 30 for row in rows)
    assert "retired_board" not in {row.board_key for row in rows}
    assert ("total", ada.id, 1, 50) in _award_set(awards)
    assert ("total", ben.id, 2, 15) in _award_set(awards)
    assert _award_set(awards) == {(r.board_key, r.student_id, r.rank, r.board_points) for r in rows}


def test_current_rows_are_served_without_recompute(db_session):
    ada = create_student(db_session, "Ada", points_total=500)
    add_snapshot_row(db_session, CYCLE, "weekly", ada, 1, 50)

    bundle = leaderboard_snapshot_service.get_bundle(db_session, CYCLE, NOW)

    assert bundle.snapshot_date == CYCLE
    assert bundle.board_keys_for(ada.id) == ["weekly"]
    assert bundle.points_for(ada.id) == 50
    assert bundle.points_for(ada.id + 100) == 0
    assert bundle.to_schema().awards[0].subject_id == ada.id


def test_first_and_later_reads_return_the_same_list(db_session):
    create_student(db_session, "Ada", points_total=500)
    create_student(db_session, "Ben", points_total=100)

    first = leaderboard_snapshot_service.get_or_build(db_session, CYCLE, NOW)
    second = leaderboard_snapshot_service.get_or_build(db_session, CYCLE, NOW)

    assert first == second


def test_build_lock_is_released_after_the_build(db_session):
    create_student(db_session, "Ada", points_total=500)

    leaderboard_snapshot_service.get_or_build(db_session, CYCLE, NOW)

    assert CYCLE not in leaderboard_snapshot_service._locks
