import logging
import threading
from collections import defaultdict
from datetime import date, datetime, timezone
from typing import Dict, List, Optional

from sqlalchemy.orm import Session

from app.core.constants import LEGACY_BOARD_POINTS_TOP1
from app.crud.leaderboard_snapshot import leaderboard_snapshot as crud_snapshot
from app.schemas.leaderboard import BoardAward, LeaderboardSnapshotSchema, StudentBoardAward
from app.services.leaderboard_board import leaderboard_board_service

logger = logging.getLogger(__name__)


class SnapshotBundle:
    """Per-student view over one cycle date's frozen awards."""

    def __init__(self, snapshot_date: date, awards: List[BoardAward]):
        self.snapshot_date = snapshot_date
        self.awards = awards
        self.board_keys_by_student: Dict[int, List[str]] = defaultdict(list)
        self.points_by_student: Dict[int, int] = defaultdict(int)
        self.awards_by_student: Dict[int, List[StudentBoardAward]] = defaultdict(list)
        for award in awards:
            self.board_keys_by_student[award.subject_id].append(award.board_key)
            self.points_by_student[award.subject_id] += award.board_points
            self.awards_by_student[award.subject_id].append(
                StudentBoardAward(board_key=award.board_key, rank=award.rank, board_points=award.board_points)
            )

    def board_keys_for(self, student_id: int) -> List[str]:
        return list(self.board_keys_by_student.get(student_id, []))

    def points_for(self, student_id: int) -> int:
        return self.points_by_student.get(student_id, 0)

    def awards_for(self, student_id: int) -> List[StudentBoardAward]:
        return list(self.awards_by_student.get(student_id, []))

    def to_schema(self) -> LeaderboardSnapshotSchema:
        return LeaderboardSnapshotSchema(snapshot_date=self.snapshot_date, awards=self.awards)


class LeaderboardSnapshotService:

    def __init__(self):
        self._locks: Dict[date, threading.Lock] = {}
        self._locks_guard = threading.Lock()

    def _lock_for(self, cycle_date: date) -> threading.Lock:
        with self._locks_guard:
            return self._locks.setdefault(cycle_date, threading.Lock())

    def _release_lock(self, cycle_date: date) -> None:
        # Waiters keep their own reference; later callers find the committed rows first
        with self._locks_guard:
            self._locks.pop(cycle_date, None)

    def _read_frozen(self, db: Session, cycle_date: date) -> Optional[List[BoardAward]]:
        rows = crud_snapshot.get_by_date(db, snapshot_date=cycle_date)
        if not rows:
            return None
        if any(row.board_points == LEGACY_BOARD_POINTS_TOP1 for row in rows):
            logger.info(f"Leaderboard snapshot for {cycle_date} carries legacy points, recomputing")
            return None
        return [
            BoardAward(
                board_key=row.board_key,
                subject_id=row.student_id,
                rank=row.rank,
                board_points=row.board_points,
            )
            for row in rows
        ]

    def get_or_build(self, db: Session, cycle_date: date, now: Optional[datetime] = None) -> List[BoardAward]:
        """
        Return the frozen awards for a cycle date, computing and persisting them
        on first read or when the stored rows come from the retired points scheme.
        """
        awards = self._read_frozen(db, cycle_date)
        if awards is not None:
            return awards

        try:
            with self._lock_for(cycle_date):
                awards = self._read_frozen(db, cycle_date)
                if awards is not None:
                    return awards

                now = now or datetime.now(timezone.utc)
                fresh = leaderboard_board_service.compute_live_awards(db, now)
                crud_snapshot.upsert_awards(db, snapshot_date=cycle_date, awards=fresh)
                crud_snapshot.delete_except(
                    db,
                    snapshot_date=cycle_date,
                    keep={(award.board_key, award.subject_id) for award in fresh},
                )
                db.commit()
                logger.info(f"Leaderboard snapshot for {cycle_date} built with {len(fresh)} awards")
                # Serve the stored rows so first and later reads share one ordering
                return self._read_frozen(db, cycle_date) or []
        finally:
            self._release_lock(cycle_date)

    def get_bundle(self, db: Session, cycle_date: date, now: Optional[datetime] = None) -> SnapshotBundle:
        return SnapshotBundle(cycle_date, self.get_or_build(db, cycle_date, now))


leaderboard_snapshot_service = LeaderboardSnapshotService()
