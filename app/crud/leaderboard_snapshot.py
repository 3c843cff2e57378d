import logging
from datetime import date
from typing import Iterable, List, Set, Tuple
from sqlalchemy import func
from sqlalchemy.orm import Session
from app.crud.base import CRUDBase
from app.models.leaderboard import LeaderboardSnapshot
from app.schemas.leaderboard import BoardAward

logger = logging.getLogger(__name__)

CONFLICT_COLUMNS = ["snapshot_date", "board_key", "student_id"]


def _dialect_insert(dialect_name: str):
    if dialect_name == "postgresql":
        from sqlalchemy.dialects.postgresql import insert
        return insert
    if dialect_name == "sqlite":
        from sqlalchemy.dialects.sqlite import insert
        return insert
    return None


class CRUDLeaderboardSnapshot(CRUDBase[LeaderboardSnapshot, dict, dict]):
    def get_by_date(self, db: Session, *, snapshot_date: date) -> List[LeaderboardSnapshot]:
        return (
            db.query(LeaderboardSnapshot)
            .filter(LeaderboardSnapshot.snapshot_date == snapshot_date)
            .order_by(LeaderboardSnapshot.board_key.asc(), LeaderboardSnapshot.rank.asc(), LeaderboardSnapshot.student_id.asc())
            .all()
        )

    def upsert_awards(self, db: Session, *, snapshot_date: date, awards: Iterable[BoardAward]) -> int:
        """Insert or overwrite award rows keyed by (snapshot_date, board_key, student_id)."""
        rows = [
            {
                "snapshot_date": snapshot_date,
                "board_key": award.board_key,
                "student_id": award.subject_id,
                "rank": award.rank,
                "board_points": award.board_points,
            }
            for award in awards
        ]
        if not rows:
            return 0

        insert = _dialect_insert(db.get_bind().dialect.name)
        if insert is None:
            self._merge_rows(db, rows)
        else:
            stmt = insert(LeaderboardSnapshot).values(rows)
            stmt = stmt.on_conflict_do_update(
                index_elements=CONFLICT_COLUMNS,
                set_={
                    "rank": stmt.excluded.rank,
                    "board_points": stmt.excluded.board_points,
                    "updated_at": func.now(),
                },
            )
            db.execute(stmt)
        db.flush()
        # Core upserts bypass the identity map
        db.expire_all()
        return len(rows)

    def _merge_rows(self, db: Session, rows: List[dict]) -> None:
        for row in rows:
            existing = (
                db.query(LeaderboardSnapshot)
                .filter(LeaderboardSnapshot.snapshot_date == row["snapshot_date"])
                .filter(LeaderboardSnapshot.board_key == row["board_key"])
                .filter(LeaderboardSnapshot.student_id == row["student_id"])
                .first()
            )
            if existing:
                existing.rank = row["rank"]
                existing.board_points = row["board_points"]
            else:
                db.add(LeaderboardSnapshot(**row))

    def delete_except(self, db: Session, *, snapshot_date: date, keep: Set[Tuple[str, int]]) -> int:
        stale = [
            row for row in self.get_by_date(db, snapshot_date=snapshot_date)
            if (row.board_key, row.student_id) not in keep
        ]
        for row in stale:
            db.delete(row)
        if stale:
            db.flush()
            logger.info(f"Removed {len(stale)} stale leaderboard snapshot rows for {snapshot_date}")
        return len(stale)


leaderboard_snapshot = CRUDLeaderboardSnapshot(LeaderboardSnapshot)
