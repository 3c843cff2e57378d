import logging
from datetime import datetime
from typing import Dict, List, Tuple

from sqlalchemy.orm import Session

from app.core.constants import BoardKeyEnum, PERFORMANCE_STAT_BOARD_PREFIX
from app.crud.performance_stat import performance_stat as crud_performance_stat
from app.crud.performance_stat import student_stat_record as crud_stat_record
from app.crud.student import (
    activity_event as crud_activity_event,
    ledger_entry as crud_ledger_entry,
    mvp_award as crud_mvp_award,
    student as crud_student,
)
from app.models.leaderboard import PerformanceStat
from app.schemas.leaderboard import BoardAward, BoardDefinition, MetricSample
from app.services.ranking import rank_board
from app.utils.calendar import civil_day_start, ensure_aware, week_start

logger = logging.getLogger(__name__)

# Weekly, total, lifetime and MVP boards rank every registered student, zero included.
BOARD_DEFINITIONS: Dict[BoardKeyEnum, BoardDefinition] = {
    BoardKeyEnum.TOTAL: BoardDefinition(board_key=BoardKeyEnum.TOTAL.value),
    BoardKeyEnum.WEEKLY: BoardDefinition(board_key=BoardKeyEnum.WEEKLY.value),
    BoardKeyEnum.LIFETIME: BoardDefinition(board_key=BoardKeyEnum.LIFETIME.value),
    BoardKeyEnum.ACTIVITY_TODAY: BoardDefinition(board_key=BoardKeyEnum.ACTIVITY_TODAY.value, exclude_non_positive=True),
    BoardKeyEnum.MVP: BoardDefinition(board_key=BoardKeyEnum.MVP.value),
}


def performance_stat_board(stat: PerformanceStat) -> BoardDefinition:
    return BoardDefinition(
        board_key=f"{PERFORMANCE_STAT_BOARD_PREFIX}{stat.key.strip()}",
        higher_is_better=stat.higher_is_better is not False,
        exclude_non_positive=True,
    )


class LeaderboardBoardService:

    def compute_live_awards(self, db: Session, now: datetime) -> List[BoardAward]:
        """Rank every configured board from current activity data."""
        totals = crud_student.get_point_totals(db)
        weekly = crud_ledger_entry.get_totals_since(db, since=week_start(now))
        mvp_counts = crud_mvp_award.get_counts(db)

        samples: Dict[BoardKeyEnum, List[MetricSample]] = {
            BoardKeyEnum.TOTAL: [MetricSample(subject_id=sid, value=total) for sid, total, _ in totals],
            BoardKeyEnum.WEEKLY: [MetricSample(subject_id=sid, value=weekly.get(sid, 0)) for sid, _, _ in totals],
            BoardKeyEnum.LIFETIME: [MetricSample(subject_id=sid, value=lifetime) for sid, _, lifetime in totals],
            BoardKeyEnum.ACTIVITY_TODAY: self._activity_today_samples(db, now),
            BoardKeyEnum.MVP: [MetricSample(subject_id=sid, value=mvp_counts.get(sid, 0)) for sid, _, _ in totals],
        }

        awards: List[BoardAward] = []
        for board_key, definition in BOARD_DEFINITIONS.items():
            awards.extend(rank_board(definition, samples[board_key]))

        seen_board_keys = {definition.board_key for definition in BOARD_DEFINITIONS.values()}
        for stat in crud_performance_stat.get_enabled(db):
            if not str(stat.key or "").strip():
                logger.warning(f"Skipping performance stat {stat.id} ({stat.name}): missing key")
                continue
            board_key = performance_stat_board(stat).board_key
            if board_key in seen_board_keys:
                logger.warning(f"Skipping performance stat {stat.id} ({stat.name}): duplicate board key {board_key}")
                continue
            seen_board_keys.add(board_key)
            awards.extend(self._rank_performance_stat(db, stat))

        logger.debug(f"Computed {len(awards)} live leaderboard awards")
        return awards

    def _activity_today_samples(self, db: Session, now: datetime) -> List[MetricSample]:
        counts = crud_activity_event.get_counts_since(db, since=civil_day_start(now))
        return [
            MetricSample(subject_id=sid, value=events, tie_break_time=latest)
            for sid, events, latest in counts
        ]

    def _rank_performance_stat(self, db: Session, stat: PerformanceStat) -> List[BoardAward]:
        definition = performance_stat_board(stat)
        best: Dict[int, Tuple[float, datetime]] = {}
        for record in crud_stat_record.get_by_stat(db, stat_id=stat.id):
            value = float(record.value)
            recorded_at = ensure_aware(record.recorded_at)
            existing = best.get(record.student_id)
            if existing is None:
                best[record.student_id] = (value, recorded_at)
                continue
            best_value, best_at = existing
            is_better = value > best_value if definition.higher_is_better else value < best_value
            is_newer_tie = value == best_value and recorded_at > best_at
            if is_better or is_newer_tie:
                best[record.student_id] = (value, recorded_at)

        samples = [
            MetricSample(subject_id=sid, value=value, tie_break_time=recorded_at)
            for sid, (value, recorded_at) in best.items()
        ]
        return rank_board(definition, samples)


leaderboard_board_service = LeaderboardBoardService()
