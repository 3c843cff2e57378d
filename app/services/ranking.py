from datetime import datetime, timezone
from typing import Iterable, List, Optional

from app.core.constants import BOARD_POINTS_PER_TOP10, BOARD_POINTS_TOP1, MAX_AWARD_RANK
from app.schemas.leaderboard import BoardAward, BoardDefinition, MetricSample
from app.utils.calendar import ensure_aware

_NO_TIMESTAMP = datetime.min.replace(tzinfo=timezone.utc)


def _tie_break_key(value: Optional[datetime]) -> datetime:
    return ensure_aware(value) if value is not None else _NO_TIMESTAMP


def board_points_for_rank(rank: int) -> int:
    return BOARD_POINTS_TOP1 if rank == 1 else BOARD_POINTS_PER_TOP10


def rank_board(definition: BoardDefinition, samples: Iterable[MetricSample]) -> List[BoardAward]:
    """
    Competition ranking (1,1,1,4) over one board, awarding ranks 1..10.

    Exact value ties are ordered most recent first. Ranking stops at the first
    rank past 10, so a tie group that starts inside the top ten is kept whole.
    """
    candidates = list(samples)
    if definition.exclude_non_positive:
        candidates = [s for s in candidates if s.value > 0]

    # Two stable passes: recency first, then the value order on top of it
    ordered = sorted(candidates, key=lambda s: _tie_break_key(s.tie_break_time), reverse=True)
    ordered.sort(key=lambda s: s.value, reverse=definition.higher_is_better)

    awards: List[BoardAward] = []
    prev_value: Optional[float] = None
    prev_rank = 0
    for index, sample in enumerate(ordered):
        if prev_value is not None and sample.value == prev_value:
            rank = prev_rank
        else:
            rank = index + 1
        prev_value = sample.value
        prev_rank = rank
        if rank > MAX_AWARD_RANK:
            break
        awards.append(
            BoardAward(
                board_key=definition.board_key,
                subject_id=sample.subject_id,
                rank=rank,
                board_points=board_points_for_rank(rank),
            )
        )
    return awards
