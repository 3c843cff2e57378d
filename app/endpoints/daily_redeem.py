from datetime import datetime, timezone

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.schemas.daily_redeem import BatchRedeemStatus, BatchRedeemStatusRequest, RedeemStatus
from app.schemas.leaderboard import LeaderboardSnapshotSchema
from app.schemas.response import APIResponse
from app.services.daily_redeem import daily_redeem_service
from app.services.leaderboard_snapshot import leaderboard_snapshot_service
from app.utils import deps
from app.utils.calendar import snapshot_cycle_date

router = APIRouter()

@router.get("/students/{student_id}/status", response_model=APIResponse[RedeemStatus])
def get_redeem_status(
    student_id: int,
    db: Session = Depends(deps.get_db),
):
    """Points a student could redeem right now, with the per-bucket breakdown."""
    data = daily_redeem_service.compute_status(db, student_id)
    return APIResponse(message="Redeem status fetched successfully", data=data)

@router.post("/status-batch", response_model=APIResponse[BatchRedeemStatus])
def get_redeem_statuses(
    payload: BatchRedeemStatusRequest,
    db: Session = Depends(deps.get_db),
):
    """Redeem status for several students against one leaderboard snapshot."""
    data = daily_redeem_service.compute_statuses(db, payload.student_ids)
    return APIResponse(message="Redeem statuses fetched successfully", data=data)

@router.get("/snapshot", response_model=APIResponse[LeaderboardSnapshotSchema])
def get_leaderboard_snapshot(
    db: Session = Depends(deps.get_db),
):
    """Frozen leaderboard awards for the current cycle date."""
    now = datetime.now(timezone.utc)
    bundle = leaderboard_snapshot_service.get_bundle(db, snapshot_cycle_date(now), now)
    return APIResponse(message="Leaderboard snapshot fetched successfully", data=bundle.to_schema())
