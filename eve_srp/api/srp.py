"""Player-facing SRP endpoints"""
from typing import List

from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from eve_srp.api.deps import PlayerContext, require_owner, require_player
from eve_srp.database import get_db
from eve_srp.errors import DuplicateClaim
from eve_srp.middleware.monitoring import record_submission
from eve_srp.middleware.rate_limit import get_rate_limit, limiter
from eve_srp.schemas.srp_request import SrpRequestResponse, SrpSubmit, SrpSubmitResponse, to_response
from eve_srp.schemas.stats import PayoutTotals
from eve_srp.services import srp_requests, stats

router = APIRouter(prefix="/srp", tags=["srp"])


@router.post("", response_model=SrpSubmitResponse)
@limiter.limit(get_rate_limit("srp_submit"))
def submit_srp(
    request: Request,
    data: SrpSubmit,
    db: Session = Depends(get_db),
    player: PlayerContext = Depends(require_player),
):
    """
    Submit a reimbursement request for one loss.

    The owner is the character in the session token. Each killmail can be
    claimed once across all characters; a second claim returns 400.
    """
    try:
        created = srp_requests.submit_request(
            db,
            owner={"char_id": player.char_id, "char_name": player.char_name},
            killmail_id=data.loss_mail.killmail_id,
            ship_type_id=data.loss_mail.ship_type_id,
            comment=data.comment,
        )
    except DuplicateClaim:
        record_submission("duplicate")
        raise

    record_submission("created")
    return SrpSubmitResponse(id=created.id)


@router.get("/my/{char_id}", response_model=List[SrpRequestResponse])
def list_my_requests(
    char_id: int,
    db: Session = Depends(get_db),
    player: PlayerContext = Depends(require_owner),
):
    """List the caller's own requests, newest first."""
    return [to_response(r) for r in srp_requests.list_for_owner(db, player.char_id)]


@router.get("/stats/{char_id}", response_model=PayoutTotals)
def my_payout_stats(
    char_id: int,
    db: Session = Depends(get_db),
    player: PlayerContext = Depends(require_owner),
):
    """Request count, approved count and total payout for the caller."""
    return stats.player_payout_stats(db, player.char_id)
