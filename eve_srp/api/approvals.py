"""Admin review endpoints: listing, approve/reject, edit and payout statistics"""
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from eve_srp.api.deps import AdminContext, require_admin
from eve_srp.database import get_db
from eve_srp.errors import NotFound
from eve_srp.middleware.monitoring import record_review
from eve_srp.schemas.srp_request import (
    RequestEdit,
    ReviewDecision,
    SrpRequestList,
    SrpRequestResponse,
    StatusCounts,
    SuccessResponse,
    to_response,
)
from eve_srp.schemas.stats import PayoutStatsResponse
from eve_srp.services import srp_requests, stats

router = APIRouter(prefix="/admin", tags=["review"])


@router.get("/requests", response_model=SrpRequestList)
def list_requests(
    status_filter: Optional[str] = Query(None, alias="status", description="all, pending, approved or rejected"),
    limit: int = Query(100, ge=1, le=500),
    offset: int = Query(0, ge=0),
    db: Session = Depends(get_db),
    _: AdminContext = Depends(require_admin),
):
    """
    List SRP requests, newest first.

    ``stats`` always counts every status regardless of the filter;
    ``total`` is the number of rows matching the filter.
    """
    requests, counts, total = srp_requests.list_for_admin(db, status_filter, limit, offset)
    return SrpRequestList(
        requests=[to_response(r) for r in requests],
        stats=StatusCounts(**counts),
        total=total,
    )


@router.get("/request/{request_id}", response_model=SrpRequestResponse)
def get_request(
    request_id: int,
    db: Session = Depends(get_db),
    _: AdminContext = Depends(require_admin),
):
    """Get a single request by ID."""
    request = srp_requests.get_request(db, request_id)
    if not request:
        raise NotFound("Request not found")
    return to_response(request)


@router.post("/review", response_model=SuccessResponse)
def review_request(
    decision: ReviewDecision,
    db: Session = Depends(get_db),
    ctx: AdminContext = Depends(require_admin),
):
    """
    Approve or reject a request.

    Approve stores ``payoutAmount`` (negative values become 0); reject always
    stores 0. The reviewer is the admin in the session token.
    """
    found = srp_requests.review_request(
        db,
        decision.id,
        decision.action,
        decision.admin_comment,
        decision.payout_amount,
        ctx.username,
    )
    if not found:
        raise NotFound("Request not found")

    record_review(decision.action)
    return SuccessResponse()


@router.put("/request/{request_id}", response_model=SuccessResponse)
def edit_request(
    request_id: int,
    edit: RequestEdit,
    db: Session = Depends(get_db),
    ctx: AdminContext = Depends(require_admin),
):
    """
    Correct a request after the fact.

    Any status may be assigned. Moving back to ``pending`` clears the reviewer
    and review time; only ``approved`` keeps a payout.
    """
    found = srp_requests.edit_request(
        db,
        request_id,
        edit.status,
        edit.payout_amount,
        edit.admin_comment,
        ctx.username,
    )
    if not found:
        raise NotFound("Request not found")

    record_review(f"edit_{edit.status}")
    return SuccessResponse()


@router.get("/stats", response_model=StatusCounts)
def request_stats(
    db: Session = Depends(get_db),
    _: AdminContext = Depends(require_admin),
):
    """Request counts by status."""
    return StatusCounts(**stats.status_counts(db))


@router.get("/payout-stats", response_model=PayoutStatsResponse)
def payout_stats(
    limit: int = Query(10, ge=1, le=100),
    db: Session = Depends(get_db),
    _: AdminContext = Depends(require_admin),
):
    """Overall payout totals and the characters with the largest approved payouts."""
    return {
        "totals": stats.payout_totals(db),
        "byPlayer": stats.top_players_by_payout(db, limit),
    }
