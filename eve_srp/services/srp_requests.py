"""SRP request lifecycle: submission, listing, review and edit.

Status rules:

* submission creates ``pending`` with payout 0
* ``approve`` / edit to ``approved`` set payout to ``max(0, amount)`` and stamp reviewer/time
* ``reject`` / edit to ``rejected`` zero the payout and stamp reviewer/time
* edit to ``pending`` zeroes the payout and clears reviewer/time
"""
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any, Dict, List, Optional, Tuple, Union

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from eve_srp.config import settings
from eve_srp.errors import DuplicateClaim, ValidationFailed
from eve_srp.models.srp_request import SRP_STATUSES, SrpRequest
from eve_srp.services.stats import status_counts
from eve_srp.utils.logger import logger

_CENT = Decimal("0.01")
_ZERO = Decimal("0")
# Largest value Numeric(20, 2) holds
MAX_PAYOUT = Decimal("99999999999999999.99")

_REVIEW_ACTIONS = {"approve": "approved", "reject": "rejected"}


def zkill_url(killmail_id: int) -> str:
    return f"{settings.ZKILLBOARD_BASE_URL}/kill/{killmail_id}/"


def normalize_payout(amount: Union[int, float, str, Decimal, None]) -> Decimal:
    """Clamp to non-negative and round half-up to whole cents.

    Raises:
        ValidationFailed: not a number, not finite, or beyond the payout column's range.
    """
    if amount is None:
        return _ZERO
    try:
        value = Decimal(str(amount))
        if not value.is_finite() or value > MAX_PAYOUT:
            raise ValidationFailed("Invalid payout amount")
        return max(_ZERO, value).quantize(_CENT, rounding=ROUND_HALF_UP)
    except InvalidOperation:
        raise ValidationFailed("Invalid payout amount")


def submit_request(
    db: Session,
    owner: Dict[str, Any],
    killmail_id: int,
    ship_type_id: int,
    comment: Optional[str],
) -> SrpRequest:
    """Create a pending request for the authenticated owner.

    ``owner`` is the verified player claims; nothing from the request body is used
    for identity. Duplicate killmails are rejected by the unique index, not by a
    prior lookup, so two racing submissions cannot both succeed.

    Raises:
        DuplicateClaim: the killmail already has a request (any owner).
    """
    request = SrpRequest(
        char_id=int(owner["char_id"]),
        char_name=owner["char_name"],
        killmail_id=killmail_id,
        ship_type_id=ship_type_id,
        zkill_url=zkill_url(killmail_id),
        player_comment=comment or None,
        status="pending",
        payout_amount=_ZERO,
    )
    db.add(request)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        logger.info(
            "Duplicate SRP claim rejected",
            extra={"char_id": owner["char_id"], "killmail_id": killmail_id, "action": "submit"},
        )
        raise DuplicateClaim()
    db.refresh(request)

    logger.info(
        f"SRP request submitted: {request.id}",
        extra={"srp_request_id": request.id, "char_id": request.char_id, "killmail_id": killmail_id},
    )
    return request


def list_for_owner(db: Session, char_id: int) -> List[SrpRequest]:
    """Newest-first requests of one character"""
    return (
        db.query(SrpRequest)
        .filter(SrpRequest.char_id == char_id)
        .order_by(SrpRequest.created_at.desc(), SrpRequest.id.desc())
        .all()
    )


def list_for_admin(
    db: Session,
    status_filter: Optional[str] = None,
    limit: int = 100,
    offset: int = 0,
) -> Tuple[List[SrpRequest], Dict[str, int], int]:
    """One newest-first page of requests, status counts over all rows, and the filtered total"""
    query = db.query(SrpRequest)

    if status_filter and status_filter != "all":
        if status_filter not in SRP_STATUSES:
            raise ValidationFailed(
                "Invalid status filter",
                details=["status must be one of: all, pending, approved, rejected"],
            )
        query = query.filter(SrpRequest.status == status_filter)

    total = query.count()
    requests = (
        query.order_by(SrpRequest.created_at.desc(), SrpRequest.id.desc())
        .offset(offset)
        .limit(limit)
        .all()
    )
    return requests, status_counts(db), total


def get_request(db: Session, request_id: int) -> Optional[SrpRequest]:
    return db.query(SrpRequest).filter(SrpRequest.id == request_id).first()


def _apply_status(
    request: SrpRequest,
    status: str,
    payout_amount: Any,
    admin_comment: Optional[str],
    actor: str,
) -> None:
    if status == "approved":
        request.payout_amount = normalize_payout(payout_amount)
    else:
        request.payout_amount = _ZERO

    if status == "pending":
        request.reviewed_by = None
        request.reviewed_at = None
    else:
        request.reviewed_by = actor
        request.reviewed_at = datetime.utcnow()

    request.status = status
    request.admin_comment = admin_comment


def review_request(
    db: Session,
    request_id: int,
    action: str,
    admin_comment: Optional[str],
    payout_amount: Any,
    reviewer: str,
) -> bool:
    """Approve or reject a request. Returns False if it does not exist.

    Reviewing a request that already left ``pending`` overwrites the earlier
    decision; this is logged so the overwrite is visible.
    """
    if action not in _REVIEW_ACTIONS:
        raise ValidationFailed("action must be 'approve' or 'reject'")

    request = get_request(db, request_id)
    if not request:
        return False

    if request.status != "pending":
        logger.warning(
            f"Re-review of SRP request {request_id} (was {request.status})",
            extra={"srp_request_id": request_id, "admin": reviewer, "action": action},
        )

    _apply_status(request, _REVIEW_ACTIONS[action], payout_amount, admin_comment, reviewer)
    db.commit()

    logger.info(
        f"SRP request {_REVIEW_ACTIONS[action]}: {request_id}",
        extra={"srp_request_id": request_id, "admin": reviewer, "action": action},
    )
    return True


def edit_request(
    db: Session,
    request_id: int,
    new_status: str,
    payout_amount: Any,
    admin_comment: Optional[str],
    editor: str,
) -> bool:
    """Reassign status after the fact. Returns False if the request does not exist."""
    if new_status not in SRP_STATUSES:
        raise ValidationFailed("status must be one of: pending, approved, rejected")

    request = get_request(db, request_id)
    if not request:
        return False

    previous = request.status
    _apply_status(request, new_status, payout_amount, admin_comment, editor)
    db.commit()

    logger.info(
        f"SRP request edited: {request_id} ({previous} -> {new_status})",
        extra={"srp_request_id": request_id, "admin": editor, "action": "edit"},
    )
    return True
