"""Read-only payout and status aggregates, recomputed on every call"""
from decimal import Decimal
from typing import Dict, List

from sqlalchemy import case, func
from sqlalchemy.orm import Session

from eve_srp.models.srp_request import SRP_STATUSES, SrpRequest


def status_counts(db: Session) -> Dict[str, int]:
    counts = {status: 0 for status in SRP_STATUSES}
    rows = db.query(SrpRequest.status, func.count(SrpRequest.id)).group_by(SrpRequest.status).all()
    for status, count in rows:
        if status in counts:
            counts[status] = count
    return counts


def _totals(db: Session, *criteria) -> Dict[str, object]:
    approved = case((SrpRequest.status == "approved", 1), else_=0)
    approved_payout = case((SrpRequest.status == "approved", SrpRequest.payout_amount), else_=0)

    total_requests, approved_count, total_payout = (
        db.query(
            func.count(SrpRequest.id),
            func.coalesce(func.sum(approved), 0),
            func.coalesce(func.sum(approved_payout), 0),
        )
        .filter(*criteria)
        .one()
    )
    return {
        "totalRequests": int(total_requests),
        "approvedCount": int(approved_count),
        "totalPayout": float(Decimal(str(total_payout))),
    }


def payout_totals(db: Session) -> Dict[str, object]:
    """Counts across every request; payout sums only approved rows"""
    return _totals(db)


def player_payout_stats(db: Session, char_id: int) -> Dict[str, object]:
    """Same shape as :func:`payout_totals`, scoped to one owner"""
    return _totals(db, SrpRequest.char_id == char_id)


def top_players_by_payout(db: Session, limit: int = 10) -> List[Dict[str, object]]:
    """Characters ranked by the sum of their approved payouts"""
    total_amount = func.sum(SrpRequest.payout_amount)
    rows = (
        db.query(
            SrpRequest.char_id,
            func.max(SrpRequest.char_name),
            func.count(SrpRequest.id),
            total_amount,
        )
        .filter(SrpRequest.status == "approved")
        .group_by(SrpRequest.char_id)
        .order_by(total_amount.desc(), SrpRequest.char_id.asc())
        .limit(limit)
        .all()
    )
    return [
        {
            "charId": char_id,
            "charName": char_name,
            "requestCount": int(count),
            "totalAmount": float(Decimal(str(amount or 0))),
        }
        for char_id, char_name, count, amount in rows
    ]
