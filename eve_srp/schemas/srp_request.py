"""SRP request schemas"""
from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, Field


class LossMail(BaseModel):
    """The loss being claimed. Clients send the whole loss record; only these keys are read."""

    killmail_id: int = Field(..., gt=0, description="External loss identifier")
    ship_type_id: int = Field(..., gt=0, description="Type id of the lost hull")


class SrpSubmit(BaseModel):
    """Schema for submitting a request.

    Owner identity always comes from the session token; ``charId``/``charName``
    keys sent by older clients are dropped here.
    """

    loss_mail: LossMail = Field(..., alias="lossMail")
    comment: Optional[str] = Field(None, max_length=500)


class SrpSubmitResponse(BaseModel):
    success: bool = True
    id: int


class SrpRequestResponse(BaseModel):
    """Schema for a stored request"""

    id: int
    char_id: int
    char_name: str
    killmail_id: int
    ship_type_id: int
    zkill_url: str
    player_comment: Optional[str] = None
    status: str                          # pending | approved | rejected
    payout_amount: float
    admin_comment: Optional[str] = None
    reviewed_by: Optional[str] = None    # admin username
    reviewed_at: Optional[datetime] = None
    created_at: datetime

    class Config:
        from_attributes = True


class StatusCounts(BaseModel):
    pending: int = 0
    approved: int = 0
    rejected: int = 0


class SrpRequestList(BaseModel):
    """Admin listing: one page of requests plus counts over every status"""

    requests: List[SrpRequestResponse]
    stats: StatusCounts
    total: int


class ReviewDecision(BaseModel):
    """Schema for approve/reject"""

    id: int = Field(..., gt=0)
    action: Literal["approve", "reject"]
    admin_comment: Optional[str] = Field(None, alias="adminComment", max_length=1000)
    payout_amount: float = Field(0, alias="payoutAmount", allow_inf_nan=False)

    class Config:
        extra = "forbid"


class RequestEdit(BaseModel):
    """Schema for correcting a request after review"""

    status: Literal["pending", "approved", "rejected"]
    payout_amount: float = Field(0, alias="payoutAmount", allow_inf_nan=False)
    admin_comment: Optional[str] = Field(None, alias="adminComment", max_length=1000)

    class Config:
        extra = "forbid"


class SuccessResponse(BaseModel):
    success: bool = True


def to_response(request) -> SrpRequestResponse:
    """Convert ORM model to response schema (payout as a JSON number)"""
    return SrpRequestResponse(
        id=request.id,
        char_id=request.char_id,
        char_name=request.char_name,
        killmail_id=request.killmail_id,
        ship_type_id=request.ship_type_id,
        zkill_url=request.zkill_url,
        player_comment=request.player_comment,
        status=request.status,
        payout_amount=float(request.payout_amount or 0),
        admin_comment=request.admin_comment,
        reviewed_by=request.reviewed_by,
        reviewed_at=request.reviewed_at,
        created_at=request.created_at,
    )
