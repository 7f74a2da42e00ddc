"""Payout statistics schemas"""
from typing import List

from pydantic import BaseModel, Field


class PayoutTotals(BaseModel):
    total_requests: int = Field(..., alias="totalRequests")
    approved_count: int = Field(..., alias="approvedCount")
    total_payout: float = Field(..., alias="totalPayout")

    class Config:
        populate_by_name = True


class PlayerPayout(BaseModel):
    char_id: int = Field(..., alias="charId")
    char_name: str = Field(..., alias="charName")
    request_count: int = Field(..., alias="requestCount")
    total_amount: float = Field(..., alias="totalAmount")

    class Config:
        populate_by_name = True


class PayoutStatsResponse(BaseModel):
    totals: PayoutTotals
    by_player: List[PlayerPayout] = Field(..., alias="byPlayer")

    class Config:
        populate_by_name = True
