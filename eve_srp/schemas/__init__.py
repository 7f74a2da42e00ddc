"""Pydantic schemas"""
from eve_srp.schemas.admin_user import AdminCreatedResponse, AdminUserCreate, AdminUserResponse, PasswordChange
from eve_srp.schemas.auth import AdminInfo, AdminLoginRequest, AdminLoginResponse, EveLoginRequest, EveLoginResponse
from eve_srp.schemas.srp_request import (
    LossMail,
    RequestEdit,
    ReviewDecision,
    SrpRequestList,
    SrpRequestResponse,
    SrpSubmit,
    SrpSubmitResponse,
    StatusCounts,
    SuccessResponse,
)
from eve_srp.schemas.stats import PayoutStatsResponse, PayoutTotals, PlayerPayout

__all__ = [
    "AdminCreatedResponse",
    "AdminInfo",
    "AdminLoginRequest",
    "AdminLoginResponse",
    "AdminUserCreate",
    "AdminUserResponse",
    "EveLoginRequest",
    "EveLoginResponse",
    "LossMail",
    "PasswordChange",
    "PayoutStatsResponse",
    "PayoutTotals",
    "PlayerPayout",
    "RequestEdit",
    "ReviewDecision",
    "SrpRequestList",
    "SrpRequestResponse",
    "SrpSubmit",
    "SrpSubmitResponse",
    "StatusCounts",
    "SuccessResponse",
]
