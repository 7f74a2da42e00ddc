"""Admin account schemas"""
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class AdminUserCreate(BaseModel):
    username: str = Field(..., description="3-32 characters: letters, digits, underscore")
    password: str = Field(..., description="At least 8 characters with upper, lower, digit and special")
    role: Optional[str] = Field(None, description="Ignored; accounts created here are always 'admin'")

    class Config:
        extra = "forbid"


class AdminUserResponse(BaseModel):
    id: int
    username: str
    role: str
    created_at: Optional[datetime] = None   # None for the environment superadmin

    class Config:
        from_attributes = True


class AdminCreatedResponse(BaseModel):
    success: bool = True
    id: int


class PasswordChange(BaseModel):
    new_password: str = Field(..., alias="newPassword")

    class Config:
        extra = "forbid"
