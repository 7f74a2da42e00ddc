"""Login schemas"""
from pydantic import BaseModel, Field


class EveLoginRequest(BaseModel):
    code: str = Field(..., min_length=1, max_length=512, description="OAuth authorization code")

    class Config:
        extra = "forbid"


class EveLoginResponse(BaseModel):
    char_id: int = Field(..., alias="charId")
    char_name: str = Field(..., alias="charName")
    token: str

    class Config:
        populate_by_name = True


class AdminLoginRequest(BaseModel):
    username: str = Field(..., min_length=1, max_length=64)
    password: str = Field(..., min_length=1, max_length=128)

    class Config:
        extra = "forbid"


class AdminInfo(BaseModel):
    id: int
    username: str
    role: str


class AdminLoginResponse(BaseModel):
    token: str
    admin: AdminInfo
