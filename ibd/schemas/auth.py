from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime


class LoginRequest(BaseModel):
    username: str = Field(..., min_length=1, description="Username")
    password: str = Field(..., min_length=1, description="Password")


class UserProfile(BaseModel):
    """User as returned by /auth/login and /auth/profile"""
    id: int
    username: str
    email: Optional[str] = None
    role: Optional[str] = None
    full_name: Optional[str] = Field(None, alias="fullName")
    last_login: Optional[datetime] = Field(None, alias="lastLogin")

    class Config:
        populate_by_name = True


class LoginResult(BaseModel):
    success: bool = True
    token: str
    user: Optional[UserProfile] = None
