"""
Pydantic schemas for user accounts
"""
from datetime import date
from typing import Optional

from pydantic import BaseModel, Field


class RegisterRequest(BaseModel):
    nickname: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None
    photo: Optional[str] = None
    gender: Optional[str] = None
    birth_date: Optional[date] = None


class LoginRequest(BaseModel):
    identifier: Optional[str] = Field(None, description="Nickname or email")
    password: Optional[str] = None


class UpdateUserRequest(BaseModel):
    email: Optional[str] = None
    gender: Optional[str] = None
    birth_date: Optional[date] = None


class UserResponse(BaseModel):
    id: int
    nickname: str
    email: Optional[str] = None
    photo: Optional[str] = None
    gender: Optional[str] = None
    birth_date: Optional[date] = None
    is_admin: bool = False


class AuthResponse(BaseModel):
    token: str
    user: UserResponse
