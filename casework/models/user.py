from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import EmailStr, Field

from .base import CamelModel


class UserRole(str, Enum):
    EMPLOYEE = "employee"
    HR_MANAGER = "hr_manager"
    COUNSELOR = "counselor"


class UserCreate(CamelModel):
    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)
    email: EmailStr
    phone: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    role: UserRole = UserRole.EMPLOYEE
    department: Optional[str] = None
    is_active: bool = True


class UserPublic(CamelModel):
    """User record as exposed over the API (no credential material)."""

    id: str
    username: str
    email: str
    phone: str
    name: str
    role: UserRole
    department: Optional[str] = None
    is_active: bool = True
    last_login: Optional[datetime] = None
    created_at: datetime


class User(UserPublic):
    password_hash: str

    def public(self) -> UserPublic:
        return UserPublic.model_validate(self.model_dump(exclude={"password_hash"}))
