"""Phone/password authentication endpoints.

There is no server-side session: login verifies credentials and returns the
account, logout is an acknowledgement, and ``/auth/me`` is a fixed stub.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, status

from casework.api.dependencies import get_storage
from casework.core.exceptions import BadRequestError, UnauthorizedError
from casework.core.security import verify_password
from casework.models import CamelModel, UserCreate, UserPublic
from casework.storage.base import Storage
from casework.utils.audit import audit_logger, mask_phone

router = APIRouter(prefix="/auth", tags=["auth"])

CURRENT_USER_STUB: Dict[str, Any] = {
    "id": "default-user-id",
    "name": "Demo User",
    "role": "hr_manager",
    "phone": "+1234567890",
}


class LoginRequest(CamelModel):
    phone: Optional[str] = None
    password: Optional[str] = None


class AuthResponse(CamelModel):
    user: UserPublic
    message: str


class MessageResponse(CamelModel):
    message: str


@router.post("/login", response_model=AuthResponse)
async def login(payload: LoginRequest, storage: Storage = Depends(get_storage)) -> AuthResponse:
    if not payload.phone or not payload.password:
        raise BadRequestError("Phone number and password are required")

    user = await storage.get_user_by_phone(payload.phone)
    if user is None or not verify_password(payload.password, user.password_hash) or not user.is_active:
        audit_logger.record("auth.login_failed", mask_phone(payload.phone), {"known_user": user is not None})
        raise UnauthorizedError("Invalid phone number or password")

    updated = await storage.update_user(user.id, {"last_login": datetime.now(timezone.utc)})
    audit_logger.record("auth.login", user.id, {"role": user.role})
    return AuthResponse(user=(updated or user).public(), message="Login successful")


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def register(payload: UserCreate, storage: Storage = Depends(get_storage)) -> AuthResponse:
    if await storage.get_user_by_phone(payload.phone) is not None:
        raise BadRequestError("Phone number already registered")
    if await storage.get_user_by_email(payload.email) is not None:
        raise BadRequestError("Email already registered")

    user = await storage.create_user(payload)
    audit_logger.record("auth.register", user.id, {"role": user.role})
    return AuthResponse(user=user.public(), message="Registration successful")


@router.post("/logout", response_model=MessageResponse)
async def logout() -> MessageResponse:
    return MessageResponse(message="Logout successful")


@router.get("/me")
async def current_user() -> Dict[str, Any]:
    return {"user": dict(CURRENT_USER_STUB)}
