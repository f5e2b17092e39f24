from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends

from ...core.errors import Conflict, Unauthorized
from ...core.security import create_access_token, hash_password, require_user_id, verify_password
from ...repositories.base import DuplicateKey
from ...repositories.users import UserRepository
from ...schemas.auth import LoginRequest, LoginResponse, RegisterRequest, UserPublic
from ..deps import get_user_repository


logger = logging.getLogger(__name__)

router = APIRouter()


def _to_public(user: dict[str, str]) -> UserPublic:
    return UserPublic(
        id=str(user["id"]),
        username=user.get("username", ""),
        email=user.get("email", ""),
        createdAt=user.get("created_at", ""),
    )


@router.post("/register", response_model=UserPublic, status_code=201)
async def register(payload: RegisterRequest, users: UserRepository = Depends(get_user_repository)) -> UserPublic:
    try:
        user = await users.create(
            username=payload.username,
            email=str(payload.email),
            password_hash=hash_password(payload.password),
        )
    except DuplicateKey as exc:
        raise Conflict(str(exc))
    return _to_public(user)


@router.post("/login", response_model=LoginResponse)
async def login(payload: LoginRequest, users: UserRepository = Depends(get_user_repository)) -> LoginResponse:
    user: Optional[dict[str, str]] = None
    if payload.email:
        user = await users.get_by_email(payload.email.strip())
    elif payload.username:
        user = await users.get_by_username(payload.username.strip())
    if not user or not verify_password(payload.password, user.get("password_hash", "")):
        logger.warning("Failed login for %s", payload.email or payload.username)
        raise Unauthorized("Invalid credentials")
    token = create_access_token(user["id"])
    return LoginResponse(token=token, user=_to_public(user))


@router.get("/me", response_model=UserPublic)
async def me(
    user_id: str = Depends(require_user_id),
    users: UserRepository = Depends(get_user_repository),
) -> UserPublic:
    user = await users.get(user_id)
    if not user:
        raise Unauthorized()
    return _to_public(user)
