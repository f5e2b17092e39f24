from __future__ import annotations

import datetime as dt
import logging
from typing import Any

import jwt
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from passlib.hash import bcrypt

from .config import get_jwt_algorithm, get_jwt_secret, get_token_ttl_seconds
from .errors import Unauthorized


logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


def hash_password(password: str) -> str:
    return bcrypt.hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    if not password_hash:
        return False
    try:
        return bcrypt.verify(password, password_hash)
    except ValueError:
        # stored value is not a bcrypt hash
        return False


def create_access_token(user_id: str, expires_in: int | None = None) -> str:
    now = dt.datetime.now(dt.timezone.utc)
    ttl = expires_in if expires_in is not None else get_token_ttl_seconds()
    payload: dict[str, Any] = {
        "sub": str(user_id),
        "iat": now,
        "exp": now + dt.timedelta(seconds=ttl),
    }
    return jwt.encode(payload, get_jwt_secret(), algorithm=get_jwt_algorithm())


def decode_access_token(token: str) -> str:
    """Return the user id carried by a token or raise Unauthorized."""
    try:
        payload = jwt.decode(
            token,
            get_jwt_secret(),
            algorithms=[get_jwt_algorithm()],
            options={"require": ["exp", "sub"]},
        )
    except jwt.ExpiredSignatureError:
        logger.warning("Rejected expired token")
        raise Unauthorized("Token expired")
    except jwt.InvalidTokenError:
        logger.warning("Rejected invalid token")
        raise Unauthorized("Invalid token")
    user_id = str(payload.get("sub") or "").strip()
    if not user_id:
        raise Unauthorized("Invalid token")
    return user_id


async def require_token(creds: HTTPAuthorizationCredentials | None = Depends(bearer_scheme)) -> str:
    if creds is None or creds.scheme.lower() != "bearer":
        raise Unauthorized()
    token = creds.credentials.strip()
    if not token:
        raise Unauthorized()
    return token


async def require_user_id(token: str = Depends(require_token)) -> str:
    return decode_access_token(token)
