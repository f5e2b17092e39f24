from __future__ import annotations

import logging
from typing import Any, Optional

from ..core.ids import new_object_id
from .base import DuplicateKey, now_iso


logger = logging.getLogger(__name__)


def user_key(user_id: str) -> str:
    return f"user:{user_id}"


class UserRepository:
    def __init__(self, client: Any) -> None:
        self.client = client

    async def create(self, *, username: str, email: str, password_hash: str) -> dict[str, str]:
        email = email.lower()
        seq = await self.client.incr("users:seq")
        user_id = new_object_id(seq)
        if not await self.client.set(f"user:byname:{username}", user_id, nx=True):
            raise DuplicateKey("username", username)
        if not await self.client.set(f"user:byemail:{email}", user_id, nx=True):
            await self.client.delete(f"user:byname:{username}")
            raise DuplicateKey("email", email)
        doc = {
            "id": user_id,
            "username": username,
            "email": email,
            "password_hash": password_hash,
            "created_at": now_iso(),
        }
        await self.client.hset(user_key(user_id), mapping=doc)
        logger.info("Registered user %s (%s)", user_id, username)
        return doc

    async def get(self, user_id: str) -> Optional[dict[str, str]]:
        data = await self.client.hgetall(user_key(user_id))
        return data or None

    async def _get_by_lookup(self, lookup_key: str) -> Optional[dict[str, str]]:
        user_id = await self.client.get(lookup_key)
        if not user_id:
            return None
        return await self.get(user_id)

    async def get_by_username(self, username: str) -> Optional[dict[str, str]]:
        return await self._get_by_lookup(f"user:byname:{username}")

    async def get_by_email(self, email: str) -> Optional[dict[str, str]]:
        return await self._get_by_lookup(f"user:byemail:{email.lower()}")
