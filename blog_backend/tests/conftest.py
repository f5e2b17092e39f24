from __future__ import annotations

import os
import secrets
from typing import Any, Iterator

import pytest
from fastapi.testclient import TestClient

os.environ.setdefault("JWT_SECRET", "testsecret")

from app.core.memory_redis import AsyncMemoryRedis  # noqa: E402
from app.core.security import create_access_token  # noqa: E402
from app.main import create_app  # noqa: E402


class RangeCheckedRedis(AsyncMemoryRedis):
    """Rejects range indexes outside a signed 64-bit integer, as Redis does."""

    async def zrange(self, key: str, start: int, end: int) -> list[str]:
        if max(abs(start), abs(end)) > 2**63 - 1:
            raise ValueError("value is not an integer or out of range")
        return await super().zrange(key, start, end)


def new_category() -> str:
    return secrets.token_hex(12)


def auth(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


def register(client: TestClient, username: str, email: str, password: str = "password123") -> dict[str, Any]:
    res = client.post("/api/auth/register", json={"username": username, "email": email, "password": password})
    assert res.status_code == 201, res.text
    return res.json()


@pytest.fixture
def store() -> AsyncMemoryRedis:
    return AsyncMemoryRedis()


@pytest.fixture
def client(store: AsyncMemoryRedis) -> Iterator[TestClient]:
    with TestClient(create_app(store)) as c:
        yield c


@pytest.fixture
def user(client: TestClient) -> dict[str, Any]:
    return register(client, "testuser", "test@example.com")


@pytest.fixture
def token(user: dict[str, Any]) -> str:
    return create_access_token(user["_id"])


@pytest.fixture
def other_token(client: TestClient) -> str:
    other = register(client, "anotheruser", "another@example.com")
    return create_access_token(other["_id"])


@pytest.fixture
def post(client: TestClient, token: str) -> dict[str, Any]:
    res = client.post(
        "/api/posts",
        headers=auth(token),
        json={
            "title": "Test Post",
            "content": "This is a test post content",
            "category": new_category(),
            "slug": f"test-post-{secrets.token_hex(4)}",
        },
    )
    assert res.status_code == 201, res.text
    return res.json()
