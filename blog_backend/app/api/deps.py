from __future__ import annotations

from typing import Any

from fastapi import Depends, HTTPException, Request

from ..repositories.posts import PostRepository
from ..repositories.users import UserRepository


def get_store(request: Request) -> Any:
    store = getattr(request.app.state, "store", None)
    if store is None:
        raise HTTPException(status_code=503, detail="Store not initialized")
    return store


def get_post_repository(store: Any = Depends(get_store)) -> PostRepository:
    return PostRepository(store)


def get_user_repository(store: Any = Depends(get_store)) -> UserRepository:
    return UserRepository(store)
