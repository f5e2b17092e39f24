from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, Query

from ...core.errors import Conflict, Forbidden, NotFound, Unauthorized, ValidationError
from ...core.ids import is_object_id
from ...core.permissions import can_mutate
from ...core.security import require_user_id
from ...repositories.base import DuplicateKey
from ...repositories.posts import PostRepository
from ...schemas.posts import MessageResponse, PostCreate, PostPublic, PostUpdate
from ..deps import get_post_repository


router = APIRouter()


def _to_public(data: dict[str, str]) -> PostPublic:
    return PostPublic(
        id=data["id"],
        title=data.get("title", ""),
        content=data.get("content", ""),
        author=data.get("author", ""),
        category=data.get("category") or None,
        slug=data.get("slug", ""),
        createdAt=data.get("created_at", ""),
        updatedAt=data.get("updated_at") or data.get("created_at", ""),
    )


def _check_post_id(post_id: str) -> str:
    if not is_object_id(post_id):
        raise ValidationError("Invalid post id")
    return post_id


async def _load_post(post_id: str, posts: PostRepository) -> dict[str, str]:
    data = await posts.get(_check_post_id(post_id))
    if not data:
        raise NotFound("Post not found")
    return data


async def _load_owned_post(post_id: str, user_id: str, posts: PostRepository) -> dict[str, str]:
    if not user_id:
        raise Unauthorized()
    data = await _load_post(post_id, posts)
    if not can_mutate(user_id, data):
        raise Forbidden("Only the author can modify this post")
    return data


@router.post("", response_model=PostPublic, status_code=201)
async def create_post(
    payload: PostCreate,
    user_id: str = Depends(require_user_id),
    posts: PostRepository = Depends(get_post_repository),
) -> PostPublic:
    if not user_id:
        raise Unauthorized()
    try:
        data = await posts.create(
            author=user_id,
            title=payload.title,
            content=payload.content,
            category=payload.category,
            slug=payload.slug,
        )
    except DuplicateKey as exc:
        raise Conflict(str(exc))
    return _to_public(data)


@router.get("", response_model=List[PostPublic])
async def list_posts(
    category: str | None = None,
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    posts: PostRepository = Depends(get_post_repository),
) -> List[PostPublic]:
    if category is not None and not is_object_id(category):
        raise ValidationError("Invalid category id")
    items = await posts.find(category=category, offset=(page - 1) * limit, limit=limit)
    return [_to_public(d) for d in items]


@router.get("/{post_id}", response_model=PostPublic)
async def get_post(post_id: str, posts: PostRepository = Depends(get_post_repository)) -> PostPublic:
    return _to_public(await _load_post(post_id, posts))


@router.put("/{post_id}", response_model=PostPublic)
async def update_post(
    post_id: str,
    payload: PostUpdate,
    user_id: str = Depends(require_user_id),
    posts: PostRepository = Depends(get_post_repository),
) -> PostPublic:
    data = await _load_owned_post(post_id, user_id, posts)
    try:
        updated = await posts.update(data, payload.model_dump(exclude_unset=True))
    except DuplicateKey as exc:
        raise Conflict(str(exc))
    return _to_public(updated)


@router.delete("/{post_id}", response_model=MessageResponse)
async def delete_post(
    post_id: str,
    user_id: str = Depends(require_user_id),
    posts: PostRepository = Depends(get_post_repository),
) -> MessageResponse:
    data = await _load_owned_post(post_id, user_id, posts)
    await posts.delete(data)
    return MessageResponse(message="Post deleted")
