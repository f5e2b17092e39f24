from __future__ import annotations

import logging
from typing import Any, Optional

from ..core.ids import derive_slug, new_object_id, normalize_object_id
from .base import DuplicateKey, now_iso


logger = logging.getLogger(__name__)

POST_SEQ_KEY = "posts:seq"
POST_INDEX_KEY = "posts:index"


def post_key(post_id: str) -> str:
    return f"post:{post_id}"


def slug_key(slug: str) -> str:
    return f"post:byslug:{slug}"


def category_key(category: str) -> str:
    return f"posts:category:{category}"


class PostRepository:
    """Posts stored as hashes, ordered by a creation sequence.

    ``posts:index`` and ``posts:category:<id>`` are sorted sets scored by
    that sequence, so pagination is a plain ZRANGE over creation order.
    """

    def __init__(self, client: Any) -> None:
        self.client = client

    async def create(
        self,
        *,
        author: str,
        title: str,
        content: str,
        category: str | None = None,
        slug: str | None = None,
    ) -> dict[str, str]:
        seq = await self.client.incr(POST_SEQ_KEY)
        post_id = new_object_id(seq)
        slug = slug or derive_slug(title)
        if not await self.client.set(slug_key(slug), post_id, nx=True):
            raise DuplicateKey("slug", slug)
        category = normalize_object_id(category) if category else ""
        created_at = now_iso()
        doc = {
            "id": post_id,
            "title": title,
            "content": content,
            "author": str(author),
            "category": category,
            "slug": slug,
            "seq": str(seq),
            "created_at": created_at,
            "updated_at": created_at,
        }
        try:
            await self.client.hset(post_key(post_id), mapping=doc)
            await self.client.zadd(POST_INDEX_KEY, {post_id: seq})
            if category:
                await self.client.zadd(category_key(category), {post_id: seq})
        except Exception:
            await self.client.delete(slug_key(slug), post_key(post_id))
            await self.client.zrem(POST_INDEX_KEY, post_id)
            if category:
                await self.client.zrem(category_key(category), post_id)
            raise
        logger.info("Created post %s by %s", post_id, author)
        return doc

    async def get(self, post_id: str) -> Optional[dict[str, str]]:
        data = await self.client.hgetall(post_key(normalize_object_id(post_id)))
        return data or None

    async def find(self, *, category: str | None = None, offset: int = 0, limit: int = 10) -> list[dict[str, str]]:
        if limit <= 0 or offset >= await self.count(category=category):
            return []
        key = category_key(normalize_object_id(category)) if category else POST_INDEX_KEY
        ids = await self.client.zrange(key, offset, offset + limit - 1)
        items: list[dict[str, str]] = []
        for post_id in ids:
            data = await self.client.hgetall(post_key(post_id))
            if data:
                items.append(data)
        return items

    async def count(self, *, category: str | None = None) -> int:
        key = category_key(normalize_object_id(category)) if category else POST_INDEX_KEY
        return int(await self.client.zcard(key))

    async def update(self, post: dict[str, str], changes: dict[str, Any]) -> dict[str, str]:
        post_id = post["id"]
        mapping: dict[str, str] = {}
        if changes.get("title") is not None:
            mapping["title"] = changes["title"]
        if changes.get("content") is not None:
            mapping["content"] = changes["content"]

        new_slug = changes.get("slug")
        if new_slug is not None and new_slug != post.get("slug"):
            if not await self.client.set(slug_key(new_slug), post_id, nx=True):
                raise DuplicateKey("slug", new_slug)
            if post.get("slug"):
                await self.client.delete(slug_key(post["slug"]))
            mapping["slug"] = new_slug

        if "category" in changes and changes["category"] is not None:
            new_category = normalize_object_id(changes["category"])
            old_category = post.get("category", "")
            if new_category != old_category:
                if old_category:
                    await self.client.zrem(category_key(old_category), post_id)
                await self.client.zadd(category_key(new_category), {post_id: float(post.get("seq") or 0)})
                mapping["category"] = new_category

        if mapping:
            mapping["updated_at"] = now_iso()
            await self.client.hset(post_key(post_id), mapping=mapping)
            logger.info("Updated post %s fields %s", post_id, sorted(mapping))
        return {**post, **mapping}

    async def delete(self, post: dict[str, str]) -> None:
        post_id = post["id"]
        await self.client.delete(post_key(post_id))
        await self.client.zrem(POST_INDEX_KEY, post_id)
        if post.get("category"):
            await self.client.zrem(category_key(post["category"]), post_id)
        slug = post.get("slug")
        if slug and await self.client.get(slug_key(slug)) == post_id:
            await self.client.delete(slug_key(slug))
        logger.info("Deleted post %s", post_id)
