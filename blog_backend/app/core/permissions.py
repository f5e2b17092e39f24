from __future__ import annotations

from typing import Any, Mapping


def can_mutate(user_id: str | None, post: Mapping[str, Any]) -> bool:
    """Only the author of a post may update or delete it."""
    if not user_id:
        return False
    author = post.get("author")
    return bool(author) and str(author) == str(user_id)
