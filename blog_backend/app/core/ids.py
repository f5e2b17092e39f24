from __future__ import annotations

import re
import secrets
import time


OBJECT_ID_PATTERN = r"^[0-9a-fA-F]{24}$"
_OBJECT_ID_RE = re.compile(OBJECT_ID_PATTERN)


def new_object_id(seq: int, timestamp: float | None = None) -> str:
    """Build a 24-hex id: 4 bytes of seconds, 5 random bytes, 3-byte counter."""
    seconds = int(timestamp if timestamp is not None else time.time()) & 0xFFFFFFFF
    return f"{seconds:08x}{secrets.token_hex(5)}{seq & 0xFFFFFF:06x}"


def is_object_id(value: object) -> bool:
    return isinstance(value, str) and bool(_OBJECT_ID_RE.match(value))


def normalize_object_id(value: str) -> str:
    return value.lower()


def slugify(text: str) -> str:
    text = text.lower().strip()
    text = re.sub(r"[^\w\s-]", "", text)
    text = re.sub(r"[\s_]+", "-", text)
    return re.sub(r"-{2,}", "-", text).strip("-")


def derive_slug(title: str) -> str:
    base = slugify(title)[:200] or "post"
    return f"{base}-{secrets.token_hex(3)}"
