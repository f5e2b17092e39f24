from __future__ import annotations

import datetime as dt


class DuplicateKey(Exception):
    """A unique field (slug, username, email) is already taken."""

    def __init__(self, field: str, value: str) -> None:
        super().__init__(f"{field} '{value}' is already taken")
        self.field = field
        self.value = value


def now_iso() -> str:
    return dt.datetime.now(dt.timezone.utc).isoformat()
