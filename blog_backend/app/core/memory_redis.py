from __future__ import annotations

import asyncio
from typing import Any, Dict, Optional


class AsyncMemoryRedis:
    """In-process stand-in for the subset of redis.asyncio the app uses."""

    def __init__(self) -> None:
        self._kv: Dict[str, Any] = {}
        self._hash: Dict[str, Dict[str, str]] = {}
        self._zsets: Dict[str, Dict[str, float]] = {}
        self._lock = asyncio.Lock()

    async def ping(self) -> bool:
        return True

    async def aclose(self) -> None:
        return None

    async def get(self, key: str) -> Optional[str]:
        async with self._lock:
            return None if key not in self._kv else str(self._kv[key])

    async def set(self, key: str, value: Any, nx: bool | None = None) -> Optional[bool]:
        async with self._lock:
            if nx and key in self._kv:
                return None
            self._kv[key] = value
            return True

    async def incr(self, key: str) -> int:
        async with self._lock:
            cur = int(self._kv.get(key, 0)) + 1
            self._kv[key] = cur
            return cur

    async def hset(self, key: str, mapping: Dict[str, Any]) -> int:
        async with self._lock:
            h = self._hash.setdefault(key, {})
            added = sum(1 for f in mapping if f not in h)
            h.update({f: str(v) for f, v in mapping.items()})
            return added

    async def hgetall(self, key: str) -> Dict[str, str]:
        async with self._lock:
            return dict(self._hash.get(key, {}))

    async def zadd(self, key: str, mapping: Dict[str, float]) -> int:
        async with self._lock:
            z = self._zsets.setdefault(key, {})
            added = sum(1 for m in mapping if m not in z)
            z.update({m: float(s) for m, s in mapping.items()})
            return added

    async def zrem(self, key: str, *members: str) -> int:
        async with self._lock:
            z = self._zsets.get(key, {})
            removed = 0
            for m in members:
                if z.pop(m, None) is not None:
                    removed += 1
            if not z:
                self._zsets.pop(key, None)
            return removed

    async def zcard(self, key: str) -> int:
        async with self._lock:
            return len(self._zsets.get(key, {}))

    async def zrange(self, key: str, start: int, end: int) -> list[str]:
        async with self._lock:
            ordered = [m for m, _ in sorted(self._zsets.get(key, {}).items(), key=lambda kv: (kv[1], kv[0]))]
            n = len(ordered)
            if start < 0:
                start = max(n + start, 0)
            if end < 0:
                end = n + end
            if start >= n or end < start:
                return []
            return ordered[start : end + 1]

    async def delete(self, *keys: str) -> int:
        async with self._lock:
            removed = 0
            for k in keys:
                found = False
                for store in (self._kv, self._hash, self._zsets):
                    if k in store:
                        store.pop(k)
                        found = True
                removed += int(found)
            return removed
