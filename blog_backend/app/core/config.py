from __future__ import annotations

import os
from typing import Iterable


DEFAULT_JWT_SECRET = "dev-secret-change-me"
DEFAULT_TOKEN_TTL_SECONDS = 3600


def get_cors_origins() -> list[str]:
    origins_env = os.getenv("CORS_ALLOW_ORIGINS", "http://localhost:3000")
    parts: Iterable[str] = (o.strip() for o in origins_env.split(","))
    return [o for o in parts if o]


def get_redis_url() -> str:
    return os.getenv("REDIS_URL", "redis://localhost:6379/0")


def use_memory_store() -> bool:
    redis_url = get_redis_url()
    if os.getenv("USE_FAKE_REDIS", "0") == "1":
        return True
    return redis_url.startswith("memory://") or redis_url.startswith("redis+fake://")


def get_jwt_secret() -> str:
    return os.getenv("JWT_SECRET") or DEFAULT_JWT_SECRET


def get_jwt_algorithm() -> str:
    return os.getenv("JWT_ALGORITHM", "HS256")


def get_token_ttl_seconds() -> int:
    try:
        ttl = int(os.getenv("TOKEN_TTL_SECONDS", str(DEFAULT_TOKEN_TTL_SECONDS)))
    except ValueError:
        return DEFAULT_TOKEN_TTL_SECONDS
    return ttl if ttl > 0 else DEFAULT_TOKEN_TTL_SECONDS


def get_log_level() -> str:
    return os.getenv("LOG_LEVEL", "INFO").upper()
