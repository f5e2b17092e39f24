from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .api.deps import get_store
from .api.endpoints import auth, posts
from .core.config import DEFAULT_JWT_SECRET, get_cors_origins, get_jwt_secret, get_redis_url, use_memory_store
from .core.errors import register_exception_handlers
from .core.log import configure_logging
from .core.memory_redis import AsyncMemoryRedis


logger = logging.getLogger(__name__)


async def open_store() -> Any:
    if use_memory_store():
        logger.info("Using in-process memory store")
        return AsyncMemoryRedis()

    import redis.asyncio as redis
    from redis.exceptions import RedisError

    redis_url = get_redis_url()
    client = redis.from_url(redis_url, decode_responses=True)
    try:
        await client.ping()
    except RedisError as exc:
        logger.warning("Redis at %s not reachable yet: %s", redis_url, exc)
    return client


def create_app(store: Any | None = None) -> FastAPI:
    """Build the application.

    A ``store`` passed in is used as-is and left open on shutdown; otherwise
    the lifespan opens one from configuration and closes it afterwards.
    """
    configure_logging()
    if get_jwt_secret() == DEFAULT_JWT_SECRET:
        logger.warning("JWT_SECRET not set, using development secret")

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        owned = store is None
        app.state.store = await open_store() if owned else store
        try:
            yield
        finally:
            if owned:
                await app.state.store.aclose()
            app.state.store = None

    app = FastAPI(title="Blog Backend", version="0.1.0", lifespan=lifespan)
    app.state.store = store

    app.add_middleware(
        CORSMiddleware,
        allow_origins=get_cors_origins(),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_exception_handlers(app)

    @app.get("/healthz")
    async def healthz(client: Any = Depends(get_store)) -> dict[str, Any]:
        status: dict[str, Any] = {"ok": True}
        try:
            status["store"] = {"connected": bool(await client.ping())}
        except Exception as e:  # pragma: no cover - diagnostic only
            status["store"] = {"connected": False, "error": str(e)}
        return status

    app.include_router(auth.router, prefix="/api/auth", tags=["auth"])
    app.include_router(posts.router, prefix="/api/posts", tags=["posts"])
    return app


app = create_app()
