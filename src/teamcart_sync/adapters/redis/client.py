"""Redis adapter – client construction."""
from __future__ import annotations

from typing import Any


def _require_redis() -> Any:
    try:
        import redis.asyncio as aioredis
        return aioredis
    except ImportError as exc:
        raise ImportError("Install 'redis>=5' to use the Redis adapters") from exc


def create_redis_client(url: str, **kwargs: Any) -> Any:
    """Return a lazily-connecting ``redis.asyncio.Redis`` for *url*."""
    aioredis = _require_redis()
    kwargs.setdefault("decode_responses", False)
    return aioredis.from_url(url, **kwargs)


__all__ = ["create_redis_client"]
