from typing import Optional
from fastapi import Request
from redis import Redis, ConnectionPool
from app.core.config import settings

# Simple Redis-based rate limiter
_pool: Optional[ConnectionPool] = None
_client: Optional[Redis] = None


def get_client() -> Redis:
    global _pool, _client
    if _client is None:
        _pool = ConnectionPool.from_url(settings.REDIS_URL, decode_responses=True)
        _client = Redis(connection_pool=_pool)
    return _client


def allow(key: str, limit: int, window_seconds: int) -> bool:
    """Return True if action under key is allowed within window, else False.

    Uses INCR + EXPIRE (nx) for a fixed window per key.
    """
    r = get_client()
    with r.pipeline() as pipe:
        pipe.incr(key, 1)
        pipe.expire(key, window_seconds, nx=True)
        count, _ = pipe.execute()
    return int(count) <= limit


def client_ip(request: Request) -> str:
    """Best-effort caller IP, honouring the usual proxy headers."""
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        return forwarded.split(",")[0].strip()
    real_ip = request.headers.get("X-Real-IP")
    if real_ip:
        return real_ip.strip()
    return request.client.host if request.client else "unknown"


def allow_for_ip(action: str, ip: str, limit: int, window_seconds: int = 60) -> bool:
    if not settings.RATE_LIMIT_ENABLED:
        return True
    key = f"ratelimit:{action}:{ip}"
    return allow(key, limit, window_seconds)
