import redis.asyncio as redis
from loguru import logger

class RateLimiter:
    """Fixed-window request counter keyed by client identity."""

    def __init__(self, client: redis.Redis, max_requests: int = 100, window_seconds: int = 15 * 60):
        self.client = client
        self.max_requests = max_requests
        self.window = window_seconds

    async def hit(self, identity: str) -> bool:
        """Counts one request. Returns False once the window's budget is spent."""
        key = f"ratelimit:{identity}"
        try:
            # INCR and EXPIRE NX commit together, so a counter never outlives its window
            async with self.client.pipeline(transaction=True) as pipe:
                count, _ = await pipe.incr(key).expire(key, self.window, nx=True).execute()
        except redis.RedisError as e:
            logger.warning("Rate limiter unavailable, allowing request: {}", e)
            return True
        return count <= self.max_requests
