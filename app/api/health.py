import time

from fastapi import APIRouter

router = APIRouter(tags=["health"])

@router.get("/health")
async def health() -> dict:
    """Liveness check for keep-alive pings."""
    return {"ok": True, "ts": int(time.time() * 1000)}
