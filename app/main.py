from contextlib import asynccontextmanager
from typing import AsyncIterator
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import redis.asyncio as redis

from app.core.config import get_settings
from app.core.db import create_db_and_tables, dispose_engine
from app.core.errors import register_exception_handlers
from app.core.logger_config import setup_logging
from app.api.bookings import router as bookings_router
from app.api.health import router as health_router

_SETTINGS = get_settings()
setup_logging(_SETTINGS.LOG_LEVEL)

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    await create_db_and_tables()
    app.state.redis = redis.from_url(_SETTINGS.REDIS_URL, decode_responses=True)
    yield
    await app.state.redis.aclose()
    await dispose_engine()

app = FastAPI(title="Homestay Booking API", lifespan=lifespan)
app.add_middleware(
    CORSMiddleware,
    allow_origins=[_SETTINGS.FRONTEND_ORIGIN] if _SETTINGS.FRONTEND_ORIGIN else [],
    allow_methods=["GET", "POST"],
    allow_headers=["Content-Type", "x-admin-key"],
)
register_exception_handlers(app)
app.include_router(bookings_router)
app.include_router(health_router)

@app.get("/")
async def root(): return {"message": "Service is up. See /docs for API details."}

if __name__ == "__main__":
    import uvicorn
    uvicorn.run("app.main:app", host="0.0.0.0", port=_SETTINGS.PORT)
