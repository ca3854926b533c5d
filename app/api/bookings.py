import secrets
from typing import Any, List, Optional

from fastapi import APIRouter, Body, Depends, Header, Request, status
from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import get_settings
from app.core.db import get_session
from app.core.errors import RateLimitExceededError, UnauthorizedError
from app.repositories.redis_repo import RateLimiter
from app.schemas.booking import BookingCreated, BookingRecord
from app.services.booking_service import BookingService
from app.services.validation import validate_booking

router = APIRouter(prefix="/api/bookings", tags=["bookings"])
_SETTINGS = get_settings()

# Dependency Providers
def provide_booking_service(session: AsyncSession = Depends(get_session)) -> BookingService:
    return BookingService(session=session)

def provide_rate_limiter(request: Request) -> Optional[RateLimiter]:
    if not _SETTINGS.RATE_LIMIT_ENABLED:
        return None
    return RateLimiter(
        client=request.app.state.redis,
        max_requests=_SETTINGS.RATE_LIMIT_MAX,
        window_seconds=_SETTINGS.RATE_LIMIT_WINDOW_SECONDS,
    )

async def enforce_rate_limit(request: Request, limiter: Optional[RateLimiter] = Depends(provide_rate_limiter)) -> None:
    if limiter is None:
        return
    identity = request.client.host if request.client else "unknown"
    if not await limiter.hit(identity):
        logger.warning("Rate limit exceeded for {}", identity)
        raise RateLimitExceededError()

def require_admin(x_admin_key: Optional[str] = Header(None)) -> None:
    expected = _SETTINGS.ADMIN_API_KEY
    # an unset admin key locks the listing instead of opening it
    if not expected or not x_admin_key or not secrets.compare_digest(x_admin_key.encode(), expected.encode()):
        logger.warning("Rejected admin request with missing or wrong x-admin-key")
        raise UnauthorizedError()

# API Endpoints
@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=BookingCreated,
    dependencies=[Depends(enforce_rate_limit)],
)
async def create_booking(
    payload: Any = Body(None), service: BookingService = Depends(provide_booking_service)
) -> BookingCreated:
    booking_req = validate_booking(payload)
    booking = await service.create_booking(booking_req)
    return BookingCreated(id=booking.id, createdAt=booking.created_at)

@router.get(
    "",
    response_model=List[BookingRecord],
    dependencies=[Depends(enforce_rate_limit), Depends(require_admin)],
)
async def list_bookings(service: BookingService = Depends(provide_booking_service)) -> List[BookingRecord]:
    bookings = await service.list_bookings()
    return [BookingRecord.model_validate(b) for b in bookings]
