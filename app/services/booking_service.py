from typing import List

from loguru import logger
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.errors import BookingConflictError, StorageError
from app.models.booking import UNIQUE_HOMESTAY_DATE, Booking
from app.schemas.booking import BookingRequest

_DUPLICATE_MARKERS = (UNIQUE_HOMESTAY_DATE, "unique constraint", "duplicate entry", "duplicate key")


def _is_duplicate_booking(exc: IntegrityError) -> bool:
    message = str(exc.orig).lower()
    return any(marker in message for marker in _DUPLICATE_MARKERS)


class BookingService:
    """Ledger of homestay bookings: at most one booking per (homestay_id, date)."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def _find_locked(self, homestay_id: str, date) -> bool:
        query = (
            select(Booking.id)
            .where(Booking.homestay_id == homestay_id, Booking.date == date)
            .with_for_update()
        )
        result = await self.session.execute(query)
        return result.first() is not None

    async def create_booking(self, req: BookingRequest) -> Booking:
        """Guarded insert: lock the pair, check, insert, commit.

        Raises BookingConflictError when the pair is taken, including when a
        concurrent insert wins the race and the unique constraint fires.
        Any other store failure rolls back and raises StorageError.
        """
        try:
            async with self.session.begin():
                if await self._find_locked(req.homestay_id, req.date):
                    raise BookingConflictError()

                booking = Booking(**req.model_dump())
                self.session.add(booking)
                await self.session.flush()
                await self.session.refresh(booking)
        except BookingConflictError:
            logger.info("Booking conflict for homestay={} date={}", req.homestay_id, req.date)
            raise
        except IntegrityError as e:
            if _is_duplicate_booking(e):
                logger.info(
                    "Booking conflict caught by unique constraint for homestay={} date={}",
                    req.homestay_id, req.date,
                )
                raise BookingConflictError() from e
            raise StorageError(f"Integrity error while saving booking: {e.orig}") from e
        except SQLAlchemyError as e:
            raise StorageError(f"Database error while saving booking: {e}") from e

        logger.info("Booking {} created for homestay={} date={}", booking.id, booking.homestay_id, booking.date)
        return booking

    async def list_bookings(self) -> List[Booking]:
        query = select(Booking).order_by(Booking.created_at.desc(), Booking.id.desc())
        try:
            result = await self.session.execute(query)
            return list(result.scalars().all())
        except SQLAlchemyError as e:
            await self.session.rollback()
            raise StorageError(f"Database error while listing bookings: {e}") from e
