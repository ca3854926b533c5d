import datetime as dt
from typing import Optional

from sqlalchemy import Date, DateTime, Integer, String, UniqueConstraint, func
from sqlalchemy.orm import Mapped, mapped_column

from app.core.db import Base

UNIQUE_HOMESTAY_DATE = "uq_bookings_homestay_date"


class Booking(Base):
    __tablename__ = "bookings"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    homestay_id: Mapped[str] = mapped_column(String(255), nullable=False)
    date: Mapped[dt.date] = mapped_column(Date, nullable=False)
    time_slot: Mapped[str] = mapped_column(String(100), nullable=False)
    guest_name: Mapped[str] = mapped_column(String(200), nullable=False)
    phone: Mapped[str] = mapped_column(String(20), nullable=False)
    email: Mapped[Optional[str]] = mapped_column(String(320), nullable=True)
    address: Mapped[Optional[str]] = mapped_column(String(1000), nullable=True)
    guests: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    special_requests: Mapped[Optional[str]] = mapped_column(String(1000), nullable=True)
    created_at: Mapped[dt.datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )

    __table_args__ = (
        UniqueConstraint("homestay_id", "date", name=UNIQUE_HOMESTAY_DATE),
    )

    def __repr__(self) -> str:
        return f"<Booking(id={self.id}, homestay={self.homestay_id}, date={self.date})>"
