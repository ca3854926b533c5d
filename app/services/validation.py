from typing import Any

from pydantic import ValidationError
from pydantic_core import ErrorDetails

from app.core.errors import InvalidBookingError
from app.schemas.booking import BookingRequest


def _describe(error: ErrorDetails) -> str:
    field = ".".join(str(part) for part in error["loc"])
    if error["type"] == "missing":
        reason = "is required"
    elif error["type"] == "extra_forbidden":
        reason = "is not allowed"
    elif error["type"] == "value_error":
        reason = str(error.get("ctx", {}).get("error", error["msg"]))
    else:
        reason = error["msg"]
    return f"{field}: {reason}" if field else reason


def validate_booking(payload: Any) -> BookingRequest:
    """Turn an untyped request body into a BookingRequest.

    Pure and deterministic. Raises InvalidBookingError describing the first
    failing field; nothing is written on failure.
    """
    if not isinstance(payload, dict):
        raise InvalidBookingError("Request body must be a JSON object")
    try:
        return BookingRequest.model_validate(payload)
    except ValidationError as e:
        raise InvalidBookingError(_describe(e.errors()[0])) from e
