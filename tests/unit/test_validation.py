"""
Unit tests for validate_booking
"""
import datetime as dt

import pytest

from app.core.errors import InvalidBookingError
from app.services.validation import validate_booking
from tests.util_constant import VALID_PAYLOAD


def _payload(**overrides):
    data = dict(VALID_PAYLOAD)
    data.update(overrides)
    return data


class TestValidateBooking:

    def test_minimal_payload_gets_defaults(self):
        req = validate_booking(dict(VALID_PAYLOAD))

        assert req.homestay_id == "H1"
        assert req.date == dt.date(2025, 6, 1)
        assert req.guests == 1
        assert req.email is None
        assert req.address is None
        assert req.special_requests is None

    def test_empty_optional_strings_become_none(self):
        req = validate_booking(_payload(email="", address="", special_requests=""))

        assert req.email is None
        assert req.address is None
        assert req.special_requests is None

    def test_null_optional_strings_become_none(self):
        req = validate_booking(_payload(email=None, address=None, special_requests=None))

        assert req.email is None
        assert req.address is None
        assert req.special_requests is None

    @pytest.mark.parametrize("guests", [1, 20])
    def test_guest_count_bounds_accepted(self, guests):
        assert validate_booking(_payload(guests=guests)).guests == guests

    @pytest.mark.parametrize("guests", [0, 21])
    def test_guest_count_out_of_range_rejected(self, guests):
        with pytest.raises(InvalidBookingError) as exc_info:
            validate_booking(_payload(guests=guests))

        assert exc_info.value.message.startswith("guests:")
        assert exc_info.value.status_code == 400

    def test_fractional_guest_count_rejected(self):
        with pytest.raises(InvalidBookingError):
            validate_booking(_payload(guests=2.5))

    @pytest.mark.parametrize("guests", [True, False])
    def test_boolean_guest_count_rejected(self, guests):
        with pytest.raises(InvalidBookingError) as exc_info:
            validate_booking(_payload(guests=guests))

        assert exc_info.value.message == "guests: must be an integer"

    def test_guest_name_length_bounds(self):
        with pytest.raises(InvalidBookingError) as exc_info:
            validate_booking(_payload(guest_name="J"))
        assert exc_info.value.message.startswith("guest_name:")

        assert validate_booking(_payload(guest_name="Jo")).guest_name == "Jo"
        assert validate_booking(_payload(guest_name="J" * 200)).guest_name == "J" * 200

        with pytest.raises(InvalidBookingError):
            validate_booking(_payload(guest_name="J" * 201))

    def test_phone_length_bounds(self):
        with pytest.raises(InvalidBookingError):
            validate_booking(_payload(phone="555123"))
        with pytest.raises(InvalidBookingError):
            validate_booking(_payload(phone="5" * 21))

        assert validate_booking(_payload(phone="5551234")).phone == "5551234"
        assert validate_booking(_payload(phone="5" * 20)).phone == "5" * 20

    def test_long_free_text_rejected(self):
        with pytest.raises(InvalidBookingError) as exc_info:
            validate_booking(_payload(address="x" * 1001))
        assert exc_info.value.message.startswith("address:")

        with pytest.raises(InvalidBookingError) as exc_info:
            validate_booking(_payload(special_requests="x" * 1001))
        assert exc_info.value.message.startswith("special_requests:")

        req = validate_booking(_payload(address="x" * 1000, special_requests="y" * 1000))
        assert len(req.address) == 1000
        assert len(req.special_requests) == 1000

    @pytest.mark.parametrize(
        "field", ["homestay_id", "date", "time_slot", "guest_name", "phone"]
    )
    def test_missing_required_field_rejected(self, field):
        data = dict(VALID_PAYLOAD)
        data.pop(field)

        with pytest.raises(InvalidBookingError) as exc_info:
            validate_booking(data)

        assert exc_info.value.message == f"{field}: is required"

    def test_empty_homestay_id_rejected(self):
        with pytest.raises(InvalidBookingError) as exc_info:
            validate_booking(_payload(homestay_id=""))
        assert exc_info.value.message.startswith("homestay_id:")

    def test_non_string_homestay_id_rejected(self):
        with pytest.raises(InvalidBookingError):
            validate_booking(_payload(homestay_id=123))

    def test_valid_email_kept_verbatim(self):
        req = validate_booking(_payload(email="Jo.Lee@Example.COM"))
        assert req.email == "Jo.Lee@Example.COM"

    def test_malformed_email_rejected(self):
        with pytest.raises(InvalidBookingError) as exc_info:
            validate_booking(_payload(email="not-an-email"))
        assert exc_info.value.message.startswith("email:")

    def test_iso_timestamp_truncated_to_date(self):
        req = validate_booking(_payload(date="2025-06-01T15:30:00Z"))
        assert req.date == dt.date(2025, 6, 1)

    @pytest.mark.parametrize("bad_date", ["2025-13-01", "June 1st", "", 20250601])
    def test_malformed_date_rejected(self, bad_date):
        with pytest.raises(InvalidBookingError) as exc_info:
            validate_booking(_payload(date=bad_date))
        assert exc_info.value.message.startswith("date:")

    def test_unknown_field_rejected(self):
        with pytest.raises(InvalidBookingError) as exc_info:
            validate_booking(_payload(coupon="FREE"))
        assert exc_info.value.message == "coupon: is not allowed"

    @pytest.mark.parametrize("payload", [None, [], "booking", 42])
    def test_non_object_payload_rejected(self, payload):
        with pytest.raises(InvalidBookingError) as exc_info:
            validate_booking(payload)
        assert exc_info.value.message == "Request body must be a JSON object"

    def test_first_failure_is_reported(self):
        with pytest.raises(InvalidBookingError) as exc_info:
            validate_booking(_payload(guest_name="J", phone="1"))
        assert exc_info.value.message.startswith("guest_name:")

    def test_rejection_is_repeatable(self):
        bad = _payload(guests=0)

        with pytest.raises(InvalidBookingError) as first:
            validate_booking(bad)
        with pytest.raises(InvalidBookingError) as second:
            validate_booking(bad)

        assert first.value.message == second.value.message
        assert bad["guests"] == 0
