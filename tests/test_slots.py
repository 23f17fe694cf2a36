from datetime import date

import pytest
from rest_framework.exceptions import ValidationError

from Pitch import service
from Pitch.exceptions import PitchNotFound
from Pitch.models import Booking
from slots.constants import SLOT_CATALOG
from slots.services import (
    build_availability_response,
    eligible_slots,
    get_booked_slots,
    validate_slot_labels,
)

DAY = date(2025, 6, 1)


def test_eligible_slots_in_catalog_order(pitch):
    pitch.slots = ["20:00 - 21:30", "06:00 - 07:30"]
    assert eligible_slots(pitch) == ["06:00 - 07:30", "20:00 - 21:30"]


def test_empty_slot_list_means_whole_catalog(other_pitch):
    assert eligible_slots(other_pitch) == list(SLOT_CATALOG)


def test_validate_slot_labels_dedupes_and_sorts():
    labels = ["18:30 - 20:00", "06:00 - 07:30", "18:30 - 20:00"]
    assert validate_slot_labels(labels) == ["06:00 - 07:30", "18:30 - 20:00"]


def test_validate_slot_labels_rejects_unknown():
    with pytest.raises(ValidationError):
        validate_slot_labels(["12:00 - 13:00"])


@pytest.mark.django_db
def test_unknown_pitch_raises_not_found():
    with pytest.raises(PitchNotFound):
        get_booked_slots("999", DAY)
    with pytest.raises(PitchNotFound):
        get_booked_slots("abc", DAY)


def test_invalid_date_raises_validation_error(pitch):
    with pytest.raises(ValidationError):
        get_booked_slots(pitch.pk, "tomorrow")


def test_no_bookings_means_empty_set(pitch):
    assert get_booked_slots(pitch.pk, DAY) == set()


def test_availability_reflects_booking_and_cancellation(pitch, admin_user):
    booking = service.create_booking(pitch.pk, DAY, "18:30 - 20:00", "Khách", "0912345678")
    assert get_booked_slots(pitch.pk, DAY) == {"18:30 - 20:00"}

    service.change_booking_status(booking.pk, Booking.CANCELLED, admin_user)
    assert get_booked_slots(pitch.pk, DAY) == set()


def test_other_days_do_not_leak(pitch):
    service.create_booking(pitch.pk, DAY, "18:30 - 20:00", "Khách", "0912345678")
    assert get_booked_slots(pitch.pk, date(2025, 6, 2)) == set()


def test_labels_outside_the_pitch_catalog_are_ignored(pitch):
    service.create_booking(pitch.pk, DAY, "17:00 - 18:30", "Khách", "0912345678")
    # The owner later drops that slot from the pitch
    pitch.slots = ["18:30 - 20:00", "20:00 - 21:30"]
    pitch.save()

    assert get_booked_slots(pitch.pk, DAY) == set()


def test_build_availability_response(pitch):
    service.create_booking(pitch.pk, DAY, "18:30 - 20:00", "Khách", "0912345678")

    data = build_availability_response(str(pitch.pk), "2025-06-01")

    assert data == {
        "date": "2025-06-01",
        "bookedSlots": ["18:30 - 20:00"],
        "availableSlots": ["17:00 - 18:30", "20:00 - 21:30"],
        "allSlots": ["17:00 - 18:30", "18:30 - 20:00", "20:00 - 21:30"],
    }
