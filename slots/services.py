import logging

from rest_framework.exceptions import ValidationError

from Pitch.exceptions import PitchNotFound
from Pitch.models import Booking, Pitch
from Pitch.utils import coerce_id, parse_day
from .constants import SLOT_CATALOG, SLOT_POSITION

logger = logging.getLogger(__name__)


def eligible_slots(pitch):
    """The pitch's configured slots in catalog order; the whole catalog when none are set."""
    configured = set(pitch.slots or [])
    if not configured:
        return list(SLOT_CATALOG)
    return [label for label in SLOT_CATALOG if label in configured]


def validate_slot_labels(labels):
    unknown = [label for label in labels if label not in SLOT_POSITION]
    if unknown:
        raise ValidationError([f"Unknown time slot: {label}" for label in unknown])
    # De-duplicate and keep catalog order
    return sorted(set(labels), key=SLOT_POSITION.get)


def get_pitch(pitch_id):
    pk = coerce_id(pitch_id)
    pitch = Pitch.objects.filter(pk=pk).first() if pk else None
    if pitch is None:
        raise PitchNotFound()
    return pitch


def get_booked_slots(pitch_id, day):
    """
    Labels of `pitch_id` occupied on `day` by a pending or confirmed booking.
    Stale labels outside the pitch's slot list are never reported.
    """
    pitch = get_pitch(pitch_id)
    day = parse_day(day)

    taken = set(
        Booking.objects
        .holding_slot()
        .filter(pitch=pitch, date=day)
        .values_list("time_slot", flat=True)
    )
    booked = {label for label in eligible_slots(pitch) if label in taken}
    logger.debug("Pitch %s on %s: %s slots booked", pitch.pk, day, len(booked))
    return booked


def build_availability_response(pitch_id, day):
    pitch = get_pitch(pitch_id)
    day = parse_day(day)

    all_slots = eligible_slots(pitch)
    booked = get_booked_slots(pitch.pk, day)

    return {
        "date": day.isoformat(),
        "bookedSlots": [s for s in all_slots if s in booked],
        "availableSlots": [s for s in all_slots if s not in booked],
        "allSlots": all_slots,
    }
