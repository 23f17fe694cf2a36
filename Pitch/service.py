import logging
import secrets

from django.conf import settings
from django.db import IntegrityError, transaction
from django.utils import timezone
from rest_framework.exceptions import APIException, PermissionDenied, ValidationError

from Content.models import Notification
from Content.services import notify
from pitchbooking.exceptions import flatten_message
from slots.services import eligible_slots
from .exceptions import (
    BookingNotFound,
    InvalidBookingTransition,
    PitchNotFound,
    SlotAlreadyBooked,
)
from .models import Booking, Payment, Pitch
from .utils import coerce_id, format_day, is_valid_phone, normalize_phone, parse_day

logger = logging.getLogger(__name__)

STATUS_LABELS = {
    Booking.CONFIRMED: "confirmed",
    Booking.CANCELLED: "cancelled",
}


# -------------------------------------------------------------------
# LOOKUPS
# -------------------------------------------------------------------
def _get_booking(booking_id, lock=False):
    pk = coerce_id(booking_id)
    if pk is None:
        raise BookingNotFound()

    if lock:
        # FOR UPDATE cannot cover the nullable side of an outer join
        qs = Booking.objects.select_for_update()
    else:
        qs = Booking.objects.select_related("pitch", "user")

    booking = qs.filter(pk=pk).first()
    if booking is None:
        raise BookingNotFound()
    return booking


def _slot_taken(pitch, day, time_slot):
    return (
        Booking.objects
        .holding_slot()
        .filter(pitch=pitch, date=day, time_slot=time_slot)
        .exists()
    )


# -------------------------------------------------------------------
# BOOKING CREATION
# -------------------------------------------------------------------
def create_booking(pitch_id, day, time_slot, customer_name, phone, user=None):
    """
    Check-then-insert under a row lock on the pitch.
    The partial unique index on (pitch, date, time_slot) backs the check
    up, so a race that slips past the lock still ends as SlotAlreadyBooked.
    """
    day = parse_day(day)
    customer_name = (customer_name or "").strip()
    phone = normalize_phone(phone)

    errors = {}
    if not customer_name:
        errors["name"] = ["Name is required"]
    if not is_valid_phone(phone):
        errors["phone"] = ["Invalid phone number"]
    if errors:
        raise ValidationError(errors)

    pk = coerce_id(pitch_id)
    if pk is None:
        raise PitchNotFound()

    try:
        with transaction.atomic():
            # Serializes concurrent bookings of the same pitch
            pitch = Pitch.objects.select_for_update().filter(pk=pk).first()
            if pitch is None:
                raise PitchNotFound()

            if pitch.status != Pitch.ACTIVE:
                raise ValidationError(
                    {"fieldId": ["This pitch is not accepting bookings"]}
                )

            if time_slot not in eligible_slots(pitch):
                raise ValidationError(
                    {"timeSlot": [f"{time_slot} is not offered by this pitch"]}
                )

            if _slot_taken(pitch, day, time_slot):
                raise SlotAlreadyBooked()

            booking = Booking.objects.create(
                pitch=pitch,
                pitch_name=pitch.name,
                user=user,
                date=day,
                date_display=format_day(day),
                time_slot=time_slot,
                customer_name=customer_name,
                phone=phone,
                price=pitch.price,
                price_value=pitch.price_value,
                status=Booking.PENDING,
            )
    except IntegrityError:
        logger.warning(
            "Concurrent booking rejected for pitch %s on %s at %s", pk, day, time_slot
        )
        raise SlotAlreadyBooked()

    logger.info(
        "Booking %s created: pitch=%s date=%s slot=%s",
        booking.pk, pitch.pk, day, time_slot
    )
    return booking


# -------------------------------------------------------------------
# STATUS LIFECYCLE
# -------------------------------------------------------------------
def _apply_transition(booking, status):
    if not booking.can_transition_to(status):
        raise InvalidBookingTransition()

    now = timezone.now()
    booking.status = status
    update_fields = ["status", "updated_at"]

    if status == Booking.CONFIRMED:
        booking.confirmed_at = now
        update_fields.append("confirmed_at")
    elif status == Booking.CANCELLED:
        booking.cancelled_at = now
        update_fields.append("cancelled_at")

    booking.save(update_fields=update_fields)


def _check_manager(booking, actor):
    if actor.is_admin:
        return
    if actor.is_owner:
        # Other owners' bookings are invisible rather than forbidden
        if booking.pitch is None or booking.pitch.owner_id != actor.pk:
            raise BookingNotFound()
        return
    raise PermissionDenied("Only owners and admins can change booking status")


def _notify_status_change(booking):
    label = STATUS_LABELS.get(booking.status)
    if booking.user_id is None or label is None:
        return

    notify(
        booking.user,
        title=f"Booking {label}",
        message=(
            f"Your booking at {booking.pitch_name} on {booking.date_display} "
            f"({booking.time_slot}) has been {label}."
        ),
        type=Notification.BOOKING,
        link="/my-bookings",
    )


def change_booking_status(booking_id, status, actor):
    if status not in dict(Booking.STATUS_CHOICES):
        raise ValidationError({"status": [f"Invalid status: {status}"]})

    with transaction.atomic():
        booking = _get_booking(booking_id, lock=True)
        _check_manager(booking, actor)
        previous = booking.status
        _apply_transition(booking, status)

    logger.info(
        "Booking %s: %s -> %s by %s", booking.pk, previous, status, actor.email
    )
    _notify_status_change(booking)
    return booking


def bulk_change_status(booking_ids, status, actor):
    """
    Applies the same transition to every id independently.
    One failing id never rolls back the others.
    """
    results = []
    for booking_id in booking_ids:
        try:
            change_booking_status(booking_id, status, actor)
        except APIException as exc:
            results.append({
                "id": str(booking_id),
                "success": False,
                "message": flatten_message(exc.detail),
            })
        else:
            results.append({
                "id": str(booking_id),
                "success": True,
                "message": f"Booking {STATUS_LABELS.get(status, status)}",
            })

    updated = sum(1 for r in results if r["success"])
    logger.info(
        "Bulk status %s by %s: %s updated, %s failed",
        status, actor.email, updated, len(results) - updated
    )
    return {
        "updated": updated,
        "failed": len(results) - updated,
        "results": results,
    }


def cancel_own_booking(booking_id, user):
    """Customers may only withdraw their own bookings while still pending."""
    pk = coerce_id(booking_id)
    if pk is None:
        raise BookingNotFound()

    with transaction.atomic():
        booking = (
            Booking.objects
            .select_for_update()
            .for_customer(user)
            .filter(pk=pk)
            .first()
        )
        if booking is None:
            raise BookingNotFound()

        if booking.status != Booking.PENDING:
            raise InvalidBookingTransition()

        _apply_transition(booking, Booking.CANCELLED)

    logger.info("Booking %s cancelled by customer %s", booking.pk, user.email)
    return booking


# -------------------------------------------------------------------
# MOCK PAYMENT
# -------------------------------------------------------------------
def _new_transaction_ref():
    return f"TXN{timezone.now():%Y%m%d%H%M%S}{secrets.token_hex(4).upper()}"


def confirm_mock_payment(booking_id, payment_method):
    """
    pending -> confirmed with a simulated receipt.
    No money moves; nothing leaves this process.
    """
    if payment_method not in dict(Payment.PAYMENT_METHOD_CHOICES):
        raise ValidationError(
            {"paymentMethod": [f"Unsupported payment method: {payment_method}"]}
        )

    with transaction.atomic():
        booking = _get_booking(booking_id, lock=True)

        if booking.status != Booking.PENDING:
            raise InvalidBookingTransition()

        _apply_transition(booking, Booking.CONFIRMED)
        booking.payment_method = payment_method
        booking.save(update_fields=["payment_method", "updated_at"])

        payment = Payment.objects.create(
            booking=booking,
            payment_method=payment_method,
            transaction_ref=_new_transaction_ref(),
            amount_paid=booking.price_value,
            currency=settings.BOOKING_CURRENCY,
            status=Payment.SUCCESS,
        )

    logger.info(
        "Mock payment %s confirmed booking %s (%s)",
        payment.transaction_ref, booking.pk, payment_method
    )
    if booking.user_id:
        notify(
            booking.user,
            title="Payment received",
            message=(
                f"Payment of {booking.price} for {booking.pitch_name} "
                f"on {booking.date_display} was successful."
            ),
            type=Notification.PAYMENT,
            link="/my-bookings",
        )
    return booking, payment


# -------------------------------------------------------------------
# ADMIN DELETE
# -------------------------------------------------------------------
def delete_booking(booking_id):
    booking = _get_booking(booking_id)
    pk = booking.pk
    booking.delete()
    logger.info("Booking %s physically deleted", pk)
    return pk


# -------------------------------------------------------------------
# PITCH STATUS
# -------------------------------------------------------------------
def change_pitch_status(pitch, status, actor):
    """
    Admins set any status. Owners only toggle an approved pitch
    between active and locked.
    """
    if status not in dict(Pitch.STATUS_CHOICES):
        raise ValidationError({"status": [f"Invalid status: {status}"]})

    if not actor.is_admin:
        if pitch.status == Pitch.PENDING:
            raise PermissionDenied("This pitch is awaiting admin approval")
        if status not in (Pitch.ACTIVE, Pitch.LOCKED):
            raise PermissionDenied("Owners can only activate or lock a pitch")

    previous = pitch.status
    pitch.status = status
    pitch.save(update_fields=["status", "updated_at"])

    logger.info("Pitch %s: %s -> %s by %s", pitch.pk, previous, status, actor.email)
    return pitch
