from django.conf import settings
from django.db import models
from django.db.models import Q

from .utils import format_price


# =========================
# PITCH (BOOKABLE FIELD)
# =========================

class Pitch(models.Model):
    """
    A bookable football pitch.
    Created by an owner (awaiting approval) or by an admin.
    """

    ACTIVE = "active"
    PENDING = "pending"
    LOCKED = "locked"

    STATUS_CHOICES = [
        (ACTIVE, "Active"),
        (PENDING, "Pending approval"),
        (LOCKED, "Locked"),
    ]

    FIVE_A_SIDE = "5v5"
    SEVEN_A_SIDE = "7v7"
    ELEVEN_A_SIDE = "11v11"

    TYPE_CHOICES = [
        (FIVE_A_SIDE, "5 a side"),
        (SEVEN_A_SIDE, "7 a side"),
        (ELEVEN_A_SIDE, "11 a side"),
    ]

    owner = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="pitches"
    )

    name = models.CharField(max_length=150)
    location = models.CharField(max_length=255)
    description = models.TextField(blank=True)
    capacity = models.PositiveSmallIntegerField(default=0)

    # Display string ("300.000đ") kept in sync with price_value on save
    price = models.CharField(max_length=50, blank=True)
    price_value = models.PositiveIntegerField()

    type = models.CharField(max_length=10, choices=TYPE_CHOICES)
    status = models.CharField(max_length=10, choices=STATUS_CHOICES, default=PENDING)

    # Image URL / path; files are hosted outside this service
    image = models.CharField(max_length=500, blank=True)

    # Subset of slots.constants.SLOT_CATALOG; empty means every slot
    slots = models.JSONField(default=list, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["status", "type"], name="pitch_status_type_idx"),
        ]

    def save(self, *args, **kwargs):
        self.price = format_price(self.price_value)
        update_fields = kwargs.get("update_fields")
        if update_fields is not None and "price_value" in update_fields:
            kwargs["update_fields"] = set(update_fields) | {"price"}
        super().save(*args, **kwargs)

    def __str__(self):
        return self.name


# =========================
# BOOKING
# =========================

class BookingQuerySet(models.QuerySet):

    def holding_slot(self):
        """Bookings that occupy their (pitch, date, slot)."""
        return self.filter(status__in=Booking.HOLDING_STATUSES)

    def for_owner(self, owner):
        return self.filter(pitch__owner=owner)

    def for_customer(self, user):
        # Guest bookings made before signing up are matched by phone number
        condition = Q(user=user)
        if user.phone:
            condition |= Q(user__isnull=True, phone=user.phone)
        return self.filter(condition)


class Booking(models.Model):
    """
    Reservation of one pitch + day + slot.
    Cancellation is a status; rows are only removed by the explicit admin delete.
    """

    PENDING = "pending"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"

    STATUS_CHOICES = [
        (PENDING, "Pending"),
        (CONFIRMED, "Confirmed"),
        (CANCELLED, "Cancelled"),
    ]

    HOLDING_STATUSES = (PENDING, CONFIRMED)

    # No transition ever leads back to pending; cancelled is terminal
    TRANSITIONS = {
        PENDING: {CONFIRMED, CANCELLED},
        CONFIRMED: {CANCELLED},
        CANCELLED: set(),
    }

    # History survives pitch deletion
    pitch = models.ForeignKey(
        Pitch,
        on_delete=models.SET_NULL,
        null=True,
        related_name="bookings"
    )
    pitch_name = models.CharField(max_length=150)

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="bookings"
    )

    date = models.DateField()
    date_display = models.CharField(max_length=10)
    time_slot = models.CharField(max_length=20)

    customer_name = models.CharField(max_length=150)
    phone = models.CharField(max_length=20)

    # Snapshotted from the pitch at booking time
    price = models.CharField(max_length=50)
    price_value = models.PositiveIntegerField()

    status = models.CharField(
        max_length=10,
        choices=STATUS_CHOICES,
        default=PENDING
    )
    payment_method = models.CharField(max_length=20, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)
    confirmed_at = models.DateTimeField(null=True, blank=True)
    cancelled_at = models.DateTimeField(null=True, blank=True)

    objects = BookingQuerySet.as_manager()

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["pitch", "date"], name="booking_pitch_date_idx"),
            models.Index(fields=["status", "date"], name="booking_status_date_idx"),
        ]
        constraints = [
            models.UniqueConstraint(
                fields=["pitch", "date", "time_slot"],
                condition=Q(status__in=["pending", "confirmed"]),
                name="unique_active_booking_per_slot",
            ),
        ]

    def can_transition_to(self, status):
        return status in self.TRANSITIONS.get(self.status, set())

    def __str__(self):
        return f"{self.pitch_name} | {self.date} | {self.time_slot}"


# =========================
# PAYMENT (MOCK)
# =========================

class Payment(models.Model):
    """
    Simulated payment receipt.
    One-to-one with Booking.
    """

    SUCCESS = "success"
    FAILED = "failed"

    PAYMENT_STATUS_CHOICES = [
        (SUCCESS, "Success"),
        (FAILED, "Failed"),
    ]

    CARD = "card"
    EWALLET = "ewallet"
    BANK = "bank"
    CASH = "cash"

    PAYMENT_METHOD_CHOICES = [
        (CARD, "Card"),
        (EWALLET, "E-wallet"),
        (BANK, "Bank transfer"),
        (CASH, "Cash"),
    ]

    booking = models.OneToOneField(
        Booking,
        on_delete=models.CASCADE,
        related_name="payment"
    )

    payment_method = models.CharField(
        max_length=20,
        choices=PAYMENT_METHOD_CHOICES
    )

    transaction_ref = models.CharField(
        max_length=100,
        unique=True
    )

    amount_paid = models.DecimalField(
        max_digits=12,
        decimal_places=2
    )

    currency = models.CharField(
        max_length=10,
        default="VND"
    )

    status = models.CharField(
        max_length=20,
        choices=PAYMENT_STATUS_CHOICES
    )

    paid_at = models.DateTimeField(auto_now_add=True)

    def __str__(self):
        return self.transaction_ref
