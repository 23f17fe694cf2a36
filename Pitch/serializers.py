from django.contrib.auth import get_user_model
from rest_framework import serializers

from slots.services import validate_slot_labels
from .models import Booking, Payment, Pitch
from .utils import day_as_iso_instant, format_price, parse_day, parse_price

User = get_user_model()


class PriceField(serializers.Field):
    """Reads "300.000đ" or 300000, always writes the vi-VN display string."""

    def to_representation(self, value):
        return format_price(value)

    def to_internal_value(self, data):
        value = parse_price(data)
        if value <= 0:
            raise serializers.ValidationError("Price must be a positive amount")
        return value


# =========================================================
# PITCH
# =========================================================
class PitchSerializer(serializers.ModelSerializer):
    id = serializers.CharField(read_only=True)
    price = PriceField(source="price_value")
    priceValue = serializers.IntegerField(source="price_value", read_only=True)
    slots = serializers.ListField(
        child=serializers.CharField(), required=False
    )
    ownerId = serializers.CharField(source="owner_id", read_only=True)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)
    updatedAt = serializers.DateTimeField(source="updated_at", read_only=True)

    class Meta:
        model = Pitch
        fields = [
            "id",
            "name",
            "location",
            "description",
            "capacity",
            "price",
            "priceValue",
            "type",
            "status",
            "image",
            "slots",
            "ownerId",
            "createdAt",
            "updatedAt",
        ]
        # Owners never set status through the edit form
        read_only_fields = ("status",)

    def validate_name(self, value):
        if not value.strip():
            raise serializers.ValidationError("Name cannot be blank")
        return value.strip()

    def validate_slots(self, value):
        return validate_slot_labels(value)


class AdminPitchSerializer(PitchSerializer):
    ownerId = serializers.PrimaryKeyRelatedField(
        source="owner",
        queryset=User.objects.filter(role=User.OWNER),
        pk_field=serializers.CharField(),
        required=False,
        allow_null=True,
    )

    class Meta(PitchSerializer.Meta):
        read_only_fields = ()


class PitchStatusSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=Pitch.STATUS_CHOICES)


class BulkPitchStatusSerializer(serializers.Serializer):
    pitchIds = serializers.ListField(child=serializers.CharField(), min_length=1)
    status = serializers.ChoiceField(choices=Pitch.STATUS_CHOICES)


# =========================================================
# PAYMENT
# =========================================================
class PaymentSerializer(serializers.ModelSerializer):
    id = serializers.SerializerMethodField()
    bookingId = serializers.CharField(source="booking_id", read_only=True)
    amount = serializers.CharField(source="booking.price", read_only=True)
    amountValue = serializers.IntegerField(source="amount_paid", read_only=True)
    paymentMethod = serializers.CharField(source="payment_method", read_only=True)
    transactionId = serializers.CharField(source="transaction_ref", read_only=True)
    paidAt = serializers.DateTimeField(source="paid_at", read_only=True)

    class Meta:
        model = Payment
        fields = [
            "id",
            "bookingId",
            "amount",
            "amountValue",
            "currency",
            "paymentMethod",
            "status",
            "transactionId",
            "paidAt",
        ]

    def get_id(self, obj):
        return f"payment_{obj.pk}"


class MockPaymentSerializer(serializers.Serializer):
    bookingId = serializers.CharField()
    paymentMethod = serializers.CharField(required=False, default=Payment.CARD)


# =========================================================
# BOOKING
# =========================================================
class BookingSerializer(serializers.ModelSerializer):
    """Read shape of a booking, field names as the web client expects them."""
    id = serializers.CharField(read_only=True)
    fieldId = serializers.CharField(source="pitch_id", read_only=True)
    fieldName = serializers.CharField(source="pitch_name", read_only=True)
    date = serializers.CharField(source="date_display", read_only=True)
    dateISO = serializers.SerializerMethodField()
    timeSlot = serializers.CharField(source="time_slot", read_only=True)
    name = serializers.CharField(source="customer_name", read_only=True)
    priceValue = serializers.IntegerField(source="price_value", read_only=True)
    paymentMethod = serializers.CharField(source="payment_method", read_only=True)
    userId = serializers.CharField(source="user_id", read_only=True)
    payment = serializers.SerializerMethodField()
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)
    updatedAt = serializers.DateTimeField(source="updated_at", read_only=True)
    confirmedAt = serializers.DateTimeField(source="confirmed_at", read_only=True)
    cancelledAt = serializers.DateTimeField(source="cancelled_at", read_only=True)

    class Meta:
        model = Booking
        fields = [
            "id",
            "fieldId",
            "fieldName",
            "date",
            "dateISO",
            "timeSlot",
            "name",
            "phone",
            "price",
            "priceValue",
            "status",
            "paymentMethod",
            "userId",
            "payment",
            "createdAt",
            "updatedAt",
            "confirmedAt",
            "cancelledAt",
        ]
        read_only_fields = fields

    def get_dateISO(self, obj):
        return day_as_iso_instant(obj.date)

    def get_payment(self, obj):
        payment = getattr(obj, "payment", None)
        return PaymentSerializer(payment).data if payment else None


class BookingCreateSerializer(serializers.Serializer):
    """
    Request body of POST /bookings.
    Price and field name sent by the client are ignored; both come from the pitch.
    """
    fieldId = serializers.CharField()
    date = serializers.CharField(required=False, allow_blank=True)
    dateISO = serializers.CharField(required=False, allow_blank=True)
    timeSlot = serializers.CharField()
    name = serializers.CharField(allow_blank=True)
    phone = serializers.CharField(allow_blank=True)

    def validate(self, attrs):
        # The display/plain date is the customer's calendar day; the ISO
        # instant may sit on the previous UTC day
        raw = attrs.get("date") or attrs.get("dateISO")
        attrs["day"] = parse_day(raw)
        return attrs


class BookingStatusSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=Booking.STATUS_CHOICES)


class BulkBookingStatusSerializer(serializers.Serializer):
    bookingIds = serializers.ListField(child=serializers.CharField(), min_length=1)
    status = serializers.ChoiceField(choices=Booking.STATUS_CHOICES)
