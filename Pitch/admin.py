# Pitch/admin.py

from django.contrib import admin
from .models import Booking, Payment, Pitch


# -------------------------------
# PITCH ADMIN
# -------------------------------
@admin.register(Pitch)
class PitchAdmin(admin.ModelAdmin):
    list_display = (
        "id",
        "name",
        "type",
        "price",
        "status",
        "owner",
    )

    list_filter = ("status", "type")
    search_fields = ("name", "location")

    # price is derived from price_value on save
    readonly_fields = ("price", "created_at", "updated_at")

    actions = ["approve_pitches", "lock_pitches"]

    def approve_pitches(self, request, queryset):
        updated = queryset.update(status=Pitch.ACTIVE)
        self.message_user(request, f"{updated} pitches approved.")

    def lock_pitches(self, request, queryset):
        updated = queryset.update(status=Pitch.LOCKED)
        self.message_user(request, f"{updated} pitches locked.")


# -------------------------------
# PAYMENT INLINE
# -------------------------------
# Mock receipts are never edited by hand
class PaymentInline(admin.StackedInline):
    model = Payment
    extra = 0
    can_delete = False
    readonly_fields = ("payment_method", "transaction_ref", "amount_paid", "currency", "status", "paid_at")


# -------------------------------
# BOOKING ADMIN
# -------------------------------
@admin.register(Booking)
class BookingAdmin(admin.ModelAdmin):
    list_display = (
        "id",
        "pitch_name",
        "date",
        "time_slot",
        "customer_name",
        "phone",
        "status",
    )

    list_filter = ("status", "date")
    search_fields = ("customer_name", "phone", "pitch_name")
    date_hierarchy = "date"

    readonly_fields = ("price", "price_value", "created_at", "confirmed_at", "cancelled_at")
    inlines = [PaymentInline]
