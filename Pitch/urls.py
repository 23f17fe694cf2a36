from django.urls import include, path
from rest_framework.routers import SimpleRouter

from .views import (
    AdminBookingViewSet,
    AdminPitchViewSet,
    ApiIndexView,
    BookingCancelView,
    BookingCreateView,
    HealthView,
    MockPaymentView,
    MyBookingsView,
    OwnerBookingViewSet,
    OwnerPitchViewSet,
    PitchAvailabilityView,
    PitchDetailView,
    PitchListView,
)

router = SimpleRouter(trailing_slash=False)
router.register("admin/pitches", AdminPitchViewSet, basename="admin-pitch")
router.register("admin/bookings", AdminBookingViewSet, basename="admin-booking")
router.register("owner/pitches", OwnerPitchViewSet, basename="owner-pitch")
router.register("owner/bookings", OwnerBookingViewSet, basename="owner-booking")

urlpatterns = [
    path("", ApiIndexView.as_view(), name="api-index"),
    path("health", HealthView.as_view(), name="health"),

    path("pitches", PitchListView.as_view(), name="pitch-list"),
    path("pitches/<str:pk>", PitchDetailView.as_view(), name="pitch-detail"),
    path("pitches/<str:pk>/available", PitchAvailabilityView.as_view(), name="pitch-availability"),

    path("bookings", BookingCreateView.as_view(), name="booking-create"),
    path("bookings/me", MyBookingsView.as_view(), name="booking-mine"),
    path("bookings/<str:pk>/cancel", BookingCancelView.as_view(), name="booking-cancel"),

    path("payments/mock", MockPaymentView.as_view(), name="payment-mock"),

    path("", include(router.urls)),
]
