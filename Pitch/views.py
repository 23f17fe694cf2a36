import logging

from django.db.models import Q
from django.utils import timezone
from rest_framework import generics, mixins, status, viewsets
from rest_framework.decorators import action
from rest_framework.exceptions import ValidationError
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from Accounts.permissions import IsAdminRole, IsOwnerRole
from Dashboard.services import BookingStatsService
from pitchbooking.mixins import EnvelopeMixin
from slots.services import build_availability_response
from . import service
from .models import Booking, Pitch
from .serializers import (
    AdminPitchSerializer,
    BookingCreateSerializer,
    BookingSerializer,
    BookingStatusSerializer,
    BulkBookingStatusSerializer,
    BulkPitchStatusSerializer,
    MockPaymentSerializer,
    PaymentSerializer,
    PitchSerializer,
    PitchStatusSerializer,
)
from .utils import coerce_id, parse_day, parse_price

logger = logging.getLogger(__name__)


# -------------------------------------------------------------------
# QUERY FILTERS
# -------------------------------------------------------------------
def filter_pitches(qs, params):
    status_filter = params.get("status")
    if status_filter and status_filter != "all":
        qs = qs.filter(status=status_filter)

    term = (params.get("q") or "").strip()
    if term:
        qs = qs.filter(Q(name__icontains=term) | Q(location__icontains=term))

    pitch_type = params.get("type")
    if pitch_type and pitch_type.lower() != "all":
        qs = qs.filter(type=pitch_type)

    if params.get("minPrice"):
        qs = qs.filter(price_value__gte=parse_price(params["minPrice"]))
    if params.get("maxPrice"):
        qs = qs.filter(price_value__lte=parse_price(params["maxPrice"]))

    return qs


def filter_bookings(qs, params):
    status_filter = params.get("status")
    if status_filter and status_filter != "all":
        qs = qs.filter(status=status_filter)

    term = (params.get("q") or "").strip()
    if term:
        qs = qs.filter(
            Q(customer_name__icontains=term)
            | Q(phone__icontains=term)
            | Q(pitch_name__icontains=term)
        )

    if params.get("dateFrom"):
        qs = qs.filter(date__gte=parse_day(params["dateFrom"]))
    if params.get("dateTo"):
        qs = qs.filter(date__lte=parse_day(params["dateTo"]))

    pitch_id = params.get("pitchId")
    if pitch_id and pitch_id != "all":
        pk = coerce_id(pitch_id)
        qs = qs.filter(pitch_id=pk) if pk else qs.none()

    return qs


# -------------------------------------------------------------------
# SERVICE INFO
# -------------------------------------------------------------------
class ApiIndexView(APIView):
    permission_classes = [AllowAny]

    def get(self, request):
        return Response({
            "success": True,
            "message": "Pitch booking API",
            "data": {
                "endpoints": {
                    "pitches": "/api/pitches",
                    "availability": "/api/pitches/:id/available?date=YYYY-MM-DD",
                    "bookings": "/api/bookings",
                    "payments": "/api/payments/mock",
                    "auth": "/api/auth/login",
                    "health": "/api/health",
                }
            }
        })


class HealthView(APIView):
    permission_classes = [AllowAny]

    def get(self, request):
        return Response({
            "success": True,
            "status": "ok",
            "timestamp": timezone.now().isoformat(),
        })


# -------------------------------------------------------------------
# PUBLIC PITCH CATALOG
# -------------------------------------------------------------------
class PitchListView(generics.ListAPIView):
    """
    Public API
    Active pitches only, newest first
    """
    serializer_class = PitchSerializer
    permission_classes = [AllowAny]

    def get_queryset(self):
        params = self.request.query_params.copy()
        params.pop("status", None)
        return filter_pitches(Pitch.objects.filter(status=Pitch.ACTIVE), params)


class PitchDetailView(generics.RetrieveAPIView):
    queryset = Pitch.objects.all()
    serializer_class = PitchSerializer
    permission_classes = [AllowAny]

    def retrieve(self, request, *args, **kwargs):
        return Response({
            "success": True,
            "data": self.get_serializer(self.get_object()).data,
        })


class PitchAvailabilityView(APIView):
    """
    Public API
    Booked / free slots of a pitch for one day (?date=YYYY-MM-DD)
    """
    permission_classes = [AllowAny]

    def get(self, request, pk):
        day = request.query_params.get("date")
        if not day:
            raise ValidationError({"date": ["Query parameter date (YYYY-MM-DD) is required"]})

        return Response({
            "success": True,
            "data": build_availability_response(pk, day),
        })


# -------------------------------------------------------------------
# CUSTOMER BOOKINGS
# -------------------------------------------------------------------
class BookingCreateView(APIView):
    """
    Public API
    Guests may book; a signed-in customer is attached to the booking
    """
    permission_classes = [AllowAny]

    def post(self, request):
        serializer = BookingCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        booking = service.create_booking(
            pitch_id=data["fieldId"],
            day=data["day"],
            time_slot=data["timeSlot"],
            customer_name=data["name"],
            phone=data["phone"],
            user=request.user if request.user.is_authenticated else None,
        )

        return Response({
            "success": True,
            "message": "Booking created successfully",
            "data": BookingSerializer(booking).data,
        }, status=status.HTTP_201_CREATED)


class MyBookingsView(generics.ListAPIView):
    serializer_class = BookingSerializer
    permission_classes = [IsAuthenticated]

    def get_queryset(self):
        qs = Booking.objects.for_customer(self.request.user).select_related("payment")
        status_filter = self.request.query_params.get("status")
        if status_filter and status_filter != "all":
            qs = qs.filter(status=status_filter)
        return qs.order_by("-created_at")


class BookingCancelView(APIView):
    permission_classes = [IsAuthenticated]

    def post(self, request, pk):
        booking = service.cancel_own_booking(pk, request.user)

        return Response({
            "success": True,
            "message": "Booking cancelled",
            "data": BookingSerializer(booking).data,
        })


class MockPaymentView(APIView):
    """
    Public API
    Simulated checkout: confirms a pending booking and issues a receipt
    """
    permission_classes = [AllowAny]

    def post(self, request):
        serializer = MockPaymentSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        booking, payment = service.confirm_mock_payment(
            serializer.validated_data["bookingId"],
            serializer.validated_data["paymentMethod"],
        )

        return Response({
            "success": True,
            "message": "Payment successful",
            "data": {
                "booking": BookingSerializer(booking).data,
                "payment": PaymentSerializer(payment).data,
            }
        })


# -------------------------------------------------------------------
# ADMIN PITCH MANAGEMENT
# -------------------------------------------------------------------
class AdminPitchViewSet(EnvelopeMixin, viewsets.ModelViewSet):
    serializer_class = AdminPitchSerializer
    permission_classes = [IsAdminRole]
    item_label = "Pitch"

    def get_queryset(self):
        return filter_pitches(
            Pitch.objects.select_related("owner"), self.request.query_params
        )

    def perform_create(self, serializer):
        pitch = serializer.save()
        logger.info("Admin %s created pitch %s", self.request.user.email, pitch.pk)

    def perform_update(self, serializer):
        pitch = serializer.save()
        logger.info("Admin %s updated pitch %s", self.request.user.email, pitch.pk)

    def perform_destroy(self, instance):
        logger.info("Admin %s deleted pitch %s", self.request.user.email, instance.pk)
        instance.delete()

    @action(detail=True, methods=["put"], url_path="status")
    def set_status(self, request, pk=None):
        serializer = PitchStatusSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        pitch = service.change_pitch_status(
            self.get_object(), serializer.validated_data["status"], request.user
        )
        return self.envelope(self.get_serializer(pitch).data, "Pitch status updated")

    @action(detail=False, methods=["post"], url_path="bulk-status")
    def bulk_status(self, request):
        serializer = BulkPitchStatusSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        ids = [coerce_id(i) for i in serializer.validated_data["pitchIds"]]
        new_status = serializer.validated_data["status"]

        updated = 0
        for pitch in Pitch.objects.filter(pk__in=[i for i in ids if i]):
            service.change_pitch_status(pitch, new_status, request.user)
            updated += 1

        return self.envelope(
            {"updated": updated}, f"Updated status of {updated} pitches"
        )


# -------------------------------------------------------------------
# OWNER PITCH MANAGEMENT
# -------------------------------------------------------------------
class OwnerPitchViewSet(EnvelopeMixin, viewsets.ModelViewSet):
    """
    Owner API
    Owners manage only their own pitches; new pitches wait for admin approval
    """
    serializer_class = PitchSerializer
    permission_classes = [IsOwnerRole]
    item_label = "Pitch"

    def get_queryset(self):
        return filter_pitches(
            Pitch.objects.filter(owner=self.request.user), self.request.query_params
        )

    def perform_create(self, serializer):
        pitch = serializer.save(owner=self.request.user, status=Pitch.PENDING)
        logger.info("Owner %s submitted pitch %s", self.request.user.email, pitch.pk)

    def perform_update(self, serializer):
        pitch = serializer.save()
        logger.info("Owner %s updated pitch %s", self.request.user.email, pitch.pk)

    def perform_destroy(self, instance):
        logger.info("Owner %s deleted pitch %s", self.request.user.email, instance.pk)
        instance.delete()

    @action(detail=True, methods=["put"], url_path="status")
    def set_status(self, request, pk=None):
        serializer = PitchStatusSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        pitch = service.change_pitch_status(
            self.get_object(), serializer.validated_data["status"], request.user
        )
        return self.envelope(self.get_serializer(pitch).data, "Pitch status updated")


# -------------------------------------------------------------------
# BOOKING MANAGEMENT (ADMIN / OWNER)
# -------------------------------------------------------------------
class BookingManagementMixin(EnvelopeMixin):
    serializer_class = BookingSerializer
    item_label = "Booking"

    def get_base_queryset(self):
        raise NotImplementedError

    def get_queryset(self):
        qs = self.get_base_queryset().select_related("payment")
        return filter_bookings(qs, self.request.query_params).order_by("-created_at")

    @action(detail=True, methods=["put"], url_path="status")
    def set_status(self, request, pk=None):
        serializer = BookingStatusSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        booking = service.change_booking_status(
            pk, serializer.validated_data["status"], request.user
        )
        return self.envelope(
            BookingSerializer(booking).data, "Booking status updated"
        )

    @action(detail=False, methods=["post"], url_path="bulk-status")
    def bulk_status(self, request):
        serializer = BulkBookingStatusSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        summary = service.bulk_change_status(
            serializer.validated_data["bookingIds"],
            serializer.validated_data["status"],
            request.user,
        )
        return self.envelope(
            summary,
            f"Updated {summary['updated']} bookings, {summary['failed']} failed",
        )


class AdminBookingViewSet(
    BookingManagementMixin,
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    mixins.DestroyModelMixin,
    viewsets.GenericViewSet,
):
    permission_classes = [IsAdminRole]

    def get_base_queryset(self):
        return Booking.objects.all()

    def perform_destroy(self, instance):
        service.delete_booking(instance.pk)


class OwnerBookingViewSet(
    BookingManagementMixin,
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    viewsets.GenericViewSet,
):
    permission_classes = [IsOwnerRole]

    def get_base_queryset(self):
        return Booking.objects.for_owner(self.request.user)

    @action(detail=False, methods=["get"])
    def stats(self, request):
        return self.envelope(
            BookingStatsService.get_owner_booking_stats(request.user)
        )
