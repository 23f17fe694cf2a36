import logging

from django.contrib.auth import get_user_model
from django.db.models import Q
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.exceptions import ValidationError
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView
from rest_framework_simplejwt.tokens import RefreshToken
from rest_framework_simplejwt.views import TokenObtainPairView

from Dashboard.services import BookingStatsService
from Pitch.models import Booking
from Pitch.serializers import BookingSerializer
from Pitch.utils import coerce_id
from pitchbooking.mixins import EnvelopeMixin
from pitchbooking.pagination import StandardPagination
from .permissions import IsAdminRole
from .serializers import (
    AdminUserSerializer,
    BulkUserStatusSerializer,
    LoginSerializer,
    ProfileUpdateSerializer,
    RegisterSerializer,
    UserSerializer,
    UserStatusSerializer,
)

logger = logging.getLogger(__name__)

User = get_user_model()


# -------------------------------------------------------------------
# AUTH
# -------------------------------------------------------------------
class RegisterView(APIView):
    """
    Public API
    Creates a player or owner account and returns a bearer token
    """
    permission_classes = [AllowAny]

    def post(self, request):
        serializer = RegisterSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        user = serializer.save()
        refresh = RefreshToken.for_user(user)
        logger.info("Registered %s account %s", user.role, user.email)

        return Response({
            "success": True,
            "message": "Registration successful",
            "data": {
                "user": UserSerializer(user).data,
                "token": str(refresh.access_token),
            }
        }, status=status.HTTP_201_CREATED)


class LoginView(TokenObtainPairView):
    permission_classes = [AllowAny]
    serializer_class = LoginSerializer

    def post(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        return Response({
            "success": True,
            "message": "Login successful",
            "data": serializer.validated_data,
        }, status=status.HTTP_200_OK)


class LogoutView(APIView):
    # Tokens are stateless; the client simply drops its copy
    permission_classes = [AllowAny]

    def post(self, request):
        return Response({"success": True, "message": "Logged out"})


# -------------------------------------------------------------------
# SELF-SERVICE PROFILE
# -------------------------------------------------------------------
class ProfileView(APIView):
    permission_classes = [IsAuthenticated]

    def get(self, request):
        return Response({
            "success": True,
            "data": UserSerializer(request.user).data,
        })

    def put(self, request):
        serializer = ProfileUpdateSerializer(
            request.user, data=request.data, partial=True
        )
        serializer.is_valid(raise_exception=True)
        user = serializer.save()

        return Response({
            "success": True,
            "message": "Profile updated successfully",
            "data": UserSerializer(user).data,
        })

    patch = put


# -------------------------------------------------------------------
# ADMIN USER MANAGEMENT
# -------------------------------------------------------------------
class AdminUserViewSet(EnvelopeMixin, viewsets.ModelViewSet):
    """
    Admin API
    Full account management, role changes and soft-disable
    """
    serializer_class = AdminUserSerializer
    permission_classes = [IsAdminRole]
    pagination_class = StandardPagination
    item_label = "User"

    def get_queryset(self):
        qs = User.objects.all().order_by("-created_at")
        params = self.request.query_params

        role = params.get("role")
        if role and role != "all":
            qs = qs.filter(role=role)

        term = (params.get("q") or "").strip()
        if term:
            qs = qs.filter(
                Q(name__icontains=term)
                | Q(email__icontains=term)
                | Q(phone__icontains=term)
            )
        return qs

    def perform_create(self, serializer):
        user = serializer.save()
        logger.info("Admin %s created user %s", self.request.user.email, user.email)

    def perform_destroy(self, instance):
        if instance.pk == self.request.user.pk:
            raise ValidationError("You cannot delete your own account")

        logger.info("Admin %s deleted user %s", self.request.user.email, instance.email)
        instance.delete()

    @action(detail=True, methods=["put"], url_path="status")
    def set_status(self, request, pk=None):
        user = self.get_object()
        serializer = UserStatusSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        user.is_active = serializer.validated_data["isActive"]
        user.save(update_fields=["is_active", "updated_at"])

        return Response({
            "success": True,
            "message": "Account unlocked" if user.is_active else "Account locked",
            "data": self.get_serializer(user).data,
        })

    @action(detail=False, methods=["post"], url_path="bulk-status")
    def bulk_status(self, request):
        serializer = BulkUserStatusSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        ids = [pk for pk in map(coerce_id, serializer.validated_data["userIds"]) if pk]
        updated = User.objects.filter(pk__in=ids).update(
            is_active=serializer.validated_data["isActive"]
        )
        logger.info("Admin %s bulk-updated status of %s users", request.user.email, updated)

        return Response({
            "success": True,
            "message": f"Updated status of {updated} users",
            "data": {"updatedCount": updated},
        })

    @action(detail=True, methods=["get"])
    def bookings(self, request, pk=None):
        user = self.get_object()
        bookings = Booking.objects.for_customer(user).order_by("-created_at")

        return Response({
            "success": True,
            "data": BookingSerializer(bookings, many=True).data,
        })

    @action(detail=True, methods=["get"])
    def stats(self, request, pk=None):
        user = self.get_object()
        return Response({
            "success": True,
            "data": BookingStatsService.get_user_stats(user),
        })
