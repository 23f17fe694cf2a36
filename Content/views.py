import logging

from django.db.models import Q
from rest_framework import generics, mixins, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from Accounts.permissions import IsAdminRole, IsOwnerRole
from pitchbooking.mixins import EnvelopeMixin
from Pitch.utils import coerce_id
from .models import Notification, Promotion, Review
from .serializers import NotificationSerializer, PromotionSerializer, ReviewSerializer

logger = logging.getLogger(__name__)


def filter_promotions(qs, params):
    promo_type = params.get("type")
    if promo_type and promo_type != "all":
        qs = qs.filter(type=promo_type)

    status_filter = params.get("status")
    if status_filter and status_filter != "all":
        qs = qs.filter(status=status_filter)

    term = (params.get("q") or params.get("search") or "").strip()
    if term:
        qs = qs.filter(
            Q(title__icontains=term)
            | Q(description__icontains=term)
            | Q(content__icontains=term)
        )
    return qs


# -------------------------------------------------------------------
# PROMOTIONS & NEWS
# -------------------------------------------------------------------
class PromotionListView(generics.ListAPIView):
    """
    Public API
    Active promotions and news, newest first
    """
    serializer_class = PromotionSerializer
    permission_classes = [AllowAny]

    def get_queryset(self):
        params = self.request.query_params.copy()
        params.pop("status", None)
        return filter_promotions(
            Promotion.objects.filter(status=Promotion.ACTIVE), params
        )


class PromotionDetailView(generics.RetrieveAPIView):
    queryset = Promotion.objects.filter(status=Promotion.ACTIVE)
    serializer_class = PromotionSerializer
    permission_classes = [AllowAny]

    def retrieve(self, request, *args, **kwargs):
        return Response({
            "success": True,
            "data": self.get_serializer(self.get_object()).data,
        })


class AdminPromotionViewSet(EnvelopeMixin, viewsets.ModelViewSet):
    serializer_class = PromotionSerializer
    permission_classes = [IsAdminRole]
    item_label = "Promotion"

    def get_queryset(self):
        return filter_promotions(Promotion.objects.all(), self.request.query_params)

    def perform_create(self, serializer):
        promotion = serializer.save(created_by=self.request.user)
        logger.info(
            "%s %s created promotion %s",
            self.request.user.role, self.request.user.email, promotion.pk
        )


class OwnerPromotionViewSet(AdminPromotionViewSet):
    """
    Owner API
    Same editor as admins, restricted to the owner's own items
    """
    permission_classes = [IsOwnerRole]

    def get_queryset(self):
        return filter_promotions(
            Promotion.objects.filter(created_by=self.request.user),
            self.request.query_params,
        )


# -------------------------------------------------------------------
# REVIEWS
# -------------------------------------------------------------------
class ReviewListView(APIView):
    """
    Public API
    Active reviews, newest first, optionally capped with ?limit=
    """
    permission_classes = [AllowAny]

    def get(self, request):
        reviews = Review.objects.filter(status=Review.ACTIVE).order_by("-created_at")

        limit = coerce_id(request.query_params.get("limit"))
        if limit:
            reviews = reviews[:limit]

        return Response({
            "success": True,
            "data": ReviewSerializer(reviews, many=True).data,
        })


class AdminReviewViewSet(EnvelopeMixin, viewsets.ModelViewSet):
    serializer_class = ReviewSerializer
    permission_classes = [IsAdminRole]
    item_label = "Review"

    def get_queryset(self):
        qs = Review.objects.select_related("pitch")
        params = self.request.query_params

        status_filter = params.get("status")
        if status_filter and status_filter != "all":
            qs = qs.filter(status=status_filter)

        field_id = params.get("fieldId")
        if field_id and field_id != "all":
            pk = coerce_id(field_id)
            qs = qs.filter(pitch_id=pk) if pk else qs.none()

        term = (params.get("q") or params.get("search") or "").strip()
        if term:
            qs = qs.filter(
                Q(name__icontains=term)
                | Q(comment__icontains=term)
                | Q(field__icontains=term)
            )
        return qs


# -------------------------------------------------------------------
# NOTIFICATIONS (POLLED BY THE CLIENT)
# -------------------------------------------------------------------
class NotificationViewSet(
    EnvelopeMixin,
    mixins.ListModelMixin,
    mixins.DestroyModelMixin,
    viewsets.GenericViewSet,
):
    serializer_class = NotificationSerializer
    permission_classes = [IsAuthenticated]
    pagination_class = None
    item_label = "Notification"

    def get_queryset(self):
        return Notification.objects.filter(user=self.request.user)

    def list(self, request, *args, **kwargs):
        qs = self.get_queryset()
        return Response({
            "success": True,
            "data": self.get_serializer(qs, many=True).data,
            "unreadCount": qs.filter(is_read=False).count(),
        })

    @action(detail=True, methods=["put"])
    def read(self, request, pk=None):
        notification = self.get_object()
        notification.is_read = True
        notification.save(update_fields=["is_read"])

        return self.envelope(
            self.get_serializer(notification).data, "Notification marked as read"
        )

    @action(detail=False, methods=["put"], url_path="read-all")
    def read_all(self, request):
        updated = self.get_queryset().filter(is_read=False).update(is_read=True)
        return self.envelope({"updated": updated}, "All notifications marked as read")
