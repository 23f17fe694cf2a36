from django.urls import include, path
from rest_framework.routers import SimpleRouter

from .views import (
    AdminPromotionViewSet,
    AdminReviewViewSet,
    NotificationViewSet,
    OwnerPromotionViewSet,
    PromotionDetailView,
    PromotionListView,
    ReviewListView,
)

router = SimpleRouter(trailing_slash=False)
router.register("admin/promotions", AdminPromotionViewSet, basename="admin-promotion")
router.register("owner/promotions", OwnerPromotionViewSet, basename="owner-promotion")
router.register("admin/reviews", AdminReviewViewSet, basename="admin-review")
router.register("notifications", NotificationViewSet, basename="notification")

urlpatterns = [
    path("promotions", PromotionListView.as_view(), name="promotion-list"),
    path("promotions/<str:pk>", PromotionDetailView.as_view(), name="promotion-detail"),
    path("reviews", ReviewListView.as_view(), name="review-list"),

    path("", include(router.urls)),
]
