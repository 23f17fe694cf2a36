from django.urls import include, path
from rest_framework.routers import SimpleRouter

from .views import AdminUserViewSet, LoginView, LogoutView, ProfileView, RegisterView

router = SimpleRouter(trailing_slash=False)
router.register("admin/users", AdminUserViewSet, basename="admin-user")

urlpatterns = [
    path("auth/register", RegisterView.as_view(), name="auth-register"),
    path("auth/login", LoginView.as_view(), name="auth-login"),
    path("auth/logout", LogoutView.as_view(), name="auth-logout"),

    path("user/profile", ProfileView.as_view(), name="user-profile"),

    path("", include(router.urls)),
]
