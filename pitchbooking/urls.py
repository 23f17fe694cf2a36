from django.contrib import admin
from django.urls import include, path

urlpatterns = [
    path("django-admin/", admin.site.urls),

    path("api/", include("Accounts.urls")),
    path("api/", include("Pitch.urls")),
    path("api/", include("Content.urls")),
    path("api/", include("Dashboard.urls")),
]

handler404 = "pitchbooking.exceptions.json_page_not_found"
handler500 = "pitchbooking.exceptions.json_server_error"
