from django.contrib import admin

from .models import Notification, Promotion, Review


@admin.register(Promotion)
class PromotionAdmin(admin.ModelAdmin):
    list_display = ("id", "title", "type", "status", "start_date", "end_date", "created_by")
    list_filter = ("type", "status")
    search_fields = ("title", "description")


@admin.register(Review)
class ReviewAdmin(admin.ModelAdmin):
    list_display = ("id", "name", "rating", "field", "status", "created_at")
    list_filter = ("status", "rating")
    search_fields = ("name", "comment", "field")


@admin.register(Notification)
class NotificationAdmin(admin.ModelAdmin):
    list_display = ("id", "user", "type", "title", "is_read", "created_at")
    list_filter = ("type", "is_read")
