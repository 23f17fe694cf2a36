from rest_framework import serializers

from Pitch.models import Pitch
from .models import Notification, Promotion, Review
from .services import initials


# =========================================================
# PROMOTIONS / NEWS
# =========================================================
class PromotionSerializer(serializers.ModelSerializer):
    id = serializers.CharField(read_only=True)
    startDate = serializers.DateField(source="start_date", required=False, allow_null=True)
    endDate = serializers.DateField(source="end_date", required=False, allow_null=True)
    createdBy = serializers.CharField(source="created_by_id", read_only=True)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)
    updatedAt = serializers.DateTimeField(source="updated_at", read_only=True)

    class Meta:
        model = Promotion
        fields = [
            "id",
            "title",
            "description",
            "content",
            "type",
            "image",
            "discount",
            "badge",
            "startDate",
            "endDate",
            "status",
            "createdBy",
            "createdAt",
            "updatedAt",
        ]

    def validate(self, attrs):
        start = attrs.get("start_date", getattr(self.instance, "start_date", None))
        end = attrs.get("end_date", getattr(self.instance, "end_date", None))
        if start and end and end < start:
            raise serializers.ValidationError(
                {"endDate": "End date cannot be before start date"}
            )

        promo_type = attrs.get("type", getattr(self.instance, "type", Promotion.PROMOTION))
        if promo_type == Promotion.NEWS:
            attrs["discount"] = ""
            attrs["badge"] = ""
        return attrs


# =========================================================
# REVIEWS
# =========================================================
class ReviewSerializer(serializers.ModelSerializer):
    id = serializers.CharField(read_only=True)
    rating = serializers.IntegerField(min_value=1, max_value=5)
    fieldId = serializers.PrimaryKeyRelatedField(
        source="pitch",
        queryset=Pitch.objects.all(),
        pk_field=serializers.CharField(),
        required=False,
        allow_null=True,
    )
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)
    updatedAt = serializers.DateTimeField(source="updated_at", read_only=True)

    class Meta:
        model = Review
        fields = [
            "id",
            "name",
            "avatar",
            "rating",
            "comment",
            "field",
            "fieldId",
            "status",
            "createdAt",
            "updatedAt",
        ]
        extra_kwargs = {
            "avatar": {"required": False},
            "field": {"required": False},
        }

    def validate(self, attrs):
        name = attrs.get("name", getattr(self.instance, "name", ""))
        if not attrs.get("avatar") and not getattr(self.instance, "avatar", ""):
            attrs["avatar"] = initials(name)

        pitch = attrs.get("pitch")
        if pitch is not None and not attrs.get("field"):
            attrs["field"] = pitch.name
        return attrs


# =========================================================
# NOTIFICATIONS
# =========================================================
class NotificationSerializer(serializers.ModelSerializer):
    id = serializers.CharField(read_only=True)
    userId = serializers.CharField(source="user_id", read_only=True)
    isRead = serializers.BooleanField(source="is_read", read_only=True)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)

    class Meta:
        model = Notification
        fields = [
            "id",
            "userId",
            "type",
            "title",
            "message",
            "link",
            "isRead",
            "createdAt",
        ]
