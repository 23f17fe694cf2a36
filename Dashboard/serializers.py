# Dashboard/serializers.py
from rest_framework import serializers

from Pitch.utils import coerce_id
from .services import TRUNCATORS


class RevenueQuerySerializer(serializers.Serializer):
    """Query string of the revenue reports."""
    dateFrom = serializers.DateField(required=False)
    dateTo = serializers.DateField(required=False)
    pitchId = serializers.CharField(required=False, allow_blank=True)
    interval = serializers.ChoiceField(
        choices=list(TRUNCATORS), required=False, default="day"
    )
    limit = serializers.IntegerField(
        required=False, default=10, min_value=1, max_value=100
    )

    def validate_pitchId(self, value):
        if not value or value == "all":
            return None
        pk = coerce_id(value)
        if pk is None:
            raise serializers.ValidationError("Invalid pitch id")
        return pk

    def validate(self, attrs):
        date_from, date_to = attrs.get("dateFrom"), attrs.get("dateTo")
        if date_from and date_to and date_to < date_from:
            raise serializers.ValidationError(
                {"dateTo": "dateTo cannot be before dateFrom"}
            )
        return attrs
