"""Query parameter serializers shared by the report endpoints."""

from __future__ import annotations

from rest_framework import serializers  # type: ignore


class DateWindowSerializer(serializers.Serializer):
    """Optional inclusive `start_date`/`end_date` window."""

    start_date = serializers.DateField(required=False)
    end_date = serializers.DateField(required=False)

    def validate(self, attrs):  # type: ignore
        start, end = attrs.get("start_date"), attrs.get("end_date")
        if start and end and start > end:
            raise serializers.ValidationError({"end_date": "End date must not be before start date."})
        return attrs
