"""Query parameter validation for admin reports."""

from __future__ import annotations

from django.conf import settings  # type: ignore
from rest_framework import serializers  # type: ignore

from apps.bookings.models import Booking
from apps.users.models import CustomUser
from shared.infrastructure.serializers import DateWindowSerializer

from .services import PERIODS


class BookingsReportQuerySerializer(DateWindowSerializer):
    status = serializers.ChoiceField(choices=Booking.Status.choices, required=False)
    hotel = serializers.IntegerField(min_value=1, required=False)


class HotelsReportQuerySerializer(serializers.Serializer):
    limit = serializers.IntegerField(
        min_value=1,
        max_value=settings.HOTELHUB["REPORT_HOTELS_MAX_LIMIT"],
        default=settings.HOTELHUB["REPORT_HOTELS_DEFAULT_LIMIT"],
    )


class UsersReportQuerySerializer(DateWindowSerializer):
    role = serializers.ChoiceField(choices=CustomUser.RoleChoices.choices, required=False)


class RevenueReportQuerySerializer(DateWindowSerializer):
    group_by = serializers.ChoiceField(choices=list(PERIODS), default="month")
