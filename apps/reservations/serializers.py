"""Serializers for the reservation domain."""

from __future__ import annotations

from django.contrib.auth import get_user_model  # type: ignore
from rest_framework import serializers  # type: ignore

from apps.rooms.models import Room
from apps.rooms.serializers import RoomShortSerializer
from apps.users.permissions import is_operations_user
from apps.users.serializers import UserShortSerializer

from .models import Reservation
from .services import ReservationValidationError, RoomUnavailableError, create_reservation

User = get_user_model()


class ReservationCreateSerializer(serializers.Serializer):
    """Reservation request from a guest, or from the front desk on a guest's behalf."""

    room = serializers.PrimaryKeyRelatedField(queryset=Room.objects.select_related("hotel"))
    guest = serializers.PrimaryKeyRelatedField(queryset=User.objects.all(), required=False)
    check_in_date = serializers.DateField()
    check_out_date = serializers.DateField()
    number_of_guests = serializers.IntegerField(min_value=1, default=1)
    special_requests = serializers.CharField(required=False, allow_blank=True, default="")

    def validate(self, attrs):  # type: ignore
        if attrs["check_in_date"] >= attrs["check_out_date"]:
            raise serializers.ValidationError({"check_out_date": "Check-out date must be after check-in date."})
        request = self.context["request"]
        if "guest" in attrs and not is_operations_user(request.user):
            raise serializers.ValidationError({"guest": "Only staff can reserve on behalf of another guest."})
        return attrs

    def create(self, validated_data):  # type: ignore
        request = self.context["request"]
        guest = validated_data.pop("guest", None) or request.user
        try:
            return create_reservation(guest=guest, **validated_data)
        except (RoomUnavailableError, ReservationValidationError) as exc:
            raise serializers.ValidationError({"non_field_errors": [str(exc)]})


class ReservationSerializer(serializers.ModelSerializer):
    guest = UserShortSerializer(read_only=True)
    room = RoomShortSerializer(read_only=True)
    staff = UserShortSerializer(read_only=True)
    nights = serializers.ReadOnlyField()

    class Meta:
        model = Reservation
        fields = [
            "id",
            "guest",
            "room",
            "staff",
            "check_in_date",
            "check_out_date",
            "nights",
            "number_of_guests",
            "special_requests",
            "status",
            "checked_in_at",
            "checked_out_at",
            "cancelled_at",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class AvailabilityQuerySerializer(serializers.Serializer):
    room = serializers.PrimaryKeyRelatedField(queryset=Room.objects.all(), required=False)
    check_in_date = serializers.DateField()
    check_out_date = serializers.DateField()

    def validate(self, attrs):  # type: ignore
        if attrs["check_in_date"] >= attrs["check_out_date"]:
            raise serializers.ValidationError({"check_out_date": "Check-out date must be after check-in date."})
        return attrs
