"""Serializers for the booking domain."""

from __future__ import annotations

from datetime import date

from django.db import transaction  # type: ignore
from rest_framework import serializers  # type: ignore

from apps.hotels.models import Hotel
from shared.domain.base import DomainError

from .models import Booking
from .services import change_status, create_booking


class BookingCreateSerializer(serializers.ModelSerializer):
    """Booking request from the mobile app."""

    check_in = serializers.DateField()
    check_out = serializers.DateField()
    guests = serializers.IntegerField(min_value=1, default=1)
    rooms = serializers.IntegerField(min_value=1, default=1)
    status = serializers.ChoiceField(
        choices=[Booking.Status.PENDING, Booking.Status.CONFIRMED],
        default=Booking.Status.CONFIRMED,
    )

    class Meta:
        model = Booking
        fields = [
            "hotel",
            "check_in",
            "check_out",
            "guests",
            "rooms",
            "guest_name",
            "guest_email",
            "guest_phone",
            "payment_method",
            "special_requests",
            "status",
        ]
        extra_kwargs = {
            "hotel": {"queryset": Hotel.objects.all()},
            "guest_name": {"required": False, "allow_blank": True},
            "guest_email": {"required": False, "allow_blank": True},
            "guest_phone": {"required": False, "allow_blank": True},
            "payment_method": {"required": False, "allow_blank": True},
            "special_requests": {"required": False, "allow_blank": True},
        }

    def validate(self, attrs):  # type: ignore
        check_in: date = attrs["check_in"]
        check_out: date = attrs["check_out"]
        if check_in >= check_out:
            raise serializers.ValidationError({"check_out": "Check-out date must be after check-in date."})

        user = self.context["request"].user
        # Contact details default to the account's
        if not attrs.get("guest_name"):
            attrs["guest_name"] = user.full_name if user.is_authenticated else ""
        if not attrs.get("guest_email"):
            attrs["guest_email"] = user.email if user.is_authenticated else ""
        if not attrs.get("guest_phone") and user.is_authenticated:
            attrs["guest_phone"] = user.phone or ""
        if not attrs["guest_name"]:
            raise serializers.ValidationError({"guest_name": "Guest name is required."})
        if not attrs["guest_email"]:
            raise serializers.ValidationError({"guest_email": "Guest email is required."})
        return attrs

    def create(self, validated_data):  # type: ignore
        request = self.context["request"]
        user = request.user if request.user.is_authenticated else None
        try:
            return create_booking(user=user, **validated_data)
        except DomainError as exc:
            raise serializers.ValidationError({"non_field_errors": [str(exc)]})


class BookingSerializer(serializers.ModelSerializer):
    """Full booking representation."""

    user_id = serializers.ReadOnlyField(source="user.id")
    hotel_image = serializers.ReadOnlyField(source="hotel.image")

    class Meta:
        model = Booking
        fields = [
            "id",
            "booking_code",
            "user_id",
            "hotel",
            "hotel_name",
            "hotel_image",
            "location",
            "check_in",
            "check_out",
            "guests",
            "rooms",
            "status",
            "nightly_rate",
            "total_nights",
            "total_price",
            "currency",
            "payment_method",
            "guest_name",
            "guest_email",
            "guest_phone",
            "special_requests",
            "expires_at",
            "confirmed_at",
            "checked_in_at",
            "completed_at",
            "cancelled_at",
            "cancellation_source",
            "cancellation_reason",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class BookingUpdateSerializer(serializers.ModelSerializer):
    """Administrative edit of a booking. Status changes go through the lifecycle."""

    status = serializers.ChoiceField(choices=Booking.Status.choices, required=False)

    class Meta:
        model = Booking
        fields = [
            "check_in",
            "check_out",
            "guests",
            "rooms",
            "guest_name",
            "guest_email",
            "guest_phone",
            "payment_method",
            "special_requests",
            "status",
        ]

    def validate(self, attrs):  # type: ignore
        check_in = attrs.get("check_in", self.instance.check_in)
        check_out = attrs.get("check_out", self.instance.check_out)
        if check_in >= check_out:
            raise serializers.ValidationError({"check_out": "Check-out date must be after check-in date."})
        for field in ("guests", "rooms"):
            if field in attrs and attrs[field] < 1:
                raise serializers.ValidationError({field: "Must be at least 1."})
        return attrs

    def update(self, instance: Booking, validated_data):  # type: ignore
        new_status = validated_data.pop("status", None)
        with transaction.atomic():
            for field, value in validated_data.items():
                setattr(instance, field, value)
            if {"check_in", "check_out", "rooms"} & validated_data.keys():
                instance.recalculate_totals()
            instance.save()
            if new_status:
                try:
                    change_status(instance, new_status)
                except DomainError as exc:
                    raise serializers.ValidationError({"status": [str(exc)]})
        return instance
