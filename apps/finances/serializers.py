"""Serializers for the finance domain (payments and reports)."""

from __future__ import annotations

from rest_framework import serializers  # type: ignore

from apps.bookings.models import Booking

from .models import Payment


class PaymentSerializer(serializers.ModelSerializer):
    """Read representation of a payment."""

    booking_code = serializers.ReadOnlyField(source="booking.booking_code")
    staff_email = serializers.ReadOnlyField(source="staff.email")

    class Meta:
        model = Payment
        fields = [
            "id",
            "booking",
            "booking_code",
            "amount",
            "currency",
            "method",
            "channel",
            "status",
            "transaction_id",
            "staff_email",
            "notes",
            "paid_at",
            "refunded_at",
            "created_at",
        ]
        read_only_fields = fields


class PaymentCreateSerializer(serializers.Serializer):
    booking = serializers.PrimaryKeyRelatedField(queryset=Booking.objects.all())
    method = serializers.ChoiceField(choices=Payment.Method.choices)
    amount = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=0, required=False)
    notes = serializers.CharField(required=False, allow_blank=True, default="")

    def validate_booking(self, booking: Booking) -> Booking:
        if booking.status == Booking.Status.CANCELLED:
            raise serializers.ValidationError("Cannot pay for a cancelled booking.")
        return booking
