"""Admin registration for bookings."""

from __future__ import annotations

from django.contrib import admin

from .models import Booking


@admin.register(Booking)
class BookingAdmin(admin.ModelAdmin):
    list_display = (
        "booking_code",
        "hotel_name",
        "guest_name",
        "guest_email",
        "status",
        "check_in",
        "check_out",
        "rooms",
        "total_price",
        "created_at",
    )
    list_filter = ("status", "check_in", "check_out", "payment_method")
    search_fields = ("booking_code", "hotel_name", "guest_email", "guest_name")
    readonly_fields = (
        "booking_code",
        "created_at",
        "updated_at",
        "total_price",
        "total_nights",
        "nightly_rate",
        "confirmed_at",
        "checked_in_at",
        "completed_at",
        "cancelled_at",
    )
