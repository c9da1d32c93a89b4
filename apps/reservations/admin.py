"""Admin registration for reservations."""

from __future__ import annotations

from django.contrib import admin

from .models import Reservation


@admin.register(Reservation)
class ReservationAdmin(admin.ModelAdmin):
    list_display = (
        "id",
        "room",
        "guest",
        "status",
        "check_in_date",
        "check_out_date",
        "number_of_guests",
        "staff",
        "created_at",
    )
    list_filter = ("status", "check_in_date", "room__hotel")
    search_fields = ("guest__email", "room__room_number", "room__hotel__name")
    readonly_fields = ("checked_in_at", "checked_out_at", "cancelled_at", "created_at", "updated_at")
