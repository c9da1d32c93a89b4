"""Admin registration for payments."""

from __future__ import annotations

from django.contrib import admin

from .models import Payment


@admin.register(Payment)
class PaymentAdmin(admin.ModelAdmin):
    list_display = ("id", "booking", "amount", "currency", "method", "channel", "status", "paid_at")
    list_filter = ("status", "method", "channel")
    search_fields = ("booking__booking_code", "transaction_id", "booking__guest_email")
    readonly_fields = ("transaction_id", "paid_at", "refunded_at", "created_at", "updated_at")
    raw_id_fields = ("booking", "staff")
