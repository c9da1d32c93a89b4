"""Admin registration for notifications."""

from __future__ import annotations

from django.contrib import admin

from .models import Notification
from .services import deliver_notification


@admin.register(Notification)
class NotificationAdmin(admin.ModelAdmin):
    list_display = ("id", "user", "type", "subject", "status", "is_read", "sent_at", "created_at")
    list_filter = ("type", "status", "is_read")
    search_fields = ("user__email", "subject", "message")
    readonly_fields = ("sent_at", "error", "created_at", "updated_at")
    actions = ["retry_delivery"]

    @admin.action(description="Retry delivery of selected notifications")
    def retry_delivery(self, request, queryset):  # type: ignore
        delivered = sum(1 for notification in queryset.select_related("user") if deliver_notification(notification))
        self.message_user(request, f"{delivered} of {queryset.count()} notifications delivered.")
