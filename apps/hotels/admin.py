"""Admin registration for hotels."""

from __future__ import annotations

from django.contrib import admin

from .models import Hotel


@admin.register(Hotel)
class HotelAdmin(admin.ModelAdmin):
    list_display = ("name", "location", "rating", "price", "is_featured", "is_active", "created_at")
    list_filter = ("is_active", "is_featured", "location")
    search_fields = ("name", "location", "description")
    prepopulated_fields = {"slug": ("name",)}
    readonly_fields = ("created_at", "updated_at")
