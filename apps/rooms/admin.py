"""Admin registrations for rooms."""

from __future__ import annotations

from django.contrib import admin

from .models import Room, RoomType


@admin.register(RoomType)
class RoomTypeAdmin(admin.ModelAdmin):
    list_display = ("name", "default_price", "default_capacity")
    search_fields = ("name",)


@admin.register(Room)
class RoomAdmin(admin.ModelAdmin):
    list_display = ("room_number", "hotel", "room_type", "floor_number", "price_per_night", "capacity", "is_active")
    list_filter = ("is_active", "room_type", "hotel", "view_type")
    search_fields = ("room_number", "hotel__name")
    list_select_related = ("hotel", "room_type")
