"""FilterSet definitions for room listings and availability search."""

from __future__ import annotations

import django_filters  # type: ignore

from .models import Room


class RoomFilterSet(django_filters.FilterSet):
    hotel = django_filters.NumberFilter(field_name="hotel_id")
    room_type = django_filters.NumberFilter(field_name="room_type_id")
    is_active = django_filters.BooleanFilter(field_name="is_active")
    capacity = django_filters.NumberFilter(field_name="capacity", lookup_expr="gte")
    price_min = django_filters.NumberFilter(field_name="price_per_night", lookup_expr="gte")
    price_max = django_filters.NumberFilter(field_name="price_per_night", lookup_expr="lte")
    view_type = django_filters.ChoiceFilter(choices=Room.ViewType.choices)

    class Meta:
        model = Room
        fields = ["hotel", "room_type", "is_active", "view_type"]
