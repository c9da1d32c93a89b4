"""FilterSet definitions for hotel search and listing."""

from __future__ import annotations

from decimal import Decimal

import django_filters  # type: ignore
from django.db.models import Q  # type: ignore

from .models import Hotel


class HotelFilterSet(django_filters.FilterSet):
    """Filters used by the hotel list: free text, price, rating and listing category."""

    class Category:
        POPULAR = "popular"
        RECOMMENDED = "recommended"
        NEARBY = "nearby"
        LATEST = "latest"

        choices = (
            (POPULAR, "Popular"),
            (RECOMMENDED, "Recommended"),
            (NEARBY, "Nearby"),
            (LATEST, "Latest"),
        )

    RECOMMENDED_MIN_RATING = Decimal("4.5")

    search = django_filters.CharFilter(method="filter_search")
    location = django_filters.CharFilter(field_name="location", lookup_expr="icontains")
    price_min = django_filters.NumberFilter(field_name="price", lookup_expr="gte")
    price_max = django_filters.NumberFilter(field_name="price", lookup_expr="lte")
    rating_min = django_filters.NumberFilter(field_name="rating", lookup_expr="gte")
    is_featured = django_filters.BooleanFilter(field_name="is_featured")
    # CSV of amenity names, requires all selected amenities
    amenities = django_filters.CharFilter(method="filter_amenities")
    category = django_filters.ChoiceFilter(choices=Category.choices, method="filter_category")

    class Meta:
        model = Hotel
        fields = ["location", "is_featured"]

    def filter_search(self, queryset, name, value):  # type: ignore
        value = (value or "").strip()
        if not value:
            return queryset
        return queryset.filter(
            Q(name__icontains=value)
            | Q(location__icontains=value)
            | Q(description__icontains=value)
            | Q(amenities__icontains=value)
        )

    def filter_amenities(self, queryset, name, value):  # type: ignore
        names = [item.strip() for item in str(value or "").split(",") if item.strip()]
        # amenities is a JSON list of strings; match each quoted entry
        for amenity in names:
            queryset = queryset.filter(amenities__icontains=f'"{amenity}"')
        return queryset

    def filter_category(self, queryset, name, value):  # type: ignore
        if value == self.Category.POPULAR:
            return queryset.order_by("-rating", "name")
        if value == self.Category.RECOMMENDED:
            return queryset.filter(rating__gte=self.RECOMMENDED_MIN_RATING).order_by("-rating", "name")
        if value == self.Category.NEARBY:
            return queryset.order_by("distance_km", "name")
        if value == self.Category.LATEST:
            return queryset.order_by("-created_at", "-id")
        return queryset
