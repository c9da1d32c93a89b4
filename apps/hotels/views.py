"""Hotel API views."""

from __future__ import annotations

import logging

from django_filters.rest_framework import DjangoFilterBackend  # type: ignore
from rest_framework import permissions, viewsets  # type: ignore
from rest_framework.decorators import action  # type: ignore
from rest_framework.filters import OrderingFilter  # type: ignore
from rest_framework.response import Response  # type: ignore

from apps.users.permissions import IsAdminOrReadOnly, is_admin_user

from .filters import HotelFilterSet
from .models import Hotel
from .serializers import HotelDetailSerializer, HotelSerializer

logger = logging.getLogger(__name__)

SUGGESTIONS_LIMIT = 5
FEATURED_LIMIT = 10


class HotelViewSet(viewsets.ModelViewSet):
    """Hotel catalogue. Reads are public, writes are for administrators."""

    queryset = Hotel.objects.all()
    permission_classes = [IsAdminOrReadOnly]
    filter_backends = [DjangoFilterBackend, OrderingFilter]
    filterset_class = HotelFilterSet
    ordering_fields = ["price", "rating", "distance_km", "created_at", "name"]

    def get_queryset(self):  # type: ignore
        qs = super().get_queryset()
        if is_admin_user(self.request.user):
            return qs
        return qs.filter(is_active=True)

    def get_serializer_class(self):  # type: ignore
        if self.action == "retrieve":
            return HotelDetailSerializer
        return HotelSerializer

    def perform_create(self, serializer):  # type: ignore
        hotel = serializer.save()
        logger.info(f"Hotel {hotel.id} created: {hotel.name}")

    def perform_destroy(self, instance):  # type: ignore
        logger.info(f"Hotel {instance.id} deleted: {instance.name}")
        instance.delete()

    @action(detail=False, methods=["get"], permission_classes=[permissions.AllowAny])
    def featured(self, request):
        """Featured hotels for the home screen carousel."""
        hotels = Hotel.objects.filter(is_active=True, is_featured=True).order_by("-rating", "name")
        limit = request.query_params.get("limit")
        hotels = hotels[: int(limit)] if limit and limit.isdigit() else hotels[:FEATURED_LIMIT]
        return Response(HotelSerializer(hotels, many=True, context={"request": request}).data)

    @action(detail=False, methods=["get"], permission_classes=[permissions.AllowAny])
    def suggestions(self, request):
        """Location and hotel name suggestions while the guest types a query."""
        query = request.query_params.get("q", "").strip()
        if not query:
            return Response({"locations": [], "hotels": []})

        active = Hotel.objects.filter(is_active=True)
        locations = (
            active.filter(location__icontains=query)
            .order_by("location")
            .values_list("location", flat=True)
            .distinct()[:SUGGESTIONS_LIMIT]
        )
        hotels = active.filter(name__icontains=query).order_by("-rating", "name")[:SUGGESTIONS_LIMIT]
        return Response(
            {
                "locations": list(locations),
                "hotels": [{"id": hotel.id, "name": hotel.name, "location": hotel.location} for hotel in hotels],
            }
        )
