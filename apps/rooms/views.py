"""Room and room type API views."""

from __future__ import annotations

from django_filters.rest_framework import DjangoFilterBackend  # type: ignore
from rest_framework import permissions, serializers, viewsets  # type: ignore
from rest_framework.decorators import action  # type: ignore
from rest_framework.filters import OrderingFilter  # type: ignore
from rest_framework.response import Response  # type: ignore

from apps.reservations.services import available_rooms
from apps.users.permissions import IsAdminOrReadOnly

from .filters import RoomFilterSet
from .models import Room, RoomType
from .serializers import RoomSerializer, RoomTypeSerializer


class StayWindowSerializer(serializers.Serializer):
    check_in_date = serializers.DateField()
    check_out_date = serializers.DateField()

    def validate(self, attrs):  # type: ignore
        if attrs["check_in_date"] >= attrs["check_out_date"]:
            raise serializers.ValidationError({"check_out_date": "Check-out date must be after check-in date."})
        return attrs


class RoomTypeViewSet(viewsets.ModelViewSet):
    queryset = RoomType.objects.all()
    serializer_class = RoomTypeSerializer
    permission_classes = [IsAdminOrReadOnly]
    pagination_class = None


class RoomViewSet(viewsets.ModelViewSet):
    """Rooms of all hotels; `available` answers the front desk's date search."""

    queryset = Room.objects.select_related("hotel", "room_type").order_by("room_number")
    serializer_class = RoomSerializer
    permission_classes = [IsAdminOrReadOnly]
    filter_backends = [DjangoFilterBackend, OrderingFilter]
    filterset_class = RoomFilterSet
    ordering_fields = ["room_number", "price_per_night", "capacity", "floor_number"]
    lookup_value_regex = r"\d+"

    @action(detail=False, methods=["get"], permission_classes=[permissions.AllowAny])
    def available(self, request):  # type: ignore
        window = StayWindowSerializer(data=request.query_params)
        window.is_valid(raise_exception=True)
        queryset = self.filter_queryset(self.get_queryset())
        rooms = available_rooms(
            window.validated_data["check_in_date"],
            window.validated_data["check_out_date"],
            queryset=queryset,
        ).order_by("room_number")
        page = self.paginate_queryset(rooms)
        if page is not None:
            return self.get_paginated_response(self.get_serializer(page, many=True).data)
        return Response(self.get_serializer(rooms, many=True).data)
