"""API views for room reservations."""

from __future__ import annotations

from rest_framework import mixins, permissions, status, viewsets  # type: ignore
from rest_framework.decorators import action  # type: ignore
from rest_framework.response import Response  # type: ignore

from apps.users.permissions import IsOwnerOrOperations, IsStaffOrAdmin, is_operations_user
from shared.domain.base import DomainError

from .models import Reservation
from .serializers import AvailabilityQuerySerializer, ReservationCreateSerializer, ReservationSerializer
from .services import (
    cancel_reservation,
    check_in_reservation,
    check_out_reservation,
    check_room_availability,
)


class ReservationViewSet(
    mixins.CreateModelMixin,
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    viewsets.GenericViewSet,
):
    """Guests see their own reservations, the front desk sees all of them."""

    queryset = Reservation.objects.select_related(
        "guest", "staff", "room", "room__hotel", "room__room_type"
    ).all()
    permission_classes = [permissions.IsAuthenticated, IsOwnerOrOperations]
    owner_field = "guest"
    filterset_fields = ["status", "room", "guest"]

    def get_serializer_class(self):  # type: ignore
        if self.action == "create":
            return ReservationCreateSerializer
        return ReservationSerializer

    def get_queryset(self):  # type: ignore
        qs = super().get_queryset()
        user = self.request.user
        if is_operations_user(user):
            return qs
        return qs.filter(guest=user).order_by("-check_in_date")

    def create(self, request, *args, **kwargs):  # type: ignore
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        reservation = serializer.save()
        read_serializer = ReservationSerializer(reservation, context=self.get_serializer_context())
        headers = self.get_success_headers(read_serializer.data)
        return Response(read_serializer.data, status=status.HTTP_201_CREATED, headers=headers)

    def _run(self, operation, *args):  # type: ignore
        reservation: Reservation = self.get_object()  # type: ignore
        try:
            operation(reservation, *args)
        except DomainError as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)
        return Response(ReservationSerializer(reservation, context=self.get_serializer_context()).data)

    @action(detail=True, methods=["post"])
    def cancel(self, request, pk=None):  # type: ignore
        return self._run(cancel_reservation)

    @action(
        detail=True,
        methods=["post"],
        url_path="check-in",
        permission_classes=[permissions.IsAuthenticated, IsStaffOrAdmin],
    )
    def check_in(self, request, pk=None):  # type: ignore
        return self._run(check_in_reservation, request.user)

    @action(
        detail=True,
        methods=["post"],
        url_path="check-out",
        permission_classes=[permissions.IsAuthenticated, IsStaffOrAdmin],
    )
    def check_out(self, request, pk=None):  # type: ignore
        return self._run(check_out_reservation, request.user)

    @action(detail=False, methods=["get"], permission_classes=[permissions.AllowAny])
    def availability(self, request):  # type: ignore
        """Whether a room is free for the given stay."""
        query = AvailabilityQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        room = query.validated_data.get("room")
        if room is None:
            return Response({"room": ["This field is required."]}, status=status.HTTP_400_BAD_REQUEST)
        available = room.is_active and check_room_availability(
            room,
            query.validated_data["check_in_date"],
            query.validated_data["check_out_date"],
        )
        return Response({"room": room.id, "available": available})
