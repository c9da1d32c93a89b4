"""API views for the booking domain."""

from __future__ import annotations

from django_filters import rest_framework as filters  # type: ignore
from rest_framework import permissions, status, viewsets  # type: ignore
from rest_framework.decorators import action  # type: ignore
from rest_framework.response import Response  # type: ignore

from apps.users.permissions import IsAdminRole, IsStaffOrAdmin, is_admin_user, is_operations_user
from shared.domain.base import DomainError

from .models import Booking
from .serializers import BookingCreateSerializer, BookingSerializer, BookingUpdateSerializer
from .services import booking_stats, cancel_booking, change_status


class BookingFilterSet(filters.FilterSet):
    status = filters.ChoiceFilter(choices=Booking.Status.choices)
    hotel = filters.NumberFilter(field_name="hotel_id")
    guest_email = filters.CharFilter(field_name="guest_email", lookup_expr="iexact")
    check_in_from = filters.DateFilter(field_name="check_in", lookup_expr="gte")
    check_in_to = filters.DateFilter(field_name="check_in", lookup_expr="lte")

    class Meta:
        model = Booking
        fields = ["status", "hotel", "guest_email"]


class IsBookingStakeholder(permissions.BasePermission):
    """The guest who booked, front desk staff and administrators have access."""

    def has_object_permission(self, request, view, obj: Booking):  # type: ignore
        user = request.user
        if not user.is_authenticated:
            return False
        if is_operations_user(user):
            return True
        return obj.user_id == user.id


class BookingViewSet(viewsets.ModelViewSet):
    """Viewset for creating and managing hotel bookings."""

    queryset = Booking.objects.select_related("hotel", "user").all()
    permission_classes = [permissions.IsAuthenticated, IsBookingStakeholder]
    filterset_class = BookingFilterSet

    def get_permissions(self):  # type: ignore
        if self.action in {"update", "partial_update", "destroy"}:
            return [permissions.IsAuthenticated(), IsAdminRole()]
        return super().get_permissions()

    def get_serializer_class(self):  # type: ignore
        if self.action == "create":
            return BookingCreateSerializer
        if self.action in {"update", "partial_update"}:
            return BookingUpdateSerializer
        return BookingSerializer

    def get_queryset(self):  # type: ignore
        user = self.request.user
        qs = super().get_queryset()
        if not user.is_authenticated:
            return qs.none()
        if is_operations_user(user):
            return qs
        return qs.filter(user=user)

    def create(self, request, *args, **kwargs):  # type: ignore
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        booking = serializer.save()
        read_serializer = BookingSerializer(booking, context=self.get_serializer_context())
        headers = self.get_success_headers(read_serializer.data)
        return Response(read_serializer.data, status=status.HTTP_201_CREATED, headers=headers)

    def update(self, request, *args, **kwargs):  # type: ignore
        partial = kwargs.pop("partial", False)
        booking = self.get_object()
        serializer = self.get_serializer(booking, data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)
        booking = serializer.save()
        return Response(BookingSerializer(booking, context=self.get_serializer_context()).data)

    def _change_status(self, target: str) -> Response:
        booking: Booking = self.get_object()  # type: ignore
        try:
            change_status(booking, target)
        except DomainError as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)
        return Response(BookingSerializer(booking, context=self.get_serializer_context()).data)

    @action(detail=True, methods=["post", "put"])
    def cancel(self, request, pk=None):  # type: ignore
        """Only the guest who booked or an administrator may cancel."""
        booking: Booking = self.get_object()  # type: ignore
        user = request.user
        if is_admin_user(user):
            source = Booking.CancellationSource.HOTEL
        elif booking.user_id == user.id:
            source = Booking.CancellationSource.GUEST
        else:
            return Response(
                {"detail": "Only the booking owner or an administrator can cancel this booking."},
                status=status.HTTP_403_FORBIDDEN,
            )
        try:
            cancel_booking(booking, source=source, reason=request.data.get("reason", ""))
        except DomainError as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)
        return Response(BookingSerializer(booking, context=self.get_serializer_context()).data)

    @action(detail=True, methods=["post"], permission_classes=[permissions.IsAuthenticated, IsStaffOrAdmin])
    def confirm(self, request, pk=None):  # type: ignore
        return self._change_status(Booking.Status.CONFIRMED)

    @action(
        detail=True,
        methods=["post"],
        url_path="check-in",
        permission_classes=[permissions.IsAuthenticated, IsStaffOrAdmin],
    )
    def check_in(self, request, pk=None):  # type: ignore
        return self._change_status(Booking.Status.CHECKED_IN)

    @action(detail=True, methods=["post"], permission_classes=[permissions.IsAuthenticated, IsStaffOrAdmin])
    def complete(self, request, pk=None):  # type: ignore
        return self._change_status(Booking.Status.COMPLETED)

    @action(detail=False, methods=["get"])
    def stats(self, request):  # type: ignore
        """Total, upcoming, completed and cancelled counts for the requester's bookings."""
        return Response(booking_stats(self.get_queryset()))
