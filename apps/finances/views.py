"""API views for payments and financial reports.

Guests pay for their own bookings; front desk staff may take a payment for
any booking, which is then recorded with the ``front_desk`` channel.
Refunds and reports are reserved for administrators.
"""

from __future__ import annotations

import logging

from rest_framework import mixins, permissions, status, viewsets  # type: ignore
from rest_framework.decorators import action  # type: ignore
from rest_framework.response import Response  # type: ignore
from rest_framework.views import APIView  # type: ignore

from apps.bookings.serializers import BookingSerializer
from apps.users.permissions import IsAdminRole, is_operations_user
from shared.domain.base import DomainError
from shared.infrastructure.serializers import DateWindowSerializer

from .models import Payment
from .serializers import PaymentCreateSerializer, PaymentSerializer
from .services import (
    financial_report,
    financial_summary,
    payment_method_breakdown,
    record_payment,
    refund_payment,
)

logger = logging.getLogger(__name__)


class IsPaymentOwnerOrOperations(permissions.BasePermission):
    """Only the guest who owns the booking, staff or admins can see a payment."""

    def has_permission(self, request, view) -> bool:  # type: ignore
        return bool(request.user and request.user.is_authenticated)

    def has_object_permission(self, request, view, obj: Payment) -> bool:  # type: ignore
        if is_operations_user(request.user):
            return True
        return obj.booking.user_id == request.user.id


class PaymentViewSet(
    mixins.CreateModelMixin,
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    viewsets.GenericViewSet,
):
    """Viewset for recording and browsing payments."""

    queryset = Payment.objects.select_related("booking", "staff").all()
    serializer_class = PaymentSerializer
    permission_classes = [IsPaymentOwnerOrOperations]
    filterset_fields = ["booking", "status", "method", "channel"]

    def get_queryset(self):  # type: ignore
        user = self.request.user
        qs = super().get_queryset()
        if is_operations_user(user):
            return qs
        return qs.filter(booking__user=user)

    def create(self, request, *args, **kwargs):  # type: ignore
        serializer = PaymentCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        booking = serializer.validated_data["booking"]
        operations = is_operations_user(request.user)
        if not operations and booking.user_id != request.user.id:
            return Response(
                {"detail": "You can only pay for your own bookings."},
                status=status.HTTP_403_FORBIDDEN,
            )

        try:
            payment = record_payment(
                booking=booking,
                method=serializer.validated_data["method"],
                amount=serializer.validated_data.get("amount"),
                channel=Payment.Channel.FRONT_DESK if operations else Payment.Channel.ONLINE,
                staff=request.user if operations else None,
                notes=serializer.validated_data["notes"],
            )
        except DomainError as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)

        data = PaymentSerializer(payment).data
        if payment.status != Payment.Status.COMPLETED:
            return Response(data, status=status.HTTP_402_PAYMENT_REQUIRED)
        return Response(data, status=status.HTTP_201_CREATED)

    @action(detail=True, methods=["post"], permission_classes=[permissions.IsAuthenticated, IsAdminRole])
    def refund(self, request, pk=None):  # type: ignore
        payment = self.get_object()
        try:
            refund_payment(payment)
        except DomainError as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)
        return Response(PaymentSerializer(payment).data, status=status.HTTP_200_OK)


class FinancialSummaryView(APIView):
    permission_classes = [permissions.IsAuthenticated, IsAdminRole]

    def get(self, request, format=None):  # type: ignore
        return Response(financial_summary())


class FinancialReportView(APIView):
    """Completed bookings in a date window, grouped per hotel."""

    permission_classes = [permissions.IsAuthenticated, IsAdminRole]

    def get(self, request, format=None):  # type: ignore
        query = DateWindowSerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        report = financial_report(
            query.validated_data.get("start_date"),
            query.validated_data.get("end_date"),
        )
        report["bookings"] = BookingSerializer(report["bookings"], many=True).data
        return Response(report)


class PaymentMethodBreakdownView(APIView):
    permission_classes = [permissions.IsAuthenticated, IsAdminRole]

    def get(self, request, format=None):  # type: ignore
        return Response(payment_method_breakdown())
