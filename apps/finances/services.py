"""Payment processing and revenue reporting."""

from __future__ import annotations

import logging
import secrets
from collections import defaultdict
from datetime import date, datetime, time
from decimal import Decimal
from typing import TYPE_CHECKING, Any

from django.db import transaction  # type: ignore
from django.db.models import Count, QuerySet, Sum  # type: ignore
from django.db.models.functions import TruncMonth  # type: ignore
from django.utils import timezone  # type: ignore

from apps.bookings.models import Booking
from apps.bookings.services import lock_booking
from shared.domain.base import DomainError

from .models import Payment

if TYPE_CHECKING:  # pragma: no cover
    from apps.users.models import CustomUser

logger = logging.getLogger(__name__)

ZERO = Decimal("0.00")


class PaymentError(DomainError):
    default_message = "Payment could not be processed."


def process_payment(payment: Payment) -> bool:
    """
    Simulated payment processor.

    Every payment for a positive amount is approved with a generated
    transaction id.
    """
    if payment.amount <= 0:
        payment.mark_failed("Amount must be positive.")
        return False
    payment.mark_completed(transaction_id=f"TXN-{secrets.token_hex(6).upper()}")
    return True


def record_payment(
    *,
    booking: Booking,
    method: str,
    amount: Decimal | None = None,
    channel: str = Payment.Channel.ONLINE,
    staff: "CustomUser | None" = None,
    notes: str = "",
) -> Payment:
    """
    Records and processes a payment for a booking.

    The amount defaults to the booking total. A successful payment stores the
    method on the booking and confirms a booking that was waiting for payment.
    The booking row stays locked until the payment is stored, so the hold
    expiry task cannot cancel it halfway.
    """
    with transaction.atomic():
        locked = lock_booking(booking.pk)
        if locked.status == Booking.Status.CANCELLED:
            raise PaymentError("Cannot pay for a cancelled booking.")

        payment = Payment.objects.create(
            booking=locked,
            amount=locked.total_price if amount is None else amount,
            currency=locked.currency,
            method=method,
            channel=channel,
            staff=staff,
            notes=notes,
        )
        if process_payment(payment):
            locked.payment_method = method
            locked.save(update_fields=["payment_method", "updated_at"])
            if locked.status == Booking.Status.PENDING:
                locked.mark_confirmed()

    booking.refresh_from_db()

    if payment.status == Payment.Status.COMPLETED:
        logger.info(
            f"Payment {payment.transaction_id} of {payment.amount} {payment.currency} "
            f"recorded for booking {booking.booking_code} via {method}"
        )
    else:
        logger.warning(f"Payment {payment.id} for booking {booking.booking_code} failed")
    return payment


def refund_payment(payment: Payment) -> Payment:
    if payment.status != Payment.Status.COMPLETED:
        raise PaymentError("Only completed payments can be refunded.")
    payment.mark_refunded()
    logger.info(f"Payment {payment.id} for booking {payment.booking_id} refunded")
    return payment


# ============================================================================
# REPORTS
# ============================================================================

def _sum(queryset: QuerySet) -> Decimal:
    return queryset.aggregate(total=Sum("total_price"))["total"] or ZERO


def financial_summary() -> dict[str, Any]:
    bookings = Booking.objects.all()
    completed = bookings.filter(status=Booking.Status.COMPLETED)

    revenue_by_hotel = {
        row["hotel_name"]: row["revenue"]
        for row in completed.values("hotel_name").annotate(revenue=Sum("total_price")).order_by("hotel_name")
    }
    revenue_by_month = {
        row["month"].strftime("%Y-%m"): row["revenue"]
        for row in completed.annotate(month=TruncMonth("created_at"))
        .values("month")
        .annotate(revenue=Sum("total_price"))
        .order_by("month")
    }

    return {
        "total_revenue": _sum(completed),
        "pending_revenue": _sum(
            bookings.filter(status__in=[Booking.Status.CONFIRMED, Booking.Status.PENDING])
        ),
        "cancelled_revenue": _sum(bookings.filter(status=Booking.Status.CANCELLED)),
        "revenue_by_hotel": revenue_by_hotel,
        "revenue_by_month": revenue_by_month,
    }


def _window(start: date | None, end: date | None) -> dict[str, datetime]:
    lookups: dict[str, datetime] = {}
    tz = timezone.get_current_timezone()
    if start:
        lookups["created_at__gte"] = datetime.combine(start, time.min, tzinfo=tz)
    if end:
        lookups["created_at__lte"] = datetime.combine(end, time.max, tzinfo=tz)
    return lookups


def financial_report(start: date | None = None, end: date | None = None) -> dict[str, Any]:
    """Completed bookings created in the window, with totals and a per hotel breakdown."""

    completed = (
        Booking.objects.filter(status=Booking.Status.COMPLETED, **_window(start, end))
        .select_related("hotel")
        .order_by("-created_at")
    )

    hotel_performance: dict[str, dict[str, Any]] = defaultdict(lambda: {"bookings": 0, "revenue": ZERO})
    for booking in completed:
        entry = hotel_performance[booking.hotel_name]
        entry["bookings"] += 1
        entry["revenue"] += booking.total_price

    total_bookings = len(completed)
    total_revenue = sum((booking.total_price for booking in completed), ZERO)
    average = (total_revenue / total_bookings).quantize(Decimal("0.01")) if total_bookings else ZERO

    return {
        "totals": {
            "total_bookings": total_bookings,
            "total_revenue": total_revenue,
            "average_booking_value": average,
        },
        "hotel_performance": dict(hotel_performance),
        "bookings": list(completed),
    }


def payment_method_breakdown() -> dict[str, dict[str, Any]]:
    rows = (
        Booking.objects.filter(status=Booking.Status.COMPLETED)
        .values("payment_method")
        .annotate(count=Count("id"), amount=Sum("total_price"))
        .order_by("payment_method")
    )
    breakdown: dict[str, dict[str, Any]] = {}
    for row in rows:
        method = row["payment_method"] or "Unknown"
        entry = breakdown.setdefault(method, {"count": 0, "amount": ZERO})
        entry["count"] += row["count"]
        entry["amount"] += row["amount"] or ZERO
    return breakdown
