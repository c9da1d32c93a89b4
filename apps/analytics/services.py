"""Aggregations behind the admin dashboard and reports."""

from __future__ import annotations

from datetime import date, datetime, time
from decimal import Decimal
from typing import Any

from django.conf import settings  # type: ignore
from django.contrib.auth import get_user_model  # type: ignore
from django.db.models import Count, Q, QuerySet, Sum  # type: ignore
from django.db.models.functions import TruncDay, TruncMonth, TruncWeek  # type: ignore
from django.utils import timezone  # type: ignore

from apps.bookings.models import Booking
from apps.hotels.models import Hotel

ZERO = Decimal("0.00")

REVENUE_STATUSES = (Booking.Status.COMPLETED, Booking.Status.CONFIRMED)

PERIODS = {
    "day": (TruncDay, "%Y-%m-%d"),
    "week": (TruncWeek, "%G-W%V"),
    "month": (TruncMonth, "%Y-%m"),
}


def created_between(queryset: QuerySet, start: date | None, end: date | None) -> QuerySet:
    """Filters on ``created_at`` with both ends of the window inclusive."""
    tz = timezone.get_current_timezone()
    if start:
        queryset = queryset.filter(created_at__gte=datetime.combine(start, time.min, tzinfo=tz))
    if end:
        queryset = queryset.filter(created_at__lte=datetime.combine(end, time.max, tzinfo=tz))
    return queryset


def dashboard_stats() -> dict[str, Any]:
    bookings = Booking.objects.all()
    totals = bookings.aggregate(
        bookings=Count("id"),
        customers=Count("guest_email", distinct=True),
        revenue=Sum("total_price", filter=Q(status__in=REVENUE_STATUSES)),
    )
    recent_limit = settings.HOTELHUB["DASHBOARD_RECENT_LIMIT"]
    return {
        "stats": {
            "hotels": Hotel.objects.count(),
            "bookings": totals["bookings"],
            "customers": totals["customers"],
            "revenue": totals["revenue"] or ZERO,
        },
        "recent_bookings": list(bookings.select_related("hotel", "user").order_by("-created_at", "-id")[:recent_limit]),
    }


def booking_status_stats() -> dict[str, int]:
    counts = {
        row["status"]: row["count"]
        for row in Booking.objects.values("status").annotate(count=Count("id")).order_by()
    }
    stats = {"total": sum(counts.values())}
    for status in (
        Booking.Status.CONFIRMED,
        Booking.Status.PENDING,
        Booking.Status.CHECKED_IN,
        Booking.Status.COMPLETED,
        Booking.Status.CANCELLED,
    ):
        stats[str(status)] = counts.get(status, 0)
    return stats


def recent_hotels(limit: int | None = None) -> QuerySet:
    return Hotel.objects.order_by("-created_at", "-id")[: limit or settings.HOTELHUB["OVERVIEW_LIMIT"]]


def recent_bookings(limit: int | None = None) -> QuerySet:
    return Booking.objects.select_related("hotel", "user").order_by("-created_at", "-id")[
        : limit or settings.HOTELHUB["OVERVIEW_LIMIT"]
    ]


def recent_users(limit: int | None = None) -> QuerySet:
    return get_user_model().objects.order_by("-created_at", "-id")[: limit or settings.HOTELHUB["OVERVIEW_LIMIT"]]


# ============================================================================
# REPORTS
# ============================================================================

def bookings_report(
    start: date | None = None,
    end: date | None = None,
    status: str | None = None,
    hotel: int | None = None,
) -> QuerySet:
    queryset = created_between(Booking.objects.select_related("hotel", "user"), start, end)
    if status:
        queryset = queryset.filter(status=status)
    if hotel:
        queryset = queryset.filter(hotel_id=hotel)
    return queryset.order_by("-created_at", "-id")


def hotels_report(limit: int) -> QuerySet:
    return Hotel.objects.order_by("-created_at", "-id")[:limit]


def users_report(start: date | None = None, end: date | None = None, role: str | None = None) -> QuerySet:
    queryset = created_between(get_user_model().objects.all(), start, end)
    if role:
        queryset = queryset.filter(role=role)
    return queryset.order_by("-created_at", "-id")


def revenue_report(start: date | None = None, end: date | None = None, group_by: str = "month") -> dict[str, Any]:
    """Revenue of completed bookings bucketed by day, ISO week or month of creation."""

    trunc, fmt = PERIODS[group_by]
    completed = created_between(Booking.objects.filter(status=Booking.Status.COMPLETED), start, end)
    rows = (
        completed.annotate(bucket=trunc("created_at"))
        .values("bucket")
        .annotate(amount=Sum("total_price"))
        .order_by("bucket")
    )
    chart_data = [{"period": row["bucket"].strftime(fmt), "amount": row["amount"] or ZERO} for row in rows]
    return {
        "total": completed.aggregate(total=Sum("total_price"))["total"] or ZERO,
        "chart_data": chart_data,
        "period": {"start_date": start, "end_date": end, "group_by": group_by},
    }
