"""Domain services for booking workflows."""

from __future__ import annotations

import logging
from datetime import date
from typing import TYPE_CHECKING

from django.conf import settings  # type: ignore
from django.db import transaction  # type: ignore
from django.db.models import Count, Q, QuerySet  # type: ignore
from django.utils import timezone  # type: ignore

from shared.domain.base import DomainError

from .models import Booking

if TYPE_CHECKING:  # pragma: no cover - type checking only
    from apps.hotels.models import Hotel
    from apps.users.models import CustomUser

logger = logging.getLogger(__name__)


class HotelUnavailableError(DomainError):
    """Raised when a booking targets a hotel that is not open for bookings."""

    default_message = "Hotel is not available for booking."


def lock_booking(booking_id: int) -> Booking:
    """
    Re-reads a booking with a row lock. Call it inside transaction.atomic().

    Backends without SELECT ... FOR UPDATE (SQLite) ignore the lock.
    """
    return Booking.objects.select_for_update().get(pk=booking_id)


def create_booking(
    *,
    hotel: "Hotel",
    check_in: date,
    check_out: date,
    guest_name: str,
    guest_email: str,
    guests: int = 1,
    rooms: int = 1,
    guest_phone: str = "",
    user: "CustomUser | None" = None,
    payment_method: str = "",
    special_requests: str = "",
    status: str = Booking.Status.CONFIRMED,
) -> Booking:
    """
    Creates a booking for a hotel and queues the confirmation message.

    The price is the hotel's nightly price times nights times rooms. A
    `pending` booking is held for BOOKING_HOLD_MINUTES before the periodic
    task cancels it.
    """
    if not hotel.is_active:
        raise HotelUnavailableError()
    if status not in (Booking.Status.PENDING, Booking.Status.CONFIRMED):
        raise DomainError("A new booking can only be pending or confirmed.")

    now = timezone.now()
    extra: dict = {}
    if status == Booking.Status.PENDING:
        extra["expires_at"] = now + timezone.timedelta(minutes=settings.HOTELHUB["BOOKING_HOLD_MINUTES"])
    else:
        extra["confirmed_at"] = now

    with transaction.atomic():
        booking = Booking.objects.create(
            user=user,
            hotel=hotel,
            check_in=check_in,
            check_out=check_out,
            guests=guests,
            rooms=rooms,
            guest_name=guest_name,
            guest_email=guest_email,
            guest_phone=guest_phone,
            payment_method=payment_method,
            special_requests=special_requests,
            status=status,
            **extra,
        )

    logger.info(
        f"Booking {booking.booking_code} created at {booking.hotel_name} "
        f"({booking.check_in}..{booking.check_out}, {booking.rooms} room(s)), total {booking.total_price}"
    )

    from .tasks import notify_booking_created

    _dispatch(notify_booking_created, booking.id)
    return booking


def cancel_booking(booking: Booking, *, source: str, reason: str = "") -> Booking:
    booking.mark_cancelled(source, reason)
    logger.info(f"Booking {booking.booking_code} cancelled by {source}")

    from .tasks import notify_booking_cancelled

    _dispatch(notify_booking_cancelled, booking.id)
    return booking


def change_status(booking: Booking, status: str, *, source: str = Booking.CancellationSource.HOTEL) -> Booking:
    """Moves a booking along its lifecycle, refusing any change the lifecycle forbids."""

    if status == booking.status:
        return booking
    if status == Booking.Status.CANCELLED:
        return cancel_booking(booking, source=source)
    handlers = {
        Booking.Status.CONFIRMED: booking.mark_confirmed,
        Booking.Status.CHECKED_IN: booking.mark_checked_in,
        Booking.Status.COMPLETED: booking.mark_completed,
    }
    handler = handlers.get(status)
    if handler is None:
        # Only PENDING is left, and nothing moves back to it
        booking.transition_to(status)
    else:
        handler()
    logger.info(f"Booking {booking.booking_code} moved to {booking.status}")
    return booking


def booking_stats(queryset: QuerySet | None = None) -> dict[str, int]:
    """Counts for the "My bookings" header: total, upcoming, completed and cancelled."""

    if queryset is None:
        queryset = Booking.objects.all()
    return queryset.aggregate(
        total=Count("id"),
        upcoming=Count("id", filter=Q(status=Booking.Status.CONFIRMED)),
        completed=Count("id", filter=Q(status=Booking.Status.COMPLETED)),
        cancelled=Count("id", filter=Q(status=Booking.Status.CANCELLED)),
    )


def _dispatch(task, *args) -> None:
    """Queues a notification task. A broker outage must not fail the booking itself."""

    try:
        task.delay(*args)
    except Exception as e:
        logger.warning(f"Could not queue {task.name} for {args}: {e}", exc_info=True)
