"""Celery tasks for the booking domain."""

from __future__ import annotations

import logging

from celery import shared_task  # type: ignore
from django.db import transaction  # type: ignore
from django.utils import timezone  # type: ignore

from .models import Booking
from .services import lock_booking

logger = logging.getLogger(__name__)


# ============================================================================
# PERIODIC TASKS (scheduled by Celery Beat)
# ============================================================================

@shared_task(name="bookings.expire_pending_bookings")
def expire_pending_bookings() -> dict[str, int]:
    """
    Cancels pending bookings whose payment hold has run out.

    Runs every minute through Celery Beat. Each booking is re-read under a row
    lock, so a payment that confirmed it in the meantime wins.

    Returns:
        dict: {"expired": number of cancelled bookings}
    """
    now = timezone.now()
    expired_count = 0

    candidate_ids = list(
        Booking.objects.filter(
            status=Booking.Status.PENDING,
            expires_at__lte=now,
        ).values_list("id", flat=True)
    )

    for booking_id in candidate_ids:
        try:
            with transaction.atomic():
                booking = lock_booking(booking_id)
                if not booking.should_expire():
                    continue
                booking.mark_cancelled(
                    Booking.CancellationSource.SYSTEM,
                    "Payment was not received before the hold expired.",
                )
            notify_booking_cancelled.delay(booking.id)
            expired_count += 1
            logger.info(f"Booking {booking.booking_code} expired automatically. Guest: {booking.guest_email}")
        except Exception as e:
            logger.error(f"Error expiring booking {booking_id}: {e}", exc_info=True)

    if expired_count > 0:
        logger.info(f"Expired {expired_count} pending bookings")

    return {"expired": expired_count}


@shared_task(name="bookings.complete_finished_bookings")
def complete_finished_bookings() -> dict[str, int]:
    """
    Completes confirmed and checked-in bookings once the check-out date has passed.

    Runs hourly. A booking checking out today stays open until tomorrow.

    Returns:
        dict: {"completed": number of completed bookings}
    """
    today = timezone.localdate()
    completed_count = 0
    open_statuses = (Booking.Status.CONFIRMED, Booking.Status.CHECKED_IN)

    candidate_ids = list(
        Booking.objects.filter(
            status__in=open_statuses,
            check_out__lt=today,
        ).values_list("id", flat=True)
    )

    for booking_id in candidate_ids:
        try:
            with transaction.atomic():
                booking = lock_booking(booking_id)
                if booking.status not in open_statuses:
                    continue
                booking.mark_completed()
            notify_booking_completed.delay(booking.id)
            completed_count += 1
            logger.info(f"Booking {booking.booking_code} completed")
        except Exception as e:
            logger.error(f"Error completing booking {booking_id}: {e}", exc_info=True)

    if completed_count > 0:
        logger.info(f"Completed {completed_count} bookings")

    return {"completed": completed_count}


# ============================================================================
# NOTIFICATION TASKS
# ============================================================================

def _notify(booking: Booking, subject: str, message: str) -> bool:
    from apps.notifications.services import queue_notification

    if booking.user is None:
        logger.info(f"[NOTIFICATION] Booking {booking.booking_code} has no user account, skipping")
        return False
    queue_notification(user=booking.user, subject=subject, message=message)
    return True


@shared_task(name="bookings.notify_booking_created")
def notify_booking_created(booking_id: int) -> bool:
    """Booking confirmation (or payment hold notice) for the guest."""
    try:
        booking = Booking.objects.select_related("user").get(id=booking_id)
    except Booking.DoesNotExist:
        logger.error(f"Booking {booking_id} not found for confirmation notification")
        return False

    if booking.status == Booking.Status.PENDING:
        subject = f"Booking #{booking.booking_code} is awaiting payment"
        message = (
            f"Your booking at {booking.hotel_name} from {booking.check_in:%Y-%m-%d} to "
            f"{booking.check_out:%Y-%m-%d} is held until payment is received."
        )
    else:
        subject = f"Booking #{booking.booking_code} confirmed"
        message = (
            f"Your booking at {booking.hotel_name} from {booking.check_in:%Y-%m-%d} to "
            f"{booking.check_out:%Y-%m-%d} is confirmed. Total: {booking.total_price} {booking.currency}."
        )
    return _notify(booking, subject, message)


@shared_task(name="bookings.notify_booking_cancelled")
def notify_booking_cancelled(booking_id: int) -> bool:
    try:
        booking = Booking.objects.select_related("user").get(id=booking_id)
    except Booking.DoesNotExist:
        logger.error(f"Booking {booking_id} not found for cancellation notification")
        return False

    return _notify(
        booking,
        f"Booking #{booking.booking_code} cancelled",
        f"Your booking at {booking.hotel_name} from {booking.check_in:%Y-%m-%d} has been cancelled.",
    )


@shared_task(name="bookings.notify_booking_completed")
def notify_booking_completed(booking_id: int) -> bool:
    try:
        booking = Booking.objects.select_related("user").get(id=booking_id)
    except Booking.DoesNotExist:
        logger.error(f"Booking {booking_id} not found for completion notification")
        return False

    return _notify(
        booking,
        f"Thank you for staying at {booking.hotel_name}",
        f"We hope you enjoyed your stay. Booking #{booking.booking_code} is now complete.",
    )
