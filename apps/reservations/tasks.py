"""Celery tasks for the reservation domain."""

from __future__ import annotations

import logging

from celery import shared_task  # type: ignore
from django.utils import timezone  # type: ignore

from .models import Reservation
from .services import mark_no_show

logger = logging.getLogger(__name__)


@shared_task(name="reservations.mark_no_shows")
def mark_no_shows() -> dict[str, int]:
    """
    Marks confirmed reservations as no-show once their check-in day has passed.

    Runs hourly through Celery Beat.

    Returns:
        dict: {"no_show": number of reservations updated}
    """
    today = timezone.localdate()
    updated = 0

    overdue = Reservation.objects.filter(
        status=Reservation.Status.CONFIRMED,
        check_in_date__lt=today,
    ).select_related("guest", "room")

    for reservation in overdue:
        try:
            mark_no_show(reservation, today=today)
            updated += 1
        except Exception as e:
            logger.error(f"Error marking reservation {reservation.id} as no-show: {e}", exc_info=True)

    if updated > 0:
        logger.info(f"Marked {updated} reservations as no-show")

    return {"no_show": updated}
