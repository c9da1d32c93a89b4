"""Domain services for room reservations."""

from __future__ import annotations

import logging
from datetime import date
from typing import TYPE_CHECKING

from django.db import transaction  # type: ignore
from django.db.models import Q, QuerySet  # type: ignore
from django.db.utils import NotSupportedError  # type: ignore
from django.utils import timezone  # type: ignore

from apps.rooms.models import Room
from shared.domain.base import DomainError
from shared.domain.value_objects import DateRange

from .models import Reservation

if TYPE_CHECKING:  # pragma: no cover - type checking only
    from apps.users.models import CustomUser

logger = logging.getLogger(__name__)


class RoomUnavailableError(DomainError):
    """Raised when a room is busy for the requested dates."""

    default_message = "Room is not available for the selected dates"


class ReservationValidationError(DomainError):
    """Raised for requests that can never be satisfied (bad dates, too many guests)."""


def _lock_queryset_if_possible(queryset):
    """Apply select_for_update when inside transaction.atomic()."""

    if not transaction.get_connection().in_atomic_block:
        return queryset

    try:
        return queryset.select_for_update()
    except NotSupportedError:
        return queryset


def overlap_filter(check_in: date, check_out: date, prefix: str = "") -> Q:
    """Stays overlap when one starts before the other ends, in both directions."""

    return Q(**{f"{prefix}check_in_date__lt": check_out}) & Q(**{f"{prefix}check_out_date__gt": check_in})


def overlapping_reservations(
    room: Room | int,
    check_in: date,
    check_out: date,
    *,
    exclude_reservation_id=None,
) -> QuerySet:
    qs = Reservation.objects.filter(
        room=room,
        status__in=Reservation.BLOCKING_STATUSES,
    ).filter(overlap_filter(check_in, check_out))
    if exclude_reservation_id is not None:
        qs = qs.exclude(pk=exclude_reservation_id)
    return qs


def check_room_availability(
    room: Room | int,
    check_in: date,
    check_out: date,
    *,
    exclude_reservation_id=None,
) -> bool:
    """True when no confirmed or checked-in reservation overlaps [check_in, check_out)."""

    qs = overlapping_reservations(
        room, check_in, check_out, exclude_reservation_id=exclude_reservation_id
    )
    return not _lock_queryset_if_possible(qs).exists()


def ensure_room_is_available(room: Room, check_in: date, check_out: date, *, exclude_reservation_id=None) -> None:
    if not check_room_availability(room, check_in, check_out, exclude_reservation_id=exclude_reservation_id):
        raise RoomUnavailableError()


def available_rooms(check_in: date, check_out: date, queryset: QuerySet | None = None) -> QuerySet:
    """Active rooms without a blocking reservation in the window."""

    if queryset is None:
        queryset = Room.objects.all()
    busy_room_ids = (
        Reservation.objects.filter(status__in=Reservation.BLOCKING_STATUSES)
        .filter(overlap_filter(check_in, check_out))
        .values("room_id")
    )
    return queryset.filter(is_active=True).exclude(pk__in=busy_room_ids)


def create_reservation(
    *,
    guest: "CustomUser",
    room: Room,
    check_in_date: date,
    check_out_date: date,
    number_of_guests: int = 1,
    special_requests: str = "",
    notify: bool = True,
) -> Reservation:
    """Creates a confirmed reservation after validating the stay and the room's availability."""

    try:
        DateRange(check_in_date, check_out_date)
    except ValueError:
        raise ReservationValidationError("Check-out date must be after check-in date.")
    if number_of_guests < 1:
        raise ReservationValidationError("At least one guest is required.")

    with transaction.atomic():
        # Serialise concurrent bookings of the same room on the room row
        room = _lock_queryset_if_possible(Room.objects.filter(pk=room.pk)).select_related("hotel").get()
        if not room.is_active:
            raise ReservationValidationError("Room is not available for booking.")
        if number_of_guests > room.capacity:
            raise ReservationValidationError(
                f"Room {room.room_number} accommodates at most {room.capacity} guests."
            )
        ensure_room_is_available(room, check_in_date, check_out_date)

        reservation = Reservation.objects.create(
            guest=guest,
            room=room,
            check_in_date=check_in_date,
            check_out_date=check_out_date,
            number_of_guests=number_of_guests,
            special_requests=special_requests,
            status=Reservation.Status.CONFIRMED,
        )

    logger.info(
        f"Reservation {reservation.id} created for room {room.room_number} "
        f"({check_in_date}..{check_out_date}), guest {guest.email}"
    )
    if notify:
        _notify_guest(
            reservation,
            subject="Reservation confirmed",
            message=(
                f"Your reservation #{reservation.id} at {room.hotel.name}, room {room.room_number}, "
                f"from {check_in_date:%Y-%m-%d} to {check_out_date:%Y-%m-%d} is confirmed."
            ),
        )
    return reservation


@transaction.atomic
def cancel_reservation(reservation: Reservation) -> Reservation:
    reservation.mark_cancelled()
    logger.info(f"Reservation {reservation.id} cancelled")
    _notify_guest(
        reservation,
        subject="Reservation cancelled",
        message=f"Your reservation #{reservation.id} has been cancelled.",
    )
    return reservation


@transaction.atomic
def check_in_reservation(reservation: Reservation, staff: "CustomUser") -> Reservation:
    reservation.mark_checked_in(staff=staff)
    logger.info(f"Reservation {reservation.id} checked in by staff {staff.id}")
    return reservation


@transaction.atomic
def check_out_reservation(reservation: Reservation, staff: "CustomUser") -> Reservation:
    reservation.mark_checked_out(staff=staff)
    logger.info(f"Reservation {reservation.id} checked out by staff {staff.id}")
    return reservation


def mark_no_show(reservation: Reservation, today: date | None = None) -> Reservation:
    today = today or timezone.localdate()
    if reservation.check_in_date >= today:
        raise ReservationValidationError("A reservation can be marked as no-show only after its check-in date.")
    reservation.mark_no_show()
    logger.info(f"Reservation {reservation.id} marked as no-show")
    return reservation


def _notify_guest(reservation: Reservation, *, subject: str, message: str) -> None:
    from apps.notifications.services import queue_notification  # local import to avoid circular

    queue_notification(user=reservation.guest, subject=subject, message=message)
