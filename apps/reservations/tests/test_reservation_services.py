"""Service level tests for reservation availability and lifecycle."""

from __future__ import annotations

from datetime import date, timedelta
from decimal import Decimal

import pytest

from apps.hotels.models import Hotel
from apps.notifications.models import Notification
from apps.reservations.models import Reservation
from apps.reservations.services import (
    ReservationValidationError,
    RoomUnavailableError,
    cancel_reservation,
    check_in_reservation,
    check_out_reservation,
    check_room_availability,
    create_reservation,
    mark_no_show,
)
from apps.reservations.tasks import mark_no_shows
from apps.rooms.models import Room, RoomType
from apps.users.models import User
from shared.domain.base import InvalidStatusTransition


@pytest.fixture
def guest():
    return User.objects.create_user(email="guest@example.com", password="GuestPass123")


@pytest.fixture
def staff():
    return User.objects.create_user(email="desk@example.com", password="DeskPass123", role=User.RoleChoices.STAFF)


@pytest.fixture
def room():
    hotel = Hotel.objects.create(name="Mountain Lodge", location="Hillside", price=Decimal("95.00"))
    room_type = RoomType.objects.create(name="Standard")
    return Room.objects.create(hotel=hotel, room_type=room_type, room_number="101", capacity=2)


@pytest.fixture
def stay():
    check_in = date.today() + timedelta(days=10)
    return check_in, check_in + timedelta(days=3)


@pytest.mark.django_db
def test_create_reservation_confirms_and_notifies(guest, room, stay):
    reservation = create_reservation(
        guest=guest, room=room, check_in_date=stay[0], check_out_date=stay[1], number_of_guests=2
    )

    assert reservation.status == Reservation.Status.CONFIRMED
    assert reservation.nights == 3
    notification = Notification.objects.get(user=guest)
    assert notification.status == Notification.Status.PENDING
    assert "Mountain Lodge" in notification.message


@pytest.mark.django_db
def test_overlapping_reservation_is_refused(guest, room, stay):
    create_reservation(guest=guest, room=room, check_in_date=stay[0], check_out_date=stay[1])

    with pytest.raises(RoomUnavailableError):
        create_reservation(
            guest=guest,
            room=room,
            check_in_date=stay[0] + timedelta(days=1),
            check_out_date=stay[1] + timedelta(days=1),
        )


@pytest.mark.django_db
def test_availability_window_is_half_open(guest, room, stay):
    create_reservation(guest=guest, room=room, check_in_date=stay[0], check_out_date=stay[1], notify=False)

    assert check_room_availability(room, stay[1], stay[1] + timedelta(days=2))
    assert check_room_availability(room, stay[0] - timedelta(days=2), stay[0])
    assert not check_room_availability(room, stay[0] - timedelta(days=1), stay[0] + timedelta(days=1))


@pytest.mark.django_db
def test_cancelled_reservation_frees_the_room(guest, room, stay):
    reservation = create_reservation(guest=guest, room=room, check_in_date=stay[0], check_out_date=stay[1])
    cancel_reservation(reservation)

    assert reservation.cancelled_at is not None
    assert check_room_availability(room, stay[0], stay[1])
    with pytest.raises(InvalidStatusTransition):
        cancel_reservation(reservation)


@pytest.mark.django_db
def test_capacity_and_inactive_room_are_validated(guest, room, stay):
    with pytest.raises(ReservationValidationError):
        create_reservation(guest=guest, room=room, check_in_date=stay[0], check_out_date=stay[1], number_of_guests=3)

    room.is_active = False
    room.save(update_fields=["is_active"])
    with pytest.raises(ReservationValidationError):
        create_reservation(guest=guest, room=room, check_in_date=stay[0], check_out_date=stay[1])


@pytest.mark.django_db
def test_invalid_dates_are_rejected(guest, room, stay):
    with pytest.raises(ReservationValidationError):
        create_reservation(guest=guest, room=room, check_in_date=stay[1], check_out_date=stay[0])


@pytest.mark.django_db
def test_check_in_and_check_out_flow(guest, staff, room, stay):
    reservation = create_reservation(guest=guest, room=room, check_in_date=stay[0], check_out_date=stay[1])

    with pytest.raises(InvalidStatusTransition):
        check_out_reservation(reservation, staff)

    check_in_reservation(reservation, staff)
    assert reservation.status == Reservation.Status.CHECKED_IN
    assert reservation.staff == staff
    assert reservation.checked_in_at is not None
    # A checked-in guest still occupies the room
    assert not check_room_availability(room, stay[0], stay[1])

    check_out_reservation(reservation, staff)
    reservation.refresh_from_db()
    assert reservation.status == Reservation.Status.CHECKED_OUT
    assert reservation.checked_out_at is not None
    assert check_room_availability(room, stay[0], stay[1])


@pytest.mark.django_db
def test_no_show_only_after_check_in_date(guest, room, stay):
    reservation = create_reservation(guest=guest, room=room, check_in_date=stay[0], check_out_date=stay[1])

    with pytest.raises(ReservationValidationError):
        mark_no_show(reservation, today=stay[0])

    mark_no_show(reservation, today=stay[0] + timedelta(days=1))
    assert reservation.status == Reservation.Status.NO_SHOW


@pytest.mark.django_db
def test_mark_no_shows_task(guest, room):
    yesterday = date.today() - timedelta(days=1)
    overdue = Reservation.objects.create(
        guest=guest, room=room, check_in_date=yesterday - timedelta(days=1), check_out_date=yesterday + timedelta(days=2)
    )
    upcoming = Reservation.objects.create(
        guest=guest, room=room, check_in_date=date.today() + timedelta(days=5), check_out_date=date.today() + timedelta(days=6)
    )

    result = mark_no_shows()

    assert result == {"no_show": 1}
    overdue.refresh_from_db()
    upcoming.refresh_from_db()
    assert overdue.status == Reservation.Status.NO_SHOW
    assert upcoming.status == Reservation.Status.CONFIRMED
