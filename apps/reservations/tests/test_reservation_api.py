"""Integration tests for reservation API endpoints."""

from __future__ import annotations

from datetime import date, timedelta
from decimal import Decimal

from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from apps.hotels.models import Hotel
from apps.reservations.models import Reservation
from apps.rooms.models import Room, RoomType
from apps.users.models import User


class ReservationAPITests(APITestCase):
    """Covers creation, conflicts, visibility and the front desk lifecycle."""

    def setUp(self) -> None:
        self.guest = User.objects.create_user(email="guest@example.com", password="GuestPass123")
        self.other_guest = User.objects.create_user(email="other@example.com", password="GuestPass123")
        self.staff = User.objects.create_user(
            email="desk@example.com",
            password="DeskPass123",
            role=User.RoleChoices.STAFF,
        )
        hotel = Hotel.objects.create(name="Ocean View Resort", location="Beachfront", price=Decimal("89.00"))
        room_type = RoomType.objects.create(name="Deluxe")
        self.room = Room.objects.create(
            hotel=hotel, room_type=room_type, room_number="201", price_per_night=Decimal("130.00"), capacity=3
        )
        self.check_in = date.today() + timedelta(days=1)
        self.client.force_authenticate(self.guest)
        self.list_url = reverse("reservation-list")

    def _payload(self, check_in: date, check_out: date, **extra) -> dict:
        return {
            "room": self.room.id,
            "check_in_date": str(check_in),
            "check_out_date": str(check_out),
            "number_of_guests": 2,
            **extra,
        }

    def _reserve(self, guest: User, offset: int = 0) -> Reservation:
        check_in = self.check_in + timedelta(days=offset)
        return Reservation.objects.create(
            guest=guest,
            room=self.room,
            check_in_date=check_in,
            check_out_date=check_in + timedelta(days=2),
        )

    def test_guest_can_create_reservation(self) -> None:
        response = self.client.post(
            self.list_url, self._payload(self.check_in, self.check_in + timedelta(days=3)), format="json"
        )

        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        self.assertEqual(response.data["status"], Reservation.Status.CONFIRMED)
        self.assertEqual(response.data["guest"]["email"], self.guest.email)
        self.assertEqual(response.data["room"]["room_number"], "201")
        self.assertEqual(response.data["nights"], 3)

    def test_prevent_double_booking_on_overlap(self) -> None:
        first = self.client.post(
            self.list_url, self._payload(self.check_in, self.check_in + timedelta(days=2)), format="json"
        )
        self.assertEqual(first.status_code, status.HTTP_201_CREATED, first.data)

        conflict = self.client.post(
            self.list_url,
            self._payload(self.check_in + timedelta(days=1), self.check_in + timedelta(days=3)),
            format="json",
        )

        self.assertEqual(conflict.status_code, status.HTTP_400_BAD_REQUEST, conflict.data)
        self.assertIn("Room is not available for the selected dates", str(conflict.data["non_field_errors"]))
        self.assertEqual(Reservation.objects.count(), 1)

    def test_invalid_dates_and_capacity(self) -> None:
        inverted = self.client.post(self.list_url, self._payload(self.check_in, self.check_in), format="json")
        crowded = self.client.post(
            self.list_url,
            self._payload(self.check_in, self.check_in + timedelta(days=1), number_of_guests=5),
            format="json",
        )

        self.assertEqual(inverted.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(crowded.status_code, status.HTTP_400_BAD_REQUEST)

    def test_guest_cannot_reserve_for_someone_else(self) -> None:
        response = self.client.post(
            self.list_url,
            self._payload(self.check_in, self.check_in + timedelta(days=1), guest=self.other_guest.id),
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_staff_can_reserve_on_behalf_of_guest(self) -> None:
        self.client.force_authenticate(self.staff)
        response = self.client.post(
            self.list_url,
            self._payload(self.check_in, self.check_in + timedelta(days=1), guest=self.other_guest.id),
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        self.assertEqual(response.data["guest"]["email"], self.other_guest.email)

    def test_guests_see_only_their_reservations(self) -> None:
        own = self._reserve(self.guest)
        foreign = self._reserve(self.other_guest, offset=5)

        response = self.client.get(self.list_url)
        self.assertEqual([row["id"] for row in response.data["results"]], [own.id])
        detail = self.client.get(reverse("reservation-detail", args=[foreign.id]))
        self.assertEqual(detail.status_code, status.HTTP_404_NOT_FOUND)

        self.client.force_authenticate(self.staff)
        response = self.client.get(self.list_url)
        self.assertEqual(response.data["count"], 2)

    def test_owner_can_cancel(self) -> None:
        reservation = self._reserve(self.guest)

        response = self.client.post(reverse("reservation-cancel", args=[reservation.id]))

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(response.data["status"], Reservation.Status.CANCELLED)

        again = self.client.post(reverse("reservation-cancel", args=[reservation.id]))
        self.assertEqual(again.status_code, status.HTTP_400_BAD_REQUEST)

    def test_check_in_and_out_require_staff(self) -> None:
        reservation = self._reserve(self.guest)

        forbidden = self.client.post(reverse("reservation-check-in", args=[reservation.id]))
        self.assertEqual(forbidden.status_code, status.HTTP_403_FORBIDDEN)

        self.client.force_authenticate(self.staff)
        checked_in = self.client.post(reverse("reservation-check-in", args=[reservation.id]))
        self.assertEqual(checked_in.status_code, status.HTTP_200_OK, checked_in.data)
        self.assertEqual(checked_in.data["status"], Reservation.Status.CHECKED_IN)
        self.assertEqual(checked_in.data["staff"]["email"], self.staff.email)

        cancel = self.client.post(reverse("reservation-cancel", args=[reservation.id]))
        self.assertEqual(cancel.status_code, status.HTTP_400_BAD_REQUEST)

        checked_out = self.client.post(reverse("reservation-check-out", args=[reservation.id]))
        self.assertEqual(checked_out.status_code, status.HTTP_200_OK, checked_out.data)
        self.assertEqual(checked_out.data["status"], Reservation.Status.CHECKED_OUT)

    def test_availability_endpoint(self) -> None:
        self._reserve(self.guest)
        self.client.force_authenticate(None)
        url = reverse("reservation-availability")

        busy = self.client.get(
            url,
            {
                "room": self.room.id,
                "check_in_date": str(self.check_in + timedelta(days=1)),
                "check_out_date": str(self.check_in + timedelta(days=4)),
            },
        )
        free = self.client.get(
            url,
            {
                "room": self.room.id,
                "check_in_date": str(self.check_in + timedelta(days=2)),
                "check_out_date": str(self.check_in + timedelta(days=4)),
            },
        )

        self.assertEqual(busy.status_code, status.HTTP_200_OK, busy.data)
        self.assertFalse(busy.data["available"])
        self.assertTrue(free.data["available"])

    def test_anonymous_cannot_list(self) -> None:
        self.client.force_authenticate(None)
        response = self.client.get(self.list_url)
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)
