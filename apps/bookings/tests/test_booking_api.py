"""Integration tests for booking API endpoints."""

from __future__ import annotations

from datetime import date, timedelta
from decimal import Decimal

from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from apps.bookings.models import Booking
from apps.hotels.models import Hotel
from apps.notifications.models import Notification
from apps.users.models import User


class BookingAPITests(APITestCase):
    """Covers creation, pricing, visibility and the status lifecycle of bookings."""

    def setUp(self) -> None:
        self.guest = User.objects.create_user(
            email="guest@example.com",
            phone="+15550001000",
            password="GuestPass123",
            first_name="Ann",
            last_name="Guest",
        )
        self.other_guest = User.objects.create_user(email="other@example.com", password="GuestPass123")
        self.staff = User.objects.create_user(
            email="desk@example.com",
            password="DeskPass123",
            role=User.RoleChoices.STAFF,
        )
        self.admin = User.objects.create_user(
            email="admin@example.com",
            password="AdminPass123",
            role=User.RoleChoices.ADMIN,
        )
        self.hotel = Hotel.objects.create(
            name="Grand Palace Hotel",
            location="Downtown",
            price=Decimal("120.00"),
            rating=Decimal("4.8"),
        )
        self.client.force_authenticate(self.guest)
        self.list_url = reverse("booking-list")
        self.check_in = date.today() + timedelta(days=7)

    def _payload(self, nights: int = 3, **extra) -> dict:
        return {
            "hotel": self.hotel.id,
            "check_in": str(self.check_in),
            "check_out": str(self.check_in + timedelta(days=nights)),
            "guests": 2,
            "rooms": 1,
            **extra,
        }

    def _book(self, user: User | None = None, status_: str = Booking.Status.CONFIRMED) -> Booking:
        return Booking.objects.create(
            user=user or self.guest,
            hotel=self.hotel,
            check_in=self.check_in,
            check_out=self.check_in + timedelta(days=2),
            guest_name="Ann Guest",
            guest_email="guest@example.com",
            status=status_,
        )

    def test_guest_can_create_booking(self) -> None:
        response = self.client.post(self.list_url, self._payload(nights=3, rooms=2), format="json")

        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        booking = Booking.objects.get()
        self.assertEqual(booking.user, self.guest)
        self.assertEqual(booking.status, Booking.Status.CONFIRMED)
        self.assertEqual(booking.total_nights, 3)
        self.assertEqual(booking.total_price, Decimal("720.00"))
        self.assertEqual(booking.hotel_name, "Grand Palace Hotel")
        self.assertEqual(booking.location, "Downtown")
        self.assertEqual(len(booking.booking_code), 8)

    def test_contact_details_default_to_account(self) -> None:
        response = self.client.post(self.list_url, self._payload(), format="json")

        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        self.assertEqual(response.data["guest_name"], "Ann Guest")
        self.assertEqual(response.data["guest_email"], "guest@example.com")
        self.assertEqual(response.data["guest_phone"], "+15550001000")

    def test_booking_queues_confirmation_notification(self) -> None:
        self.client.post(self.list_url, self._payload(), format="json")

        notification = Notification.objects.get(user=self.guest)
        self.assertIn("confirmed", notification.subject)

    def test_pending_booking_gets_payment_hold(self) -> None:
        response = self.client.post(self.list_url, self._payload(status="pending"), format="json")

        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        booking = Booking.objects.get()
        self.assertEqual(booking.status, Booking.Status.PENDING)
        self.assertIsNotNone(booking.expires_at)
        self.assertIsNone(booking.confirmed_at)

    def test_invalid_requests_are_rejected(self) -> None:
        inverted = self.client.post(self.list_url, self._payload(nights=0), format="json")
        no_rooms = self.client.post(self.list_url, self._payload(rooms=0), format="json")
        completed = self.client.post(self.list_url, self._payload(status="completed"), format="json")

        self.assertEqual(inverted.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(no_rooms.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(completed.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertFalse(Booking.objects.exists())

    def test_inactive_hotel_cannot_be_booked(self) -> None:
        self.hotel.is_active = False
        self.hotel.save(update_fields=["is_active"])

        response = self.client.post(self.list_url, self._payload(), format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_anonymous_cannot_book(self) -> None:
        self.client.force_authenticate(None)
        response = self.client.post(self.list_url, self._payload(), format="json")
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_users_see_only_their_bookings(self) -> None:
        own = self._book()
        foreign = self._book(self.other_guest)

        response = self.client.get(self.list_url)
        self.assertEqual([row["id"] for row in response.data["results"]], [own.id])
        self.assertEqual(
            self.client.get(reverse("booking-detail", args=[foreign.id])).status_code,
            status.HTTP_404_NOT_FOUND,
        )

        self.client.force_authenticate(self.admin)
        response = self.client.get(self.list_url, {"status": "confirmed"})
        self.assertEqual(response.data["count"], 2)

    def test_owner_can_cancel_booking(self) -> None:
        booking = self._book()

        response = self.client.post(
            reverse("booking-cancel", args=[booking.id]), {"reason": "Change of plans"}, format="json"
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        booking.refresh_from_db()
        self.assertEqual(booking.status, Booking.Status.CANCELLED)
        self.assertEqual(booking.cancellation_source, Booking.CancellationSource.GUEST)
        self.assertEqual(booking.cancellation_reason, "Change of plans")
        self.assertTrue(Notification.objects.filter(user=self.guest, subject__contains="cancelled").exists())

        again = self.client.put(reverse("booking-cancel", args=[booking.id]))
        self.assertEqual(again.status_code, status.HTTP_400_BAD_REQUEST)

    def test_only_owner_or_admin_can_cancel(self) -> None:
        booking = self._book()

        self.client.force_authenticate(self.staff)
        desk = self.client.post(reverse("booking-cancel", args=[booking.id]))
        self.assertEqual(desk.status_code, status.HTTP_403_FORBIDDEN)
        booking.refresh_from_db()
        self.assertEqual(booking.status, Booking.Status.CONFIRMED)

        self.client.force_authenticate(self.other_guest)
        foreign = self.client.post(reverse("booking-cancel", args=[booking.id]))
        self.assertEqual(foreign.status_code, status.HTTP_404_NOT_FOUND)

        self.client.force_authenticate(self.admin)
        response = self.client.post(reverse("booking-cancel", args=[booking.id]))
        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        booking.refresh_from_db()
        self.assertEqual(booking.status, Booking.Status.CANCELLED)
        self.assertEqual(booking.cancellation_source, Booking.CancellationSource.HOTEL)

    def test_status_actions_follow_lifecycle(self) -> None:
        booking = self._book(status_=Booking.Status.PENDING)

        forbidden = self.client.post(reverse("booking-confirm", args=[booking.id]))
        self.assertEqual(forbidden.status_code, status.HTTP_403_FORBIDDEN)

        self.client.force_authenticate(self.staff)
        premature = self.client.post(reverse("booking-check-in", args=[booking.id]))
        self.assertEqual(premature.status_code, status.HTTP_400_BAD_REQUEST)

        for action, expected in (
            ("booking-confirm", Booking.Status.CONFIRMED),
            ("booking-check-in", Booking.Status.CHECKED_IN),
            ("booking-complete", Booking.Status.COMPLETED),
        ):
            response = self.client.post(reverse(action, args=[booking.id]))
            self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
            self.assertEqual(response.data["status"], expected)

        self.client.force_authenticate(self.admin)
        cancel = self.client.post(reverse("booking-cancel", args=[booking.id]))
        self.assertEqual(cancel.status_code, status.HTTP_400_BAD_REQUEST)

    def test_admin_update_recalculates_price(self) -> None:
        booking = self._book()

        guest_attempt = self.client.patch(reverse("booking-detail", args=[booking.id]), {"rooms": 2}, format="json")
        self.assertEqual(guest_attempt.status_code, status.HTTP_403_FORBIDDEN)

        self.client.force_authenticate(self.admin)
        response = self.client.patch(
            reverse("booking-detail", args=[booking.id]),
            {"rooms": 2, "status": "checked_in"},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        booking.refresh_from_db()
        self.assertEqual(booking.total_price, Decimal("480.00"))
        self.assertEqual(booking.status, Booking.Status.CHECKED_IN)

        backwards = self.client.patch(
            reverse("booking-detail", args=[booking.id]), {"status": "pending"}, format="json"
        )
        self.assertEqual(backwards.status_code, status.HTTP_400_BAD_REQUEST)

    def test_stats_are_scoped_to_requester(self) -> None:
        self._book()
        self._book(status_=Booking.Status.COMPLETED)
        self._book(status_=Booking.Status.CANCELLED)
        self._book(self.other_guest)

        response = self.client.get(reverse("booking-stats"))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(
            response.data,
            {"total": 3, "upcoming": 1, "completed": 1, "cancelled": 1},
        )
