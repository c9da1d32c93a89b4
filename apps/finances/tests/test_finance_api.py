"""API tests for payments and financial reports."""

from __future__ import annotations

from datetime import date, timedelta
from decimal import Decimal

from django.urls import reverse
from django.utils import timezone
from rest_framework import status
from rest_framework.test import APITestCase

from apps.bookings.models import Booking
from apps.finances.models import Payment
from apps.hotels.models import Hotel
from apps.users.models import User


class FinanceAPITests(APITestCase):
    def setUp(self) -> None:
        self.guest = User.objects.create_user(email="guest@example.com", password="GuestPass123")
        self.other = User.objects.create_user(email="other@example.com", password="GuestPass123")
        self.staff = User.objects.create_user(
            email="desk@example.com", password="DeskPass123", role=User.RoleChoices.STAFF
        )
        self.admin = User.objects.create_user(
            email="admin@example.com", password="AdminPass123", role=User.RoleChoices.ADMIN
        )
        self.palace = Hotel.objects.create(name="Grand Palace Hotel", location="Downtown", price=Decimal("100.00"))
        self.lodge = Hotel.objects.create(name="Mountain Lodge", location="Hillside", price=Decimal("50.00"))
        self.check_in = date.today() + timedelta(days=3)

    def _book(self, hotel: Hotel, status_: str, *, user: User | None = None, nights: int = 2, **extra) -> Booking:
        return Booking.objects.create(
            user=user or self.guest,
            hotel=hotel,
            check_in=self.check_in,
            check_out=self.check_in + timedelta(days=nights),
            guest_name="Guest",
            guest_email="guest@example.com",
            status=status_,
            **extra,
        )

    def test_guest_pays_own_pending_booking(self) -> None:
        booking = self._book(self.palace, Booking.Status.PENDING)
        self.client.force_authenticate(self.guest)

        response = self.client.post(
            reverse("payment-list"), {"booking": booking.id, "method": "card"}, format="json"
        )

        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        self.assertEqual(response.data["status"], Payment.Status.COMPLETED)
        self.assertEqual(Decimal(response.data["amount"]), Decimal("200.00"))
        self.assertEqual(response.data["channel"], Payment.Channel.ONLINE)
        self.assertTrue(response.data["transaction_id"].startswith("TXN-"))
        booking.refresh_from_db()
        self.assertEqual(booking.status, Booking.Status.CONFIRMED)
        self.assertEqual(booking.payment_method, "card")

    def test_guest_cannot_pay_foreign_or_cancelled_booking(self) -> None:
        foreign = self._book(self.palace, Booking.Status.CONFIRMED, user=self.other)
        cancelled = self._book(self.palace, Booking.Status.CANCELLED)
        self.client.force_authenticate(self.guest)

        response = self.client.post(reverse("payment-list"), {"booking": foreign.id, "method": "card"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

        response = self.client.post(
            reverse("payment-list"), {"booking": cancelled.id, "method": "card"}, format="json"
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_front_desk_payment_records_staff(self) -> None:
        booking = self._book(self.lodge, Booking.Status.CONFIRMED, user=self.other)
        self.client.force_authenticate(self.staff)

        response = self.client.post(
            reverse("payment-list"), {"booking": booking.id, "method": "cash", "amount": "40.00"}, format="json"
        )

        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        payment = Payment.objects.get()
        self.assertEqual(payment.channel, Payment.Channel.FRONT_DESK)
        self.assertEqual(payment.staff, self.staff)
        self.assertEqual(payment.amount, Decimal("40.00"))

    def test_payments_are_listed_per_owner(self) -> None:
        own = self._book(self.palace, Booking.Status.CONFIRMED)
        foreign = self._book(self.palace, Booking.Status.CONFIRMED, user=self.other)
        Payment.objects.create(booking=own, amount=Decimal("10.00"), method="card")
        Payment.objects.create(booking=foreign, amount=Decimal("10.00"), method="card")
        self.client.force_authenticate(self.guest)

        response = self.client.get(reverse("payment-list"), {"booking": own.id})

        self.assertEqual(response.data["count"], 1)
        self.assertEqual(response.data["results"][0]["booking"], own.id)
        response = self.client.get(reverse("payment-list"), {"booking": foreign.id})
        self.assertEqual(response.data["count"], 0)

    def test_refund_is_admin_only(self) -> None:
        booking = self._book(self.palace, Booking.Status.CONFIRMED)
        payment = Payment.objects.create(
            booking=booking, amount=Decimal("200.00"), method="card", notes="Paid online"
        )
        payment.mark_completed(transaction_id="TXN-1")
        url = reverse("payment-refund", args=[payment.id])

        self.client.force_authenticate(self.guest)
        self.assertEqual(self.client.post(url).status_code, status.HTTP_403_FORBIDDEN)

        self.client.force_authenticate(self.admin)
        response = self.client.post(url)
        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(response.data["status"], Payment.Status.REFUNDED)
        self.assertEqual(response.data["notes"], "Paid online (Refunded)")

        again = self.client.post(url)
        self.assertEqual(again.status_code, status.HTTP_400_BAD_REQUEST)

    def test_summary(self) -> None:
        self._book(self.palace, Booking.Status.COMPLETED)  # 200
        self._book(self.lodge, Booking.Status.COMPLETED, nights=1)  # 50
        self._book(self.palace, Booking.Status.CONFIRMED)  # 200
        self._book(self.lodge, Booking.Status.PENDING)  # 100
        self._book(self.lodge, Booking.Status.CANCELLED, nights=3)  # 150
        self.client.force_authenticate(self.admin)

        response = self.client.get(reverse("finance-summary"))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["total_revenue"], Decimal("250.00"))
        self.assertEqual(response.data["pending_revenue"], Decimal("300.00"))
        self.assertEqual(response.data["cancelled_revenue"], Decimal("150.00"))
        self.assertEqual(
            response.data["revenue_by_hotel"],
            {"Grand Palace Hotel": Decimal("200.00"), "Mountain Lodge": Decimal("50.00")},
        )
        self.assertEqual(
            response.data["revenue_by_month"],
            {timezone.localdate().strftime("%Y-%m"): Decimal("250.00")},
        )

    def test_report_and_payment_methods(self) -> None:
        self._book(self.palace, Booking.Status.COMPLETED, payment_method="card")
        self._book(self.palace, Booking.Status.COMPLETED, payment_method="card")
        self._book(self.lodge, Booking.Status.COMPLETED)
        self._book(self.lodge, Booking.Status.CONFIRMED, payment_method="cash")
        self.client.force_authenticate(self.admin)

        report = self.client.get(
            reverse("finance-report"),
            {"start_date": str(timezone.localdate() - timedelta(days=1)), "end_date": str(timezone.localdate())},
        )
        self.assertEqual(report.status_code, status.HTTP_200_OK, report.data)
        self.assertEqual(report.data["totals"]["total_bookings"], 3)
        self.assertEqual(report.data["totals"]["total_revenue"], Decimal("500.00"))
        self.assertEqual(report.data["totals"]["average_booking_value"], Decimal("166.67"))
        self.assertEqual(report.data["hotel_performance"]["Grand Palace Hotel"]["bookings"], 2)
        self.assertEqual(len(report.data["bookings"]), 3)

        empty = self.client.get(reverse("finance-report"), {"start_date": str(timezone.localdate() + timedelta(days=1))})
        self.assertEqual(empty.data["totals"]["total_bookings"], 0)

        invalid = self.client.get(reverse("finance-report"), {"start_date": "yesterday"})
        self.assertEqual(invalid.status_code, status.HTTP_400_BAD_REQUEST)

        reversed_window = self.client.get(
            reverse("finance-report"),
            {"start_date": str(timezone.localdate()), "end_date": str(timezone.localdate() - timedelta(days=1))},
        )
        self.assertEqual(reversed_window.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("end_date", reversed_window.data)

        methods = self.client.get(reverse("finance-payment-methods"))
        self.assertEqual(
            methods.data,
            {
                "Unknown": {"count": 1, "amount": Decimal("100.00")},
                "card": {"count": 2, "amount": Decimal("400.00")},
            },
        )

    def test_reports_are_admin_only(self) -> None:
        self.client.force_authenticate(self.staff)
        for name in ("finance-summary", "finance-report", "finance-payment-methods"):
            self.assertEqual(self.client.get(reverse(name)).status_code, status.HTTP_403_FORBIDDEN)
