"""Booking domain models for HotelHub."""

from __future__ import annotations

import secrets
from decimal import Decimal

from django.conf import settings  # type: ignore
from django.core.exceptions import ValidationError  # type: ignore
from django.db import models, transaction  # type: ignore
from django.utils import timezone  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore

from shared.domain.base import InvalidStatusTransition
from shared.domain.value_objects import DateRange, Money


class Booking(models.Model):
    """A hotel level booking made from the mobile app."""

    class Status(models.TextChoices):
        PENDING = "pending", _("Pending payment")
        CONFIRMED = "confirmed", _("Confirmed")
        CHECKED_IN = "checked_in", _("Checked in")
        COMPLETED = "completed", _("Completed")
        CANCELLED = "cancelled", _("Cancelled")

    class CancellationSource(models.TextChoices):
        GUEST = "guest", _("Guest")
        HOTEL = "hotel", _("Hotel")
        SYSTEM = "system", _("System")

    TRANSITIONS: dict[str, tuple[str, ...]] = {
        Status.PENDING: (Status.CONFIRMED, Status.CANCELLED),
        Status.CONFIRMED: (Status.CHECKED_IN, Status.COMPLETED, Status.CANCELLED),
        Status.CHECKED_IN: (Status.COMPLETED, Status.CANCELLED),
        Status.COMPLETED: (),
        Status.CANCELLED: (),
    }

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="bookings",
    )
    hotel = models.ForeignKey(
        "hotels.Hotel",
        on_delete=models.PROTECT,
        related_name="bookings",
    )
    booking_code = models.CharField(max_length=12, unique=True, editable=False)
    hotel_name = models.CharField(max_length=255, help_text=_("Hotel name at the time of booking."))
    location = models.CharField(max_length=255, blank=True)
    check_in = models.DateField()
    check_out = models.DateField()
    guests = models.PositiveSmallIntegerField(default=1)
    rooms = models.PositiveSmallIntegerField(default=1)
    status = models.CharField(
        max_length=20,
        choices=Status.choices,
        default=Status.CONFIRMED,
    )
    nightly_rate = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        default=Decimal("0.00"),
        help_text=_("Hotel price per room and night at the time of booking."),
    )
    total_nights = models.PositiveSmallIntegerField(default=1)
    total_price = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0.00"))
    currency = models.CharField(max_length=3, default="USD")
    payment_method = models.CharField(max_length=50, blank=True)
    guest_name = models.CharField(max_length=255)
    guest_email = models.EmailField()
    guest_phone = models.CharField(max_length=30, blank=True)
    special_requests = models.TextField(blank=True)
    expires_at = models.DateTimeField(
        null=True,
        blank=True,
        help_text=_("Hold timeout of a pending booking, after which the system cancels it."),
    )
    confirmed_at = models.DateTimeField(null=True, blank=True)
    checked_in_at = models.DateTimeField(null=True, blank=True)
    completed_at = models.DateTimeField(null=True, blank=True)
    cancelled_at = models.DateTimeField(null=True, blank=True)
    cancellation_source = models.CharField(
        max_length=20,
        choices=CancellationSource.choices,
        blank=True,
    )
    cancellation_reason = models.CharField(max_length=255, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Booking")
        verbose_name_plural = _("Bookings")
        ordering = ["-created_at", "-id"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(check_out__gt=models.F("check_in")),
                name="booking_valid_dates",
            ),
        ]
        indexes = [
            models.Index(fields=["hotel", "check_in", "check_out"], name="booking_hotel_dates_idx"),
            models.Index(fields=["status"], name="booking_status_idx"),
            models.Index(fields=["guest_email"], name="booking_guest_email_idx"),
        ]

    def __str__(self) -> str:
        return f"Booking #{self.booking_code} at {self.hotel_name}"

    @property
    def stay(self) -> DateRange:
        return DateRange(self.check_in, self.check_out)

    def clean(self) -> None:
        try:
            stay = self.stay
        except ValueError:
            raise ValidationError(_("Check-out date must be after check-in date."))
        if self.rooms < 1 or self.guests < 1:
            raise ValidationError(_("A booking needs at least one guest and one room."))
        self.total_nights = stay.nights

    def recalculate_totals(self) -> None:
        """Snapshots the hotel's price and recomputes price x nights x rooms."""
        self.clean()
        self.nightly_rate = self.hotel.price
        self.currency = self.hotel.currency
        total = Money(self.nightly_rate, self.currency) * self.total_nights * self.rooms
        self.total_price = total.amount

    def save(self, *args, **kwargs):  # type: ignore
        with transaction.atomic():
            creating = self._state.adding
            if creating and not self.booking_code:
                self.booking_code = self.generate_booking_code()
            if creating:
                self.hotel_name = self.hotel_name or self.hotel.name
                self.location = self.location or self.hotel.location
                self.recalculate_totals()
            super().save(*args, **kwargs)

    @staticmethod
    def generate_booking_code() -> str:
        return secrets.token_hex(4).upper()

    # --- Lifecycle --------------------------------------------------------------
    def can_transition_to(self, status: str) -> bool:
        return status in self.TRANSITIONS.get(self.status, ())

    def transition_to(self, status: str, **changes) -> None:
        if not self.can_transition_to(status):
            raise InvalidStatusTransition(self.status, status, entity="Booking")
        self.status = status
        for field, value in changes.items():
            setattr(self, field, value)
        self.save(update_fields=["status", *changes.keys(), "updated_at"])

    def mark_confirmed(self) -> None:
        self.transition_to(self.Status.CONFIRMED, confirmed_at=timezone.now(), expires_at=None)

    def mark_checked_in(self) -> None:
        self.transition_to(self.Status.CHECKED_IN, checked_in_at=timezone.now())

    def mark_completed(self) -> None:
        self.transition_to(self.Status.COMPLETED, completed_at=timezone.now())

    def mark_cancelled(self, source: str, reason: str = "") -> None:
        self.transition_to(
            self.Status.CANCELLED,
            cancellation_source=source,
            cancellation_reason=reason[:255],
            cancelled_at=timezone.now(),
        )

    def should_expire(self) -> bool:
        return bool(self.expires_at and timezone.now() > self.expires_at and self.status == self.Status.PENDING)
