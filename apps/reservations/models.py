"""Reservation domain models for HotelHub."""

from __future__ import annotations

from django.conf import settings  # type: ignore
from django.db import models  # type: ignore
from django.utils import timezone  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore

from shared.domain.base import InvalidStatusTransition
from shared.domain.value_objects import DateRange


class Reservation(models.Model):
    """A guest's stay in a specific room."""

    class Status(models.TextChoices):
        CONFIRMED = "confirmed", _("Confirmed")
        CHECKED_IN = "checked_in", _("Checked in")
        CHECKED_OUT = "checked_out", _("Checked out")
        CANCELLED = "cancelled", _("Cancelled")
        NO_SHOW = "no_show", _("No show")

    # Statuses that occupy the room for the stay dates
    BLOCKING_STATUSES = (Status.CONFIRMED, Status.CHECKED_IN)

    TRANSITIONS: dict[str, tuple[str, ...]] = {
        Status.CONFIRMED: (Status.CHECKED_IN, Status.CANCELLED, Status.NO_SHOW),
        Status.CHECKED_IN: (Status.CHECKED_OUT,),
        Status.CHECKED_OUT: (),
        Status.CANCELLED: (),
        Status.NO_SHOW: (),
    }

    guest = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="reservations",
    )
    room = models.ForeignKey(
        "rooms.Room",
        on_delete=models.PROTECT,
        related_name="reservations",
    )
    staff = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="handled_reservations",
        help_text=_("Front desk member who last checked the guest in or out."),
    )
    check_in_date = models.DateField()
    check_out_date = models.DateField()
    number_of_guests = models.PositiveSmallIntegerField(default=1)
    special_requests = models.TextField(blank=True)
    status = models.CharField(max_length=20, choices=Status.choices, default=Status.CONFIRMED)
    checked_in_at = models.DateTimeField(null=True, blank=True)
    checked_out_at = models.DateTimeField(null=True, blank=True)
    cancelled_at = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Reservation")
        verbose_name_plural = _("Reservations")
        ordering = ["-created_at"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(check_out_date__gt=models.F("check_in_date")),
                name="reservation_valid_dates",
            ),
        ]
        indexes = [
            models.Index(fields=["room", "check_in_date", "check_out_date"], name="reservation_room_dates_idx"),
            models.Index(fields=["status"], name="reservation_status_idx"),
        ]

    def __str__(self) -> str:
        return f"Reservation #{self.pk} room {self.room_id} {self.check_in_date}..{self.check_out_date}"

    @property
    def stay(self) -> DateRange:
        return DateRange(self.check_in_date, self.check_out_date)

    @property
    def nights(self) -> int:
        return self.stay.nights

    def can_transition_to(self, status: str) -> bool:
        return status in self.TRANSITIONS.get(self.status, ())

    def _transition(self, status: str, **changes) -> None:
        if not self.can_transition_to(status):
            raise InvalidStatusTransition(self.status, status, entity="Reservation")
        self.status = status
        for field, value in changes.items():
            setattr(self, field, value)
        self.save(update_fields=["status", *changes.keys(), "updated_at"])

    def mark_checked_in(self, staff=None) -> None:
        self._transition(self.Status.CHECKED_IN, checked_in_at=timezone.now(), staff=staff)

    def mark_checked_out(self, staff=None) -> None:
        self._transition(self.Status.CHECKED_OUT, checked_out_at=timezone.now(), staff=staff)

    def mark_cancelled(self) -> None:
        self._transition(self.Status.CANCELLED, cancelled_at=timezone.now())

    def mark_no_show(self) -> None:
        self._transition(self.Status.NO_SHOW)
