"""Room models for HotelHub."""

from __future__ import annotations

from decimal import Decimal

from django.core.validators import MinValueValidator  # type: ignore
from django.db import models  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore


class RoomType(models.Model):
    """Catalogue entry such as Standard, Deluxe or Suite."""

    name = models.CharField(max_length=100, unique=True)
    description = models.TextField(blank=True)
    default_price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        null=True,
        blank=True,
        validators=[MinValueValidator(Decimal("0"))],
    )
    default_capacity = models.PositiveSmallIntegerField(default=2)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name = _("Room type")
        verbose_name_plural = _("Room types")
        ordering = ["name"]

    def __str__(self) -> str:
        return self.name


class Room(models.Model):
    """A bookable room in a hotel."""

    class ViewType(models.TextChoices):
        CITY = "city", _("City")
        SEA = "sea", _("Sea")
        GARDEN = "garden", _("Garden")
        MOUNTAIN = "mountain", _("Mountain")
        POOL = "pool", _("Pool")
        COURTYARD = "courtyard", _("Courtyard")

    hotel = models.ForeignKey(
        "hotels.Hotel",
        on_delete=models.CASCADE,
        related_name="rooms",
    )
    room_type = models.ForeignKey(
        RoomType,
        on_delete=models.PROTECT,
        related_name="rooms",
    )
    room_number = models.CharField(max_length=20)
    floor_number = models.SmallIntegerField(null=True, blank=True)
    view_type = models.CharField(max_length=20, choices=ViewType.choices, blank=True)
    price_per_night = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        default=Decimal("0.00"),
        validators=[MinValueValidator(Decimal("0"))],
    )
    capacity = models.PositiveSmallIntegerField(default=2)
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Room")
        verbose_name_plural = _("Rooms")
        ordering = ["hotel_id", "room_number"]
        constraints = [
            models.UniqueConstraint(fields=["hotel", "room_number"], name="room_unique_number_per_hotel"),
        ]

    def __str__(self) -> str:
        return f"Room {self.room_number} ({self.room_type})"
