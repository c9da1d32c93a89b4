"""Hotel catalogue models for HotelHub."""

from __future__ import annotations

from decimal import Decimal

from django.conf import settings  # type: ignore
from django.core.validators import MaxValueValidator, MinValueValidator  # type: ignore
from django.db import models  # type: ignore
from django.utils.text import slugify  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore


def _default_currency() -> str:
    return settings.HOTELHUB["CURRENCY"]


class Hotel(models.Model):
    """A hotel listed in the app with its starting nightly price."""

    name = models.CharField(max_length=255)
    slug = models.SlugField(max_length=255, unique=True, blank=True)
    location = models.CharField(max_length=255, help_text=_("City and country shown in listings."))
    address = models.CharField(max_length=255, blank=True)
    distance_km = models.DecimalField(
        max_digits=7,
        decimal_places=2,
        default=Decimal("0.00"),
        validators=[MinValueValidator(Decimal("0"))],
        help_text=_("Distance from the city centre, used by the nearby listing."),
    )
    description = models.TextField(blank=True)
    rating = models.DecimalField(
        max_digits=2,
        decimal_places=1,
        default=Decimal("0.0"),
        validators=[MinValueValidator(Decimal("0")), MaxValueValidator(Decimal("5"))],
    )
    price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0"))],
        help_text=_("Nightly price per room used for hotel bookings."),
    )
    currency = models.CharField(max_length=3, default=_default_currency)
    image = models.URLField(max_length=500, blank=True)
    gallery = models.JSONField(default=list, blank=True)
    amenities = models.JSONField(default=list, blank=True)
    latitude = models.DecimalField(max_digits=9, decimal_places=6, null=True, blank=True)
    longitude = models.DecimalField(max_digits=9, decimal_places=6, null=True, blank=True)
    is_featured = models.BooleanField(default=False)
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Hotel")
        verbose_name_plural = _("Hotels")
        ordering = ["-rating", "name"]
        indexes = [
            models.Index(fields=["location"], name="hotel_location_idx"),
            models.Index(fields=["is_active", "rating"], name="hotel_active_rating_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.name} ({self.location})"

    def save(self, *args, **kwargs):  # type: ignore
        if not self.slug:
            self.slug = self._unique_slug()
        super().save(*args, **kwargs)

    def _unique_slug(self) -> str:
        base = slugify(self.name)[:240] or "hotel"
        slug = base
        suffix = 2
        while Hotel.objects.filter(slug=slug).exclude(pk=self.pk).exists():
            slug = f"{base}-{suffix}"
            suffix += 1
        return slug

    @property
    def coordinates(self) -> dict[str, float] | None:
        if self.latitude is None or self.longitude is None:
            return None
        return {"latitude": float(self.latitude), "longitude": float(self.longitude)}
