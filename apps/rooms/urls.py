"""URL routing for rooms and room types."""

from __future__ import annotations

from django.urls import include, path  # type: ignore
from rest_framework.routers import DefaultRouter  # type: ignore

from .views import RoomTypeViewSet, RoomViewSet

router = DefaultRouter()
# Room types first so "types/" is not captured as a room id
router.register(r"types", RoomTypeViewSet, basename="room-type")
router.register(r"", RoomViewSet, basename="room")

urlpatterns = [
    path("", include(router.urls)),
]
