"""Serializers for the hotel catalogue."""

from __future__ import annotations

from rest_framework import serializers  # type: ignore

from .models import Hotel


class HotelSerializer(serializers.ModelSerializer):
    """Hotel card used by listings, search and admin writes."""

    coordinates = serializers.ReadOnlyField()
    gallery = serializers.ListField(child=serializers.URLField(max_length=500), required=False)
    amenities = serializers.ListField(child=serializers.CharField(max_length=100), required=False)

    class Meta:
        model = Hotel
        fields = [
            "id",
            "name",
            "slug",
            "location",
            "address",
            "distance_km",
            "description",
            "rating",
            "price",
            "currency",
            "image",
            "gallery",
            "amenities",
            "latitude",
            "longitude",
            "coordinates",
            "is_featured",
            "is_active",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["id", "slug", "created_at", "updated_at"]

    def validate(self, attrs):  # type: ignore
        latitude = attrs.get("latitude", getattr(self.instance, "latitude", None))
        longitude = attrs.get("longitude", getattr(self.instance, "longitude", None))
        if (latitude is None) != (longitude is None):
            raise serializers.ValidationError("Latitude and longitude must be provided together.")
        if latitude is not None and not -90 <= latitude <= 90:
            raise serializers.ValidationError({"latitude": "Latitude must be between -90 and 90."})
        if longitude is not None and not -180 <= longitude <= 180:
            raise serializers.ValidationError({"longitude": "Longitude must be between -180 and 180."})
        return attrs


class HotelDetailSerializer(HotelSerializer):
    """Hotel card plus its bookable rooms."""

    rooms = serializers.SerializerMethodField()

    class Meta(HotelSerializer.Meta):
        fields = HotelSerializer.Meta.fields + ["rooms"]

    def get_rooms(self, obj: Hotel):  # type: ignore
        from apps.rooms.serializers import RoomSerializer  # local import to avoid circular

        rooms = obj.rooms.filter(is_active=True).select_related("room_type").order_by("room_number")
        return RoomSerializer(rooms, many=True, context=self.context).data


class HotelShortSerializer(serializers.ModelSerializer):
    class Meta:
        model = Hotel
        fields = ["id", "name", "location", "rating", "price", "image", "is_active", "created_at"]
