"""Serializers for rooms and room types."""

from __future__ import annotations

from decimal import Decimal

from rest_framework import serializers  # type: ignore

from .models import Room, RoomType


class RoomTypeSerializer(serializers.ModelSerializer):
    class Meta:
        model = RoomType
        fields = ["id", "name", "description", "default_price", "default_capacity", "created_at"]
        read_only_fields = ["id", "created_at"]


class RoomSerializer(serializers.ModelSerializer):
    """Room with its nested type. Writes take `room_type` as an id."""

    room_type_detail = RoomTypeSerializer(source="room_type", read_only=True)
    hotel_name = serializers.ReadOnlyField(source="hotel.name")
    price_per_night = serializers.DecimalField(
        max_digits=10, decimal_places=2, min_value=Decimal("0"), required=False
    )
    capacity = serializers.IntegerField(min_value=1, required=False)

    class Meta:
        model = Room
        fields = [
            "id",
            "hotel",
            "hotel_name",
            "room_type",
            "room_type_detail",
            "room_number",
            "floor_number",
            "view_type",
            "price_per_night",
            "capacity",
            "is_active",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["id", "created_at", "updated_at"]

    def validate(self, attrs):  # type: ignore
        hotel = attrs.get("hotel", getattr(self.instance, "hotel", None))
        room_number = attrs.get("room_number", getattr(self.instance, "room_number", None))
        if hotel is not None and room_number:
            clash = Room.objects.filter(hotel=hotel, room_number=room_number)
            if self.instance is not None:
                clash = clash.exclude(pk=self.instance.pk)
            if clash.exists():
                raise serializers.ValidationError(
                    {"room_number": "This hotel already has a room with this number."}
                )
        return attrs

    def create(self, validated_data):  # type: ignore
        room_type: RoomType = validated_data["room_type"]
        if validated_data.get("price_per_night") is None:
            validated_data["price_per_night"] = room_type.default_price or Decimal("0.00")
        validated_data.setdefault("capacity", 2)
        validated_data.setdefault("is_active", True)
        return super().create(validated_data)


class RoomShortSerializer(serializers.ModelSerializer):
    room_type = serializers.ReadOnlyField(source="room_type.name")
    hotel_name = serializers.ReadOnlyField(source="hotel.name")

    class Meta:
        model = Room
        fields = ["id", "room_number", "floor_number", "room_type", "hotel", "hotel_name", "price_per_night", "capacity"]
