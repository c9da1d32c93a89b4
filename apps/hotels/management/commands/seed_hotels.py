from __future__ import annotations

from decimal import Decimal

from django.core.management.base import BaseCommand  # type: ignore
from django.db import transaction  # type: ignore

from apps.hotels.models import Hotel
from apps.rooms.models import Room, RoomType

SAMPLE_HOTELS = [
    {
        "name": "Grand Palace Hotel",
        "location": "Downtown",
        "distance_km": Decimal("2.1"),
        "rating": Decimal("4.8"),
        "price": Decimal("120.00"),
        "description": "Experience luxury at its finest at Grand Palace Hotel.",
        "amenities": ["Free WiFi", "Swimming Pool", "Fitness Center", "Spa"],
        "image": "https://images.unsplash.com/photo-1566073771259-6a8506099945?w=400",
        "is_featured": True,
        "view_type": Room.ViewType.CITY,
    },
    {
        "name": "Ocean View Resort",
        "location": "Beachfront",
        "distance_km": Decimal("5.3"),
        "rating": Decimal("4.6"),
        "price": Decimal("89.00"),
        "description": "Wake up to breathtaking ocean views every morning.",
        "amenities": ["Beach Access", "Water Sports", "Ocean View Rooms"],
        "image": "https://images.unsplash.com/photo-1571003123894-1f0594d2b5d9?w=400",
        "is_featured": True,
        "view_type": Room.ViewType.SEA,
    },
    {
        "name": "Mountain Lodge",
        "location": "Hillside",
        "distance_km": Decimal("8.7"),
        "rating": Decimal("4.9"),
        "price": Decimal("95.00"),
        "description": "Escape to the tranquility of Mountain Lodge.",
        "amenities": ["Mountain Views", "Hiking Trails", "Fireplace"],
        "image": "https://images.unsplash.com/photo-1520250497591-112f2f40a3f4?w=400",
        "is_featured": False,
        "view_type": Room.ViewType.MOUNTAIN,
    },
    {
        "name": "City Center Inn",
        "location": "Central District",
        "distance_km": Decimal("1.5"),
        "rating": Decimal("4.3"),
        "price": Decimal("75.00"),
        "description": "Comfortable rooms steps away from shops and restaurants.",
        "amenities": ["Free WiFi", "Breakfast"],
        "image": "https://images.unsplash.com/photo-1564501049412-61c2a3083791?w=400",
        "is_featured": False,
        "view_type": Room.ViewType.CITY,
    },
    {
        "name": "Luxury Sky Hotel",
        "location": "Business District",
        "distance_km": Decimal("3.2"),
        "rating": Decimal("4.7"),
        "price": Decimal("180.00"),
        "description": "Skyline views, a rooftop bar and executive suites.",
        "amenities": ["Free WiFi", "Rooftop Bar", "Fitness Center", "Parking"],
        "image": "https://images.unsplash.com/photo-1551882547-ff40c63fe5fa?w=400",
        "is_featured": True,
        "view_type": Room.ViewType.CITY,
    },
]

# name -> (price multiplier over the hotel price, capacity, description)
SAMPLE_ROOM_TYPES = {
    "Standard": (Decimal("1.0"), 2, "Queen bed, en-suite bathroom."),
    "Deluxe": (Decimal("1.5"), 3, "King bed, sitting area and a better view."),
    "Suite": (Decimal("2.5"), 4, "Separate living room and bedroom."),
}


class Command(BaseCommand):
    help = "Seeds sample hotels, room types and rooms. Safe to run repeatedly."

    def add_arguments(self, parser):  # type: ignore
        parser.add_argument(
            "--rooms-per-type",
            type=int,
            default=2,
            help="How many rooms of each type to create per hotel",
        )

    @transaction.atomic
    def handle(self, *args, **options):  # type: ignore
        per_type = options["rooms_per_type"]

        room_types = {}
        for name, (_, capacity, description) in SAMPLE_ROOM_TYPES.items():
            room_types[name], _created = RoomType.objects.get_or_create(
                name=name,
                defaults={"default_capacity": capacity, "description": description},
            )

        hotels_created = rooms_created = 0
        for data in SAMPLE_HOTELS:
            data = dict(data)
            view_type = data.pop("view_type")
            hotel, created = Hotel.objects.get_or_create(name=data.pop("name"), defaults=data)
            hotels_created += int(created)

            for floor, (type_name, (multiplier, capacity, _)) in enumerate(SAMPLE_ROOM_TYPES.items(), start=1):
                for index in range(1, per_type + 1):
                    _room, created = Room.objects.get_or_create(
                        hotel=hotel,
                        room_number=f"{floor}{index:02d}",
                        defaults={
                            "room_type": room_types[type_name],
                            "floor_number": floor,
                            "view_type": view_type,
                            "price_per_night": (hotel.price * multiplier).quantize(Decimal("0.01")),
                            "capacity": capacity,
                        },
                    )
                    rooms_created += int(created)

        self.stdout.write(
            self.style.SUCCESS(
                f"Seeded {hotels_created} new hotels and {rooms_created} new rooms "
                f"({Hotel.objects.count()} hotels in total)."
            )
        )
