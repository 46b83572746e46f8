"""Demo data for the mock outlets handed out by the auth endpoints."""

import logging
from datetime import date, timedelta

from sqlalchemy import func, select

from outlet_admin.hotels.billing import stay_price
from outlet_admin.hotels.models import Amenity, Booking, Category, Room
from outlet_admin.restaurants.models import MenuCategory, MenuItem

logger = logging.getLogger(__name__)

HOTEL_OUTLET = "h1"
RESTAURANT_OUTLET = "r1"

CATEGORIES = [
    ("Deluxe", "Spacious rooms with a city view"),
    ("Suite", "Separate living area and premium amenities"),
    ("Standard", "Comfortable rooms for short stays"),
]

AMENITIES = [
    ("Wi-Fi", "wifi"),
    ("Air Conditioning", "snowflake"),
    ("Mini Bar", "wine"),
    ("Smart TV", "tv"),
]

# room number, category, nightly price, capacity
ROOMS = [
    ("101", "Standard", 1500, 2),
    ("102", "Standard", 1500, 2),
    ("201", "Deluxe", 2500, 2),
    ("202", "Deluxe", 2800, 3),
    ("301", "Suite", 5000, 4),
]

MENU_CATEGORIES = ["Mains", "Desserts", "Beverages"]

# name, category, price, dietary type
MENU_ITEMS = [
    ("Margherita Pizza", "Mains", 350, "VEG"),
    ("Chicken Tikka", "Mains", 420, "NON_VEG"),
    ("Tiramisu", "Desserts", 220, "VEG"),
    ("Espresso", "Beverages", 120, "VEGAN"),
]


async def seed_demo_data(session, today: date = None) -> bool:
    """Load the demo outlets once. Returns False when data is already there."""
    today = today or date.today()
    existing = await session.scalar(select(func.count(Room.id)).where(Room.outlet_id == HOTEL_OUTLET))
    if existing:
        logger.info("Demo data already present, skipping seed")
        return False

    categories = {
        name: Category(outlet_id=HOTEL_OUTLET, name=name, description=description)
        for name, description in CATEGORIES
    }
    amenities = [
        Amenity(outlet_id=HOTEL_OUTLET, name=name, icon=icon)
        for name, icon in AMENITIES
    ]
    session.add_all(list(categories.values()) + amenities)
    await session.flush()

    rooms = []
    for number, category, price, capacity in ROOMS:
        room = Room(
            outlet_id=HOTEL_OUTLET,
            room_number=number,
            category_id=categories[category].id,
            price=price,
            capacity=capacity,
            amenities=amenities[:2] if category == "Standard" else list(amenities),
        )
        rooms.append(room)
    session.add_all(rooms)
    await session.flush()

    guest_room = rooms[2]
    guest_room.status = "occupied"
    check_in, check_out = today - timedelta(days=1), today + timedelta(days=2)
    session.add(Booking(
        outlet_id=HOTEL_OUTLET,
        room_id=guest_room.id,
        guest_name="Rahul Sharma",
        phone="+91 98765 43210",
        id_proof="Passport",
        guest_count=2,
        check_in=check_in,
        check_out=check_out,
        status="checked-in",
        total_price=stay_price(guest_room.price, check_in, check_out),
        advance_payment=1000,
    ))

    menu_categories = {name: MenuCategory(outlet_id=RESTAURANT_OUTLET, name=name) for name in MENU_CATEGORIES}
    session.add_all([
        MenuItem(
            outlet_id=RESTAURANT_OUTLET,
            name=name,
            price=price,
            dietary_type=dietary_type,
            categories=[menu_categories[category]],
        )
        for name, category, price, dietary_type in MENU_ITEMS
    ])

    await session.commit()
    logger.info("Seeded demo data for outlets %s and %s", HOTEL_OUTLET, RESTAURANT_OUTLET)
    return True
