"""
Date-range availability for hotel rooms.

A room is free for a candidate range when it is not under maintenance and
none of its active bookings overlaps the range. Bookings are half-open
``[check_in, check_out)`` intervals, so a guest checking out on the day the
next one checks in does not block the room. A same-day stay still holds the
room for the one night it is charged for.

Everything here works on plain objects that expose the attributes of
:class:`~outlet_admin.hotels.models.Room` and
:class:`~outlet_admin.hotels.models.Booking`; nothing touches the database.
"""

from datetime import date, timedelta
from typing import Iterable, Optional, Sequence

ACTIVE_BOOKING_STATUSES = ("confirmed", "checked-in")
RELEASED_BOOKING_STATUSES = ("cancelled", "completed")

PRICE_SORTS = ("asc", "desc")


def intervals_overlap(start1: date, end1: date, start2: date, end2: date) -> bool:
    return start1 < end2 and start2 < end1


def occupied_until(check_in: date, check_out: date) -> date:
    """End of the nights a stay holds the room. A same-day stay is billed as
    one night, so it holds the room until the next morning."""
    return max(check_out, check_in + timedelta(days=1))


def blocks_room(booking) -> bool:
    """Whether the booking still holds its room for its dates."""
    return booking.status not in RELEASED_BOOKING_STATUSES


def is_room_available(room, bookings: Iterable, range_start: date, range_end: date,
                      exclude_booking_id: Optional[str] = None) -> bool:
    if room is None or room.status == "maintenance":
        return False

    for booking in bookings:
        if booking.room_id != room.id or not blocks_room(booking):
            continue
        if exclude_booking_id is not None and booking.id == exclude_booking_id:
            continue
        if intervals_overlap(booking.check_in, occupied_until(booking.check_in, booking.check_out),
                             range_start, occupied_until(range_start, range_end)):
            return False

    return True


def computed_status(room, bookings: Iterable, range_start: date, range_end: date) -> str:
    """Status to show for the chosen dates rather than the housekeeping flag."""
    if is_room_available(room, bookings, range_start, range_end):
        return "available"
    if room.status == "maintenance":
        return "maintenance"
    return "occupied"


def active_booking(room_id: str, bookings: Iterable):
    for booking in bookings:
        if booking.room_id == room_id and booking.status in ACTIVE_BOOKING_STATUSES:
            return booking
    return None


def filter_rooms(rooms: Sequence, category_id: Optional[str] = None,
                 capacities: Optional[Iterable[int]] = None,
                 price_sort: Optional[str] = None) -> list:
    capacities = set(capacities or ())

    result = [
        room for room in rooms
        if (category_id is None or room.category_id == category_id)
        and (not capacities or room.capacity in capacities)
    ]

    if price_sort == "asc":
        result.sort(key=lambda room: room.price)
    elif price_sort == "desc":
        result.sort(key=lambda room: room.price, reverse=True)

    return result
