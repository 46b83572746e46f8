"""
Batch booking creation for the Room Operations screen.

One stay form is applied to every selected room: each room gets its own
booking, priced from its own nightly rate, with the guests and the advance
payment shared across the selection.
"""

import math
from dataclasses import dataclass
from datetime import date
from typing import Sequence

from outlet_admin.hotels.billing import amount_payable, nights_between, stay_price


class EmptyRoomSelection(ValueError):
    pass


@dataclass
class BookingDraft:
    room_id: str
    guest_name: str
    phone: str
    id_proof: str
    check_in: date
    check_out: date
    guest_count: int
    advance_payment: float
    total_price: float
    status: str

    @property
    def occupies_room(self) -> bool:
        return self.status == "checked-in"


@dataclass
class StayEstimate:
    nightly_total: float
    nights: int
    total_price: float
    advance_payment: float
    balance: float
    amount_payable: float


def initial_status(check_in: date, today: date) -> str:
    return "checked-in" if check_in == today else "confirmed"


def build_bookings(rooms: Sequence, form, today: date) -> list:
    """
    Build one draft per room. A draft with status ``checked-in`` means the
    guest arrives today and its room has to be flipped to ``occupied``.
    """
    if not rooms:
        raise EmptyRoomSelection("At least one room must be selected.")

    room_count = len(rooms)
    guest_count = math.ceil(form.guest_count / room_count)
    advance_share = form.advance_payment / room_count
    status = initial_status(form.check_in, today)

    return [
        BookingDraft(
            room_id=room.id,
            guest_name=form.guest_name,
            phone=form.phone,
            id_proof=form.id_proof,
            check_in=form.check_in,
            check_out=form.check_out,
            guest_count=guest_count,
            advance_payment=advance_share,
            total_price=stay_price(room.price, form.check_in, form.check_out),
            status=status,
        )
        for room in rooms
    ]


def estimate_stay(rooms: Sequence, check_in: date, check_out: date, advance_payment: float = 0) -> StayEstimate:
    nightly_total = sum(room.price for room in rooms)
    nights = max(nights_between(check_in, check_out), 1)
    total_price = nightly_total * nights
    balance = total_price - advance_payment

    return StayEstimate(
        nightly_total=nightly_total,
        nights=nights,
        total_price=total_price,
        advance_payment=advance_payment,
        balance=balance,
        amount_payable=amount_payable(balance),
    )
