import math
from datetime import date

EXPRESS_SURCHARGE = 50.0


def nights_between(check_in: date, check_out: date) -> int:
    return math.ceil((check_out - check_in).days)


def stay_price(nightly_price: float, check_in: date, check_out: date) -> float:
    """Room rent for a stay; anything shorter than a night is billed as one."""
    return max(nights_between(check_in, check_out), 1) * nightly_price


def charge_total(quantity: int, price: float, is_express: bool = False) -> float:
    total = quantity * price
    if is_express:
        total += EXPRESS_SURCHARGE
    return total


def charges_total(charges) -> float:
    return sum(charge.total for charge in charges or ())


def calculate_total_bill(booking) -> float:
    """
    Running folio balance: room rent plus incidental charges minus the
    advance already paid. Can be negative when the advance exceeds the bill.
    """
    return booking.total_price + charges_total(booking.folio_charges) - (booking.advance_payment or 0)


def amount_payable(balance: float) -> float:
    return max(0.0, balance)
