from datetime import date
from types import SimpleNamespace

from outlet_admin.hotels.billing import (
    amount_payable,
    calculate_total_bill,
    charge_total,
    nights_between,
    stay_price,
)


def folio(total_price, charges, advance_payment):
    return SimpleNamespace(
        total_price=total_price,
        folio_charges=[SimpleNamespace(total=t) for t in charges],
        advance_payment=advance_payment,
    )


def test_total_bill_adds_charges_and_subtracts_advance():
    assert calculate_total_bill(folio(300, [50, 120], 100)) == 370


def test_total_bill_without_charges():
    assert calculate_total_bill(folio(300, [], 0)) == 300


def test_total_bill_can_go_negative_but_payable_cannot():
    balance = calculate_total_bill(folio(100, [], 250))
    assert balance == -150
    assert amount_payable(balance) == 0


def test_express_laundry_adds_flat_surcharge():
    assert charge_total(3, 40) == 120
    assert charge_total(3, 40, is_express=True) == 170


def test_nights_and_stay_price():
    assert nights_between(date(2025, 3, 10), date(2025, 3, 13)) == 3
    assert stay_price(100, date(2025, 3, 10), date(2025, 3, 13)) == 300
    assert stay_price(100, date(2025, 3, 10), date(2025, 3, 10)) == 100
