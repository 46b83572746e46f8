from types import SimpleNamespace

import pytest

from outlet_admin.restaurants.kitchen import (
    InvalidOrderTransition,
    action_label,
    format_order_number,
    group_for_kitchen,
    next_status,
)


def test_orders_advance_one_step_at_a_time():
    status = "pending"
    seen = []
    for _ in range(3):
        status = next_status(status)
        seen.append(status)
    assert seen == ["preparing", "ready", "delivered"]


def test_ready_is_served_not_cancelled():
    assert next_status("ready") == "delivered"


@pytest.mark.parametrize("status", ["delivered", "cancelled", "unknown"])
def test_closed_orders_cannot_advance(status):
    with pytest.raises(InvalidOrderTransition):
        next_status(status)


def test_action_labels():
    assert action_label("pending") == "Start Cooking"
    assert action_label("preparing") == "Mark Ready"
    assert action_label("ready") == "Served"
    assert action_label("delivered") is None


def test_kitchen_board_groups_open_orders():
    orders = [SimpleNamespace(id=i, status=s) for i, s in enumerate(
        ["pending", "ready", "delivered", "preparing", "pending", "cancelled"]
    )]
    board = group_for_kitchen(orders)

    assert [o.id for o in board["pending"]] == [0, 4]
    assert [o.id for o in board["preparing"]] == [3]
    assert [o.id for o in board["ready"]] == [1]
    assert set(board) == {"pending", "preparing", "ready"}


def test_order_numbers_are_zero_padded():
    assert format_order_number(1) == "ORD001"
    assert format_order_number(42) == "ORD042"
