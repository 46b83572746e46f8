"""Kitchen order ticket (KOT) flow for restaurant orders."""

ORDER_FLOW = {
    "pending": "preparing",
    "preparing": "ready",
    "ready": "delivered",
}

ACTION_LABELS = {
    "pending": "Start Cooking",
    "preparing": "Mark Ready",
    "ready": "Served",
}

ORDER_STATUSES = ("pending", "preparing", "ready", "delivered", "cancelled")
TERMINAL_STATUSES = ("delivered", "cancelled")
KITCHEN_STATUSES = ("pending", "preparing", "ready")


class InvalidOrderTransition(ValueError):
    pass


def next_status(status: str) -> str:
    try:
        return ORDER_FLOW[status]
    except KeyError:
        raise InvalidOrderTransition(f"Order in status '{status}' cannot be advanced.")


def action_label(status: str):
    return ACTION_LABELS.get(status)


def group_for_kitchen(orders) -> dict:
    board = {status: [] for status in KITCHEN_STATUSES}
    for order in orders:
        if order.status in board:
            board[order.status].append(order)
    return board


def format_order_number(sequence: int) -> str:
    return f"ORD{sequence:03d}"
