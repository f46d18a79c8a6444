"""
Client-side filtering of the loaded order list.
"""

from typing import Iterable, List

from .models import Order

ALL_STATUSES = "All"


def matches_status(order: Order, status_filter: str) -> bool:
    """Exact, case-sensitive status match; orders without a status only show under All."""
    return status_filter == ALL_STATUSES or order.status == status_filter


def matches_search(order: Order, search_term: str) -> bool:
    """Case-insensitive substring match on first name, last name or id."""
    if not search_term:
        return True
    needle = search_term.lower()
    return (
        needle in order.first_name.lower()
        or needle in order.last_name.lower()
        or needle in order.id.lower()
    )


def filter_orders(
    orders: Iterable[Order],
    status_filter: str = ALL_STATUSES,
    search_term: str = "",
) -> List[Order]:
    """
    Derive the visible orders.

    Args:
        orders: Loaded orders, in fetch order
        status_filter: "All" or a status value
        search_term: Free text; empty matches everything

    Returns:
        Matching orders in their original order
    """
    return [
        order for order in orders
        if matches_status(order, status_filter) and matches_search(order, search_term)
    ]
