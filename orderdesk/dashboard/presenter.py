"""
Display helpers for the order dashboard.
Pure functions so the Streamlit script stays thin.
"""

import html
from datetime import datetime
from typing import Optional

import pandas as pd

from ..orders.filters import ALL_STATUSES
from ..orders.models import Order
from ..store.image import with_size

# (value, label) pairs for the header filter
FILTER_OPTIONS = [
    (ALL_STATUSES, "All Status"),
    ("pending", "Pending"),
    ("dispatch", "Dispatch"),
    ("success", "Completed"),
]

# Row status selector, without an "unset" choice
STATUS_OPTIONS = [
    ("pending", "Pending"),
    ("dispatch", "Dispatch"),
    ("success", "Completed"),
]

STATUS_CSS_CLASSES = {
    'pending': 'status-pending',
    'dispatch': 'status-dispatch',
    'success': 'status-success',
}

THUMBNAIL_SIZE = 50


def short_id(order_id: str) -> str:
    return order_id[-6:]


def customer_name(order: Order) -> str:
    return f"{order.first_name} {order.last_name}"


def format_total(amount: float) -> str:
    return f"${amount:.2f}"


def format_order_date(value: Optional[str], fmt: str = "%x") -> str:
    """Format an ISO timestamp with the locale's date format; unparseable values pass through."""
    if not value:
        return ""
    try:
        parsed = datetime.fromisoformat(value.replace('Z', '+00:00'))
    except ValueError:
        return value
    return parsed.strftime(fmt)


def status_label(status: Optional[str]) -> str:
    return status or "N/A"


def status_css_class(status: Optional[str]) -> str:
    """Badge colour class: yellow/blue/green for known statuses, gray otherwise."""
    return STATUS_CSS_CLASSES.get(status, 'status-unknown')


def status_badge_html(status: Optional[str]) -> str:
    return (
        f'<span class="status-badge {status_css_class(status)}">'
        f'{html.escape(status_label(status))}</span>'
    )


def address_line(order: Order) -> str:
    return f"{order.address}, {order.city} {order.zip_code}"


def cart_items_frame(order: Order, size: int = THUMBNAIL_SIZE) -> pd.DataFrame:
    """Line items as a frame with a sized thumbnail URL per product."""
    rows = [
        {
            "Image": with_size(item.image_url, size, size) if item.image_url else None,
            "Product": item.product_name,
        }
        for item in order.cart_items
    ]
    # Object columns keep a missing thumbnail as None for the image cell
    return pd.DataFrame(rows, columns=["Image", "Product"], dtype=object)
