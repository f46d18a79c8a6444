"""
Display helper tests.
"""

import pandas as pd
import pytest

from orderdesk.dashboard import presenter
from helpers import make_order


def test_short_id_is_last_six_characters():
    assert presenter.short_id("order-7f3a9b12") == "3a9b12"
    assert presenter.short_id("abc") == "abc"


def test_total_has_two_decimals():
    assert presenter.format_total(42.5) == "$42.50"
    assert presenter.format_total(0) == "$0.00"


def test_customer_name_and_address():
    order = make_order(firstName="Jane", lastName="Doe", address="1 Main St", city="Springfield", zipCode="12345")
    assert presenter.customer_name(order) == "Jane Doe"
    assert presenter.address_line(order) == "1 Main St, Springfield 12345"


def test_order_date_formatting():
    assert presenter.format_order_date("2025-02-01T10:30:00Z", fmt="%Y-%m-%d") == "2025-02-01"
    assert presenter.format_order_date("2025-02-01T10:30:00.000+00:00", fmt="%d/%m/%Y") == "01/02/2025"
    assert presenter.format_order_date("yesterday") == "yesterday"
    assert presenter.format_order_date(None) == ""


@pytest.mark.parametrize("status, css_class", [
    ("pending", "status-pending"),
    ("dispatch", "status-dispatch"),
    ("success", "status-success"),
    ("on-hold", "status-unknown"),
    (None, "status-unknown"),
])
def test_status_badge_colours(status, css_class):
    assert presenter.status_css_class(status) == css_class


def test_status_badge_label():
    assert presenter.status_label(None) == "N/A"
    assert presenter.status_label("") == "N/A"
    assert presenter.status_label("on-hold") == "on-hold"
    assert presenter.status_badge_html("<b>") == '<span class="status-badge status-unknown">&lt;b&gt;</span>'


def test_row_selector_has_no_unset_option():
    values = [value for value, _ in presenter.STATUS_OPTIONS]
    assert values == ["pending", "dispatch", "success"]
    assert [value for value, _ in presenter.FILTER_OPTIONS] == ["All"] + values


def test_cart_items_frame_sizes_thumbnails():
    order = make_order(cartItems=[
        {"productName": "Lamp", "imageUrl": "https://cdn.sanity.io/images/p/d/abc-10x10.png"},
        {"productName": "Gift card"},
    ])
    frame = presenter.cart_items_frame(order)
    assert list(frame.columns) == ["Image", "Product"]
    assert frame["Image"][0] == "https://cdn.sanity.io/images/p/d/abc-10x10.png?w=50&h=50"
    assert frame["Image"].dtype == object
    assert pd.isna(frame["Image"][1])
    assert list(frame["Product"]) == ["Lamp", "Gift card"]


def test_cart_items_frame_empty():
    assert presenter.cart_items_frame(make_order(cartItems=[])).empty
