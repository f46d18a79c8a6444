"""
Test helpers: order factory and an in-memory order store.
"""

from orderdesk.orders.models import Order


def make_order(order_id="order-a1", **fields):
    """Build an Order from store-style (camelCase) fields."""
    doc = {
        "_id": order_id,
        "firstName": "Jane",
        "lastName": "Doe",
        "phone": "555-0100",
        "email": "jane@example.com",
        "address": "1 Main St",
        "city": "Springfield",
        "zipCode": "12345",
        "total": 42.5,
        "discount": 0,
        "orderDate": "2025-02-01T10:30:00Z",
        "status": "pending",
        "cartItems": [],
    }
    doc.update(fields)
    return Order.model_validate(doc)


class FakeStore:
    """In-memory order store recording every call."""

    def __init__(self, orders=None):
        self.orders = list(orders or [])
        self.calls = []
        self.fail_with = None

    def fetch_orders(self):
        self.calls.append(("fetch",))
        if self.fail_with:
            raise self.fail_with
        return list(self.orders)

    def set_status(self, order_id, status):
        self.calls.append(("set_status", order_id, status))
        if self.fail_with:
            raise self.fail_with
        self.orders = [o.with_status(status) if o.id == order_id else o for o in self.orders]

    def delete_order(self, order_id):
        self.calls.append(("delete", order_id))
        if self.fail_with:
            raise self.fail_with
        self.orders = [o for o in self.orders if o.id != order_id]
