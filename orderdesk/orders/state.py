"""
Dashboard state container.
Holds the loaded orders and the view selections for one dashboard session.
"""

import threading
from dataclasses import dataclass, field
from typing import List, Optional

from .filters import ALL_STATUSES, filter_orders
from .models import Order


@dataclass
class DashboardState:
    """Local, possibly stale copy of the store's orders plus UI selections."""
    orders: List[Order] = field(default_factory=list)
    selected_order_id: Optional[str] = None
    status_filter: str = ALL_STATUSES
    search_term: str = ""
    loaded: bool = False
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False, compare=False)

    def visible_orders(self) -> List[Order]:
        """Orders passing the current filter and search, in fetch order."""
        with self._lock:
            orders = list(self.orders)
        return filter_orders(orders, self.status_filter, self.search_term)

    def get_order(self, order_id: str) -> Optional[Order]:
        with self._lock:
            for order in self.orders:
                if order.id == order_id:
                    return order
        return None

    def replace_orders(self, orders: List[Order]) -> None:
        """Overwrite the whole collection with a fresh fetch."""
        with self._lock:
            self.orders = list(orders)
            self.loaded = True

    def toggle_details(self, order_id: str) -> None:
        """Expand an order, collapsing any other; collapse it if already expanded."""
        self.selected_order_id = None if self.selected_order_id == order_id else order_id

    def apply_status(self, order_id: str, status: str) -> bool:
        """Set one order's status. Returns False if the order is not loaded."""
        with self._lock:
            for index, order in enumerate(self.orders):
                if order.id == order_id:
                    self.orders[index] = order.with_status(status)
                    return True
        return False

    def remove_order(self, order_id: str) -> bool:
        """Drop an order. Returns False (and changes nothing) if it is not loaded."""
        with self._lock:
            remaining = [order for order in self.orders if order.id != order_id]
            removed = len(remaining) != len(self.orders)
            self.orders = remaining
        if removed and self.selected_order_id == order_id:
            self.selected_order_id = None
        return removed
