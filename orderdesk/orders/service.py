"""
Order Service.
Loads orders into a dashboard state and runs the status-change and delete
workflows, reconciling local state only after the store confirms.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .models import ORDER_STATUSES
from .state import DashboardState
from ..core.locks import KeyedLocks
from ..store.client import StoreError

logger = logging.getLogger(__name__)

SUCCESS_TOAST_MS = 1500


class Outcome(str, Enum):
    SUCCESS = 'success'
    FAILED = 'failed'
    CANCELLED = 'cancelled'


@dataclass(frozen=True)
class Notification:
    """Message for the user; `timer_ms` set means it dismisses itself."""
    level: str
    title: str
    text: str = ''
    timer_ms: Optional[int] = None


@dataclass(frozen=True)
class ActionResult:
    outcome: Outcome
    notification: Optional[Notification] = None
    error: Optional[str] = None
    status_code: Optional[int] = None

    @property
    def ok(self) -> bool:
        return self.outcome == Outcome.SUCCESS

    @classmethod
    def failed(cls, title: str, text: str, error: Optional[StoreError] = None) -> 'ActionResult':
        return cls(
            Outcome.FAILED,
            Notification('error', title, text),
            str(error) if error else text,
            getattr(error, 'status_code', None),
        )


class OrderService:
    """
    Runs the dashboard workflows against an order store.

    The store is anything exposing fetch_orders(), set_status(order_id, status)
    and delete_order(order_id), raising StoreError on failure: the server-side
    OrderRepository or the dashboard's AdminApiClient.
    """

    def __init__(self, store):
        self.store = store
        self._order_locks = KeyedLocks()

    def load_orders(self, state: DashboardState) -> ActionResult:
        """Replace the state's orders with a fresh fetch. Failures keep the old list."""
        try:
            orders = self.store.fetch_orders()
        except StoreError as e:
            logger.error(f"Failed to fetch orders: {e}")
            return ActionResult.failed('Error', f"Failed to fetch orders: {e}", e)

        state.replace_orders(orders)
        logger.info(f"Loaded {len(orders)} orders")
        return ActionResult(Outcome.SUCCESS)

    def change_status(self, state: DashboardState, order_id: str, new_status: str) -> ActionResult:
        """
        Set an order's status in the store, then locally.

        Changes to the same order are serialized, so they land in the order
        they were requested.
        """
        if state.get_order(order_id) is None:
            return ActionResult.failed('Error', f"Order {order_id} is not loaded")
        if new_status not in ORDER_STATUSES:
            return ActionResult.failed('Error', f"Unknown order status: {new_status}")

        with self._order_locks.hold(order_id):
            try:
                self.store.set_status(order_id, new_status)
            except StoreError as e:
                logger.error(f"Failed to update order {order_id} status: {e}")
                return ActionResult.failed('Error', f"Failed to update order status: {e}", e)

            state.apply_status(order_id, new_status)

        logger.info(f"Order {order_id} status changed to {new_status}")
        return ActionResult(
            Outcome.SUCCESS,
            Notification('success', f"Order status changed to {new_status}", timer_ms=SUCCESS_TOAST_MS),
        )

    def delete_order(self, state: DashboardState, order_id: str, confirmed: bool) -> ActionResult:
        """Delete an order once the user has confirmed."""
        if not confirmed:
            return ActionResult(Outcome.CANCELLED)

        with self._order_locks.hold(order_id):
            try:
                self.store.delete_order(order_id)
            except StoreError as e:
                logger.error(f"Failed to delete order {order_id}: {e}")
                return ActionResult.failed('Error', f"Failed to delete order: {e}", e)

            state.remove_order(order_id)

        logger.info(f"Order {order_id} deleted")
        return ActionResult(Outcome.SUCCESS, Notification('success', 'Deleted', 'Order has been deleted'))
