"""
Order repository backed by the Sanity content store.
"""

import logging
from typing import List

from pydantic import ValidationError

from .models import Order
from .query import ORDERS_QUERY
from ..core.config import StoreSettings
from ..core.locks import KeyedLocks
from ..store.client import SanityClient, StoreError
from ..store.image import ImageUrlBuilder

logger = logging.getLogger(__name__)


class OrderRepository:
    """Reads and mutates order documents in the content store."""

    def __init__(self, client: SanityClient, images: ImageUrlBuilder):
        self.client = client
        self.images = images
        self._order_locks = KeyedLocks()

    @classmethod
    def from_settings(cls, settings: StoreSettings) -> 'OrderRepository':
        return cls(
            SanityClient(settings),
            ImageUrlBuilder(settings.project_id, settings.dataset),
        )

    def _with_image_urls(self, order: Order) -> Order:
        items = []
        for item in order.cart_items:
            url = None
            if item.image:
                try:
                    url = self.images.url(item.image)
                except ValueError as e:
                    logger.warning(f"Order {order.id}: {e}")
            items.append(item.model_copy(update={'image_url': url}))
        return order.model_copy(update={'cart_items': items})

    def fetch_orders(self) -> List[Order]:
        """Fetch every order with its cart items resolved."""
        logger.info("Fetching orders from content store...")
        documents = self.client.fetch(ORDERS_QUERY)
        if not isinstance(documents, list):
            raise StoreError("Invalid response from content store: expected a list of orders")

        try:
            orders = [self._with_image_urls(Order.model_validate(doc)) for doc in documents]
        except ValidationError as e:
            raise StoreError(f"Invalid order document: {e}") from e

        logger.info(f"Retrieved {len(orders)} orders")
        return orders

    def set_status(self, order_id: str, status: str) -> None:
        """Single-field patch of the order's status."""
        with self._order_locks.hold(order_id):
            self.client.patch(order_id).set({'status': status}).commit()
        logger.info(f"Order {order_id} status set to {status}")

    def delete_order(self, order_id: str) -> None:
        with self._order_locks.hold(order_id):
            self.client.delete(order_id)
