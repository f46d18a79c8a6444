"""
HTTP client the dashboard uses to talk to the admin API.
"""

import logging
from typing import Any, List, Optional
from urllib.parse import quote

import requests
from pydantic import ValidationError

from ..orders.models import Order
from ..store.client import StoreError

logger = logging.getLogger(__name__)


class AuthError(StoreError):
    """The admin API rejected the token."""


class AdminApiClient:
    """Order store backed by the admin API, for use with OrderService."""

    def __init__(self, base_url: str, token: str, timeout: int = 60,
                 session: Optional[requests.Session] = None):
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers['Authorization'] = f"Bearer {token}"

    def _request(self, method: str, endpoint: str, **kwargs) -> Any:
        """Make an API request, raising StoreError with the API's detail on failure."""
        url = f"{self.base_url}{endpoint}"
        try:
            response = self.session.request(method, url, timeout=self.timeout, **kwargs)
        except requests.exceptions.ConnectionError as e:
            logger.error(f"Cannot connect to API at {self.base_url}: {e}")
            raise StoreError("Cannot connect to API. Make sure the server is running: `python cli.py serve`") from e
        except requests.exceptions.RequestException as e:
            logger.error(f"API request failed: {e}")
            raise StoreError(str(e)) from e

        if response.status_code == 401:
            raise AuthError("Not authorized", status_code=401)

        if not response.ok:
            try:
                body = response.json()
            except ValueError:
                body = None
            detail = body.get('detail') if isinstance(body, dict) else None
            message = detail if isinstance(detail, str) else f"API Error: {response.status_code} {response.reason}"
            raise StoreError(message, status_code=response.status_code)

        try:
            return response.json()
        except ValueError as e:
            raise StoreError(f"Invalid response from API: {e}") from e

    def health(self) -> dict:
        return self._request('GET', '/health')

    def check_token(self) -> None:
        """Raise AuthError unless the token is accepted."""
        self._request('GET', '/auth/check')

    def fetch_orders(self) -> List[Order]:
        data = self._request('GET', '/orders')
        try:
            return [Order.model_validate(doc) for doc in data]
        except (TypeError, ValidationError) as e:
            raise StoreError(f"Invalid order data from API: {e}") from e

    def set_status(self, order_id: str, status: str) -> None:
        self._request('PATCH', f"/orders/{quote(order_id, safe='')}", json={'status': status})

    def delete_order(self, order_id: str) -> None:
        self._request('DELETE', f"/orders/{quote(order_id, safe='')}")
