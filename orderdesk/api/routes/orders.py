"""
Order API endpoints.
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status

from ..auth import require_admin
from ..schemas import StatusUpdate, StatusUpdateResponse, TaskResponse
from ...orders.filters import ALL_STATUSES, filter_orders
from ...orders.models import Order
from ...orders.repository import OrderRepository
from ...store.client import StoreError

logger = logging.getLogger(__name__)

router = APIRouter(tags=["orders"], dependencies=[Depends(require_admin)])


def get_repository(request: Request) -> OrderRepository:
    return request.app.state.repository


def _store_failure(action: str, error: StoreError) -> HTTPException:
    logger.error(f"Failed to {action}: {error}")
    return HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(error))


@router.get("/auth/check", response_model=TaskResponse)
def check_auth():
    """Succeeds when the bearer token is valid."""
    return TaskResponse(success=True, message="Authenticated")


@router.get("/orders", response_model=List[Order])
def list_orders(
    status_filter: str = Query(ALL_STATUSES, alias="status", description="All or an order status"),
    search: Optional[str] = Query(None, description="Search by first name, last name or id"),
    repository: OrderRepository = Depends(get_repository),
):
    """
    Fetch all orders from the content store, optionally filtered.
    """
    try:
        orders = repository.fetch_orders()
    except StoreError as e:
        raise _store_failure("fetch orders", e)

    return filter_orders(orders, status_filter, search or "")


@router.patch("/orders/{order_id}", response_model=StatusUpdateResponse)
def update_order_status(
    order_id: str,
    update: StatusUpdate,
    repository: OrderRepository = Depends(get_repository),
):
    """
    Change an order's status.
    """
    try:
        repository.set_status(order_id, update.status)
    except StoreError as e:
        raise _store_failure("update order status", e)

    return StatusUpdateResponse(id=order_id, status=update.status)


@router.delete("/orders/{order_id}", response_model=TaskResponse)
def delete_order(order_id: str, repository: OrderRepository = Depends(get_repository)):
    """
    Delete an order.
    """
    try:
        repository.delete_order(order_id)
    except StoreError as e:
        raise _store_failure("delete order", e)

    return TaskResponse(success=True, message="Order has been deleted")
