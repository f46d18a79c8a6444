"""
Dashboard API client tests.
"""

from unittest.mock import MagicMock

import pytest
import requests

from orderdesk.dashboard.client import AdminApiClient, AuthError
from orderdesk.orders.service import OrderService
from orderdesk.orders.state import DashboardState
from orderdesk.store.client import StoreError


def response(status_code=200, body=None, reason="OK"):
    resp = MagicMock(spec=requests.Response)
    resp.status_code = status_code
    resp.ok = status_code < 400
    resp.reason = reason
    if body is None:
        resp.json.side_effect = ValueError("No JSON")
    else:
        resp.json.return_value = body
    return resp


@pytest.fixture
def session():
    session = MagicMock(spec=requests.Session)
    session.headers = {}
    return session


@pytest.fixture
def client(session):
    return AdminApiClient("http://localhost:8000/api/", "admin-secret", session=session)


def test_fetch_orders_parses_documents(client, session):
    session.request.return_value = response(body=[
        {"_id": "a1", "firstName": "Jane", "status": "pending", "cartItems": []},
    ])
    orders = client.fetch_orders()
    assert session.headers["Authorization"] == "Bearer admin-secret"
    assert session.request.call_args.args == ("GET", "http://localhost:8000/api/orders")
    assert orders[0].id == "a1"
    assert orders[0].first_name == "Jane"


def test_set_status_and_delete_quote_ids(client, session):
    session.request.return_value = response(body={"id": "drafts.a1", "status": "success"})
    client.set_status("drafts.a1", "success")
    assert session.request.call_args.args == ("PATCH", "http://localhost:8000/api/orders/drafts.a1")
    assert session.request.call_args.kwargs["json"] == {"status": "success"}

    session.request.return_value = response(body={"success": True, "message": "Order has been deleted"})
    client.delete_order("a/1")
    assert session.request.call_args.args == ("DELETE", "http://localhost:8000/api/orders/a%2F1")


def test_unauthorized_raises_auth_error(client, session):
    session.request.return_value = response(status_code=401, body={"detail": "Authentication required"})
    with pytest.raises(AuthError):
        client.check_token()


def test_api_detail_becomes_error_message(client, session):
    session.request.return_value = response(status_code=502, body={"detail": "Document not found"})
    with pytest.raises(StoreError, match="Document not found") as exc:
        client.delete_order("a1")
    assert exc.value.status_code == 502


def test_connection_error_explains_how_to_start_api(client, session):
    session.request.side_effect = requests.exceptions.ConnectionError("refused")
    with pytest.raises(StoreError, match="cli.py serve"):
        client.fetch_orders()


def test_service_reports_fetch_failure_from_api(client, session):
    session.request.return_value = response(status_code=500, reason="Internal Server Error")
    state = DashboardState()
    result = OrderService(client).load_orders(state)
    assert not result.ok
    assert result.notification.text == "Failed to fetch orders: API Error: 500 Internal Server Error"
    assert state.orders == []
    assert not state.loaded
