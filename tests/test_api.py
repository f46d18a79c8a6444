"""
Admin API tests.
Run with: pytest tests/test_api.py -v

NOTE: FastAPI's TestClient needs httpx, listed under the "test" extra.
Install with: pip install -e ".[test]"
"""

import pytest
from fastapi.testclient import TestClient

from orderdesk.core.config import ConfigError
from orderdesk.main import create_app
from orderdesk.store.client import StoreError
from helpers import FakeStore, make_order

AUTH = {"Authorization": "Bearer admin-secret"}


@pytest.fixture
def repository():
    return FakeStore([
        make_order("order-a1", firstName="Jane", status="pending"),
        make_order("order-b2", firstName="John", status="success"),
        make_order("order-c3", firstName="Ada", status=None),
    ])


@pytest.fixture
def client(store_env, repository):
    return TestClient(create_app(repository=repository))


# ---------------------------------------------------------------------------
# Startup and guard
# ---------------------------------------------------------------------------

def test_app_refuses_to_start_without_store_config():
    with pytest.raises(ConfigError):
        create_app(repository=FakeStore())


def test_health_is_public(client):
    response = client.get("/api/health")
    assert response.status_code == 200
    assert response.json()["dataset"] == "production"
    assert response.json()["project_id"] == "abc123"


@pytest.mark.parametrize("headers", [{}, {"Authorization": "Bearer wrong"}, {"Authorization": "Basic abc"}])
def test_order_endpoints_require_admin_token(client, repository, headers):
    assert client.get("/api/orders", headers=headers).status_code == 401
    assert client.patch("/api/orders/order-a1", json={"status": "success"}, headers=headers).status_code == 401
    assert client.delete("/api/orders/order-a1", headers=headers).status_code == 401
    assert repository.calls == []


def test_auth_check(client):
    assert client.get("/api/auth/check", headers=AUTH).json()["success"] is True


def test_no_cors_headers_by_default(client):
    response = client.get("/api/health", headers={"Origin": "https://evil.example.com"})
    assert "access-control-allow-origin" not in response.headers


def test_cors_only_for_configured_origins(store_env, repository, monkeypatch):
    monkeypatch.setenv("ORDERDESK_CORS_ORIGINS", "https://admin.example.com, https://ops.example.com")
    client = TestClient(create_app(repository=repository))

    allowed = client.get("/api/health", headers={"Origin": "https://admin.example.com"})
    assert allowed.headers["access-control-allow-origin"] == "https://admin.example.com"
    assert "access-control-allow-credentials" not in allowed.headers

    other = client.get("/api/health", headers={"Origin": "https://evil.example.com"})
    assert "access-control-allow-origin" not in other.headers


# ---------------------------------------------------------------------------
# Listing
# ---------------------------------------------------------------------------

def test_list_returns_store_field_names(client):
    response = client.get("/api/orders", headers=AUTH)
    assert response.status_code == 200
    body = response.json()
    assert [o["_id"] for o in body] == ["order-a1", "order-b2", "order-c3"]
    assert body[0]["firstName"] == "Jane"
    assert body[2]["status"] is None


def test_list_with_status_and_search(client):
    body = client.get("/api/orders", params={"status": "success"}, headers=AUTH).json()
    assert [o["_id"] for o in body] == ["order-b2"]

    body = client.get("/api/orders", params={"search": "ADA"}, headers=AUTH).json()
    assert [o["_id"] for o in body] == ["order-c3"]


def test_list_failure_is_bad_gateway(client, repository):
    repository.fail_with = StoreError("Dataset not found")
    response = client.get("/api/orders", headers=AUTH)
    assert response.status_code == 502
    assert response.json()["detail"] == "Dataset not found"


# ---------------------------------------------------------------------------
# Mutations
# ---------------------------------------------------------------------------

def test_patch_status(client, repository):
    response = client.patch("/api/orders/order-a1", json={"status": "dispatch"}, headers=AUTH)
    assert response.status_code == 200
    assert response.json() == {"id": "order-a1", "status": "dispatch"}
    assert repository.calls == [("set_status", "order-a1", "dispatch")]


def test_patch_rejects_unknown_status(client, repository):
    response = client.patch("/api/orders/order-a1", json={"status": "lost"}, headers=AUTH)
    assert response.status_code == 422
    assert repository.calls == []


def test_patch_failure_is_bad_gateway(client, repository):
    repository.fail_with = StoreError("Document not found")
    response = client.patch("/api/orders/order-a1", json={"status": "success"}, headers=AUTH)
    assert response.status_code == 502
    assert response.json()["detail"] == "Document not found"


def test_delete(client, repository):
    response = client.delete("/api/orders/order-b2", headers=AUTH)
    assert response.status_code == 200
    assert response.json() == {"success": True, "message": "Order has been deleted"}
    assert [o.id for o in repository.orders] == ["order-a1", "order-c3"]


def test_delete_failure_is_bad_gateway(client, repository):
    repository.fail_with = StoreError("Mutation failed")
    assert client.delete("/api/orders/order-b2", headers=AUTH).status_code == 502
