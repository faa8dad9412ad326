"""Tests for the HTTP adapter envelopes and status codes."""

import json

import pytest
from fastapi.testclient import TestClient

from rewards_core.server import create_app
from tests.test_utils import ledger, make_service, txn

PAYLOAD = ledger(
    customers=[{"id": "u1", "name": "Ada"}, {"id": "u2", "name": "Bob"}],
    transactions=[
        txn("t1", "u1", 120, "2025-09-03T12:00:00Z"),
        txn("t2", "u1", 45.5, "2025-08-10T12:00:00Z"),
        txn("t3", "ghost", 51, "2025-09-07T12:00:00Z"),
    ],
)


@pytest.fixture
def client() -> TestClient:
    service, _ = make_service(PAYLOAD)
    return TestClient(create_app(service))


def test_root(client: TestClient) -> None:
    response = client.get("/")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_customer_points(client: TestClient) -> None:
    response = client.get("/api/customer-points")

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    u1, u2 = body["data"]
    assert u1 == {
        "customerId": "u1",
        "name": "Ada",
        "totalPoints": 90,
        "totalAmountSpent": 165.5,
        "monthlyPoints": {
            "2025-08": {"points": 0, "amountSpent": 45.5},
            "2025-09": {"points": 90, "amountSpent": 120},
        },
    }
    assert u2["totalPoints"] == 0
    assert u2["monthlyPoints"] == {}


def test_customer_transactions(client: TestClient) -> None:
    response = client.get("/api/customer-transactions/u1")

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["data"]["customerName"] == "Ada"
    assert body["data"]["transactions"][0] == {
        "transactionId": "t1",
        "amount": 120,
        "date": "2025-09-03T12:00:00Z",
        "points": 90,
    }


def test_customer_transactions_not_found(client: TestClient) -> None:
    response = client.get("/api/customer-transactions/missing-id")

    assert response.status_code == 404
    body = response.json()
    assert body["success"] is False
    assert "not found" in body["message"]


def test_all_transactions(client: TestClient) -> None:
    response = client.get("/api/transactions")

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["meta"] == {"count": 3}
    assert body["data"][2]["customer"] is None
    assert body["data"][0]["customer"] == {"id": "u1", "name": "Ada"}


@pytest.mark.parametrize(
    "path",
    ["/api/customer-points", "/api/customer-transactions/u1", "/api/transactions"],
)
def test_data_errors_return_500(path: str) -> None:
    service, _ = make_service("{not json")
    client = TestClient(create_app(service))

    response = client.get(path)

    assert response.status_code == 500
    body = response.json()
    assert body["success"] is False
    assert body["message"] == "Error processing request"
    assert "not valid JSON" in body["error"]


def test_create_app_from_env(tmp_path, monkeypatch) -> None:
    data_file = tmp_path / "ledger.json"
    data_file.write_text(json.dumps(ledger(customers=[{"id": "u1", "name": "Ada"}])))
    monkeypatch.setenv("REWARDS_DATA_FILE", str(data_file))

    client = TestClient(create_app())
    response = client.get("/api/customer-points")

    assert response.status_code == 200
    assert response.json()["data"][0]["customerId"] == "u1"
