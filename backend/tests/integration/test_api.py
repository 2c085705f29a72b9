"""
Integration Test: HTTP API

Drives the FastAPI app end to end against a SQLite file database.

Test cases:
- Register users, create events, place trades, resolve
- camelCase request and response bodies
- Ledger errors mapped to status codes with a declared error body
- Listing endpoints
"""

from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

from friendsbets.main import create_app


@pytest.fixture
def client(settings):
    with TestClient(create_app(settings)) as test_client:
        yield test_client


def _create_user(client, name: str = "Alice") -> dict:
    response = client.post("/api/users", json={"displayName": name})
    assert response.status_code == 201
    return response.json()


def _create_event(client, creator_id: str, title: str = "Snow on Friday?") -> dict:
    response = client.post(
        "/api/events",
        json={"title": title, "description": "Any amount counts", "createdById": creator_id},
    )
    assert response.status_code == 201
    return response.json()


def _trade(client, event_id: str, user_id: str, prediction: bool, amount):
    return client.post(
        "/api/trades",
        json={
            "eventId": event_id,
            "userId": user_id,
            "prediction": prediction,
            "amount": amount,
        },
    )


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["database"] == "connected"


def test_create_and_fetch_user(client):
    user = _create_user(client)

    assert len(user["id"]) == 12
    assert user["displayName"] == "Alice"
    assert Decimal(user["balance"]) == Decimal("100.00")
    assert "createdAt" in user

    fetched = client.get(f"/api/users/{user['id']}")
    assert fetched.status_code == 200
    assert fetched.json()["id"] == user["id"]

    assert client.get("/api/users/nosuchuser00").status_code == 404


def test_users_listed_by_display_name(client):
    _create_user(client, "Zed")
    _create_user(client, "Amy")

    names = [u["displayName"] for u in client.get("/api/users").json()]
    assert names == ["Amy", "Zed"]


def test_trade_then_win(client):
    alice = _create_user(client)
    event = _create_event(client, alice["id"])
    assert event["status"] == "open"
    assert event["outcome"] is None

    response = _trade(client, event["id"], alice["id"], True, 30)
    assert response.status_code == 201
    trade = response.json()
    assert Decimal(trade["amount"]) == Decimal("30.00")
    assert trade["prediction"] is True

    balance = client.get(f"/api/users/{alice['id']}").json()["balance"]
    assert Decimal(balance) == Decimal("70.00")

    positions = client.get(f"/api/events/{event['id']}/positions").json()
    assert len(positions) == 1
    assert positions[0]["userId"] == alice["id"]
    assert Decimal(positions[0]["amount"]) == Decimal("30.00")

    resolved = client.post(f"/api/events/{event['id']}/resolve", json={"outcome": True})
    assert resolved.status_code == 200
    assert resolved.json()["status"] == "resolved"
    assert resolved.json()["outcome"] is True
    assert resolved.json()["resolvedAt"] is not None

    balance = client.get(f"/api/users/{alice['id']}").json()["balance"]
    assert Decimal(balance) == Decimal("130.00")


def test_trade_then_lose(client):
    alice = _create_user(client)
    event = _create_event(client, alice["id"])
    _trade(client, event["id"], alice["id"], True, "30.00")

    client.post(f"/api/events/{event['id']}/resolve", json={"outcome": False})

    balance = client.get(f"/api/users/{alice['id']}").json()["balance"]
    assert Decimal(balance) == Decimal("70.00")


def test_repeat_trades_share_one_position(client):
    alice = _create_user(client)
    event = _create_event(client, alice["id"])
    _trade(client, event["id"], alice["id"], False, 10)
    _trade(client, event["id"], alice["id"], False, 5.5)

    positions = client.get(f"/api/users/{alice['id']}/positions").json()
    assert len(positions) == 1
    assert Decimal(positions[0]["amount"]) == Decimal("15.50")

    trades = client.get(f"/api/events/{event['id']}/trades").json()
    assert len(trades) == 2
    assert len(client.get("/api/trades").json()) == 2
    assert len(client.get("/api/positions").json()) == 1


def test_error_mapping(client):
    alice = _create_user(client)
    event = _create_event(client, alice["id"])

    insufficient = _trade(client, event["id"], alice["id"], True, 500)
    assert insufficient.status_code == 400
    assert insufficient.json()["error"] == "InsufficientBalanceError"

    missing_user = _trade(client, event["id"], "nosuchuser00", True, 1)
    assert missing_user.status_code == 404
    assert missing_user.json()["error"] == "UserNotFoundError"

    missing_event = _trade(client, "nosuchevent0", alice["id"], True, 1)
    assert missing_event.status_code == 404
    assert missing_event.json()["error"] == "EventNotFoundError"

    assert client.post(
        f"/api/events/{event['id']}/resolve", json={"outcome": True}
    ).status_code == 200

    closed = _trade(client, event["id"], alice["id"], True, 1)
    assert closed.status_code == 409
    assert closed.json()["error"] == "EventNotOpenError"

    again = client.post(f"/api/events/{event['id']}/resolve", json={"outcome": True})
    assert again.status_code == 409
    assert again.json()["error"] == "EventAlreadyResolvedError"

    unknown = client.post("/api/events/nosuchevent0/resolve", json={"outcome": True})
    assert unknown.status_code == 404

    balance = client.get(f"/api/users/{alice['id']}").json()["balance"]
    assert Decimal(balance) == Decimal("100.00")


def test_error_body_matches_declared_schema(client):
    alice = _create_user(client)

    response = _trade(client, "nosuchevent0", alice["id"], True, 1)

    assert response.status_code == 404
    assert response.json() == {
        "detail": "Event nosuchevent0 not found",
        "error": "EventNotFoundError",
    }

    openapi = client.get("/openapi.json").json()
    declared = openapi["paths"]["/api/trades"]["post"]["responses"]
    for status in ("400", "404", "409"):
        schema_ref = declared[status]["content"]["application/json"]["schema"]["$ref"]
        assert schema_ref.endswith("/ErrorResponse")


@pytest.mark.parametrize("amount", [0, -5, 1.234])
def test_invalid_trade_amount_is_rejected(client, amount):
    alice = _create_user(client)
    event = _create_event(client, alice["id"])

    response = _trade(client, event["id"], alice["id"], True, amount)

    assert response.status_code == 422
    assert client.get(f"/api/events/{event['id']}/trades").json() == []


def test_event_creator_must_exist(client):
    response = client.post(
        "/api/events", json={"title": "Nobody's event", "createdById": "nosuchuser00"}
    )
    assert response.status_code == 404


def test_events_listed_newest_first(client):
    alice = _create_user(client)
    first = _create_event(client, alice["id"], "First")
    second = _create_event(client, alice["id"], "Second")

    ids = [e["id"] for e in client.get("/api/events").json()]
    assert ids == [second["id"], first["id"]]
    assert client.get(f"/api/events/{first['id']}").json()["title"] == "First"
    assert client.get("/api/events/nosuchevent0").status_code == 404
