from __future__ import annotations

import sys
from datetime import datetime, timezone
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

sys.path.insert(0, str(Path(__file__).resolve().parents[2] / "src"))

import uos.api.routes.user_orders as user_orders_route
from uos.api.main import app
from uos.application.ports.repositories import OrderStorageError
from uos.application.ports.restaurants import RestaurantStatusError, RestaurantTransportError
from uos.application.services.order_service import RestaurantNotFoundError
from uos.domain.common.ids import OrderId, RestaurantId, UserId
from uos.domain.common.money import Money
from uos.domain.order.entities import Order
from uos.domain.restaurant.entities import Restaurant

PLACED_AT = datetime(2026, 10, 17, 21, 0, tzinfo=timezone.utc)


class StubOrderService:
    def __init__(self, orders: list[Order] | None = None, error: Exception | None = None) -> None:
        self._orders = orders or []
        self._error = error
        self.calls: list[UserId] = []

    def find_all_orders_by_user_id(self, user_id: UserId) -> list[Order]:
        self.calls.append(user_id)
        if self._error is not None:
            raise self._error
        return self._orders


def _enriched_order() -> Order:
    order = Order(
        order_id=OrderId(5),
        user_id=UserId(5),
        restaurant_id=RestaurantId(9),
        total=Money(amount_minor=2500, currency="GBP"),
        placed_at=PLACED_AT,
    )
    order.attach_restaurant(Restaurant(restaurant_id=RestaurantId(9), name="Nando's"))
    return order


def _use_service(monkeypatch, service: StubOrderService) -> None:
    monkeypatch.setattr(user_orders_route, "_order_service", lambda: service)


@pytest.mark.parametrize(
    "raw_user_id",
    ["abc", "5.0", "%205", "5_0", "0x5", "99999999999999999999", "-99999999999999999999"],
)
def test_non_integer_user_id_returns_400_without_building_service(
    monkeypatch, raw_user_id: str
) -> None:
    def _unexpected():
        raise AssertionError("order service must not be built for invalid input")

    monkeypatch.setattr(user_orders_route, "_order_service", _unexpected)

    response = TestClient(app).get(f"/users/{raw_user_id}/orders")

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "INVALID_REQUEST"


@pytest.mark.parametrize(("raw_user_id", "expected"), [("+5", 5), ("-5", -5), ("007", 7)])
def test_signed_and_padded_user_ids_are_accepted(
    monkeypatch, raw_user_id: str, expected: int
) -> None:
    service = StubOrderService(orders=[])
    _use_service(monkeypatch, service)

    response = TestClient(app).get(f"/users/{raw_user_id}/orders")

    assert response.status_code == 200
    assert service.calls == [expected]


def test_orders_are_serialized_without_internal_ids(monkeypatch) -> None:
    service = StubOrderService(orders=[_enriched_order()])
    _use_service(monkeypatch, service)

    response = TestClient(app).get("/users/5/orders")

    assert response.status_code == 200
    assert service.calls == [5]
    body = response.json()
    assert len(body) == 1
    item = body[0]
    assert set(item) == {"id", "restaurant", "total", "currency_code", "placed_at"}
    assert item["id"] == 5
    assert item["restaurant"] == {"name": "Nando's"}
    assert item["total"] == 2500
    assert item["currency_code"] == "GBP"
    assert datetime.fromisoformat(item["placed_at"].replace("Z", "+00:00")) == PLACED_AT


def test_user_without_orders_gets_empty_list(monkeypatch) -> None:
    _use_service(monkeypatch, StubOrderService(orders=[]))

    response = TestClient(app).get("/users/42/orders")

    assert response.status_code == 200
    assert response.json() == []


def test_storage_error_returns_opaque_500(monkeypatch) -> None:
    _use_service(
        monkeypatch,
        StubOrderService(error=OrderStorageError("could not connect to db-primary:5432")),
    )

    response = TestClient(app).get("/users/5/orders")

    assert response.status_code == 500
    assert response.json()["error"] == {
        "code": "STORAGE_ERROR",
        "message": "internal server error",
        "details": {},
    }
    assert "db-primary" not in response.text


def test_restaurant_lookup_errors_return_500(monkeypatch) -> None:
    for error in (RestaurantTransportError("connection reset"), RestaurantStatusError(502)):
        _use_service(monkeypatch, StubOrderService(error=error))

        response = TestClient(app).get("/users/5/orders")

        assert response.status_code == 500
        assert response.json()["error"]["code"] == "RESTAURANT_LOOKUP_FAILED"
        assert "connection reset" not in response.text


def test_missing_restaurant_returns_500(monkeypatch) -> None:
    _use_service(monkeypatch, StubOrderService(error=RestaurantNotFoundError(RestaurantId(9))))

    response = TestClient(app).get("/users/5/orders")

    assert response.status_code == 500
    assert response.json()["error"]["code"] == "RESTAURANT_NOT_FOUND"
    assert "restaurant with ID" not in response.text


def test_request_id_is_echoed(monkeypatch) -> None:
    _use_service(monkeypatch, StubOrderService(error=OrderStorageError("boom")))

    response = TestClient(app).get("/users/5/orders", headers={"X-Request-Id": "req-123"})

    assert response.headers["X-Request-Id"] == "req-123"
    assert response.json()["requestId"] == "req-123"


def test_unsafe_request_id_is_replaced(monkeypatch) -> None:
    _use_service(monkeypatch, StubOrderService(orders=[]))

    response = TestClient(app).get("/users/5/orders", headers={"X-Request-Id": "not a valid id"})

    assert response.status_code == 200
    assert response.headers["X-Request-Id"] != "not a valid id"
