from __future__ import annotations

import logging
import os
import time
from threading import Lock
from typing import Iterable

import httpx
from pydantic import BaseModel, TypeAdapter, ValidationError

from uos.application.metrics.order_enrichment import (
    record_restaurant_lookup_duration,
    record_restaurant_lookup_ids,
)
from uos.application.ports.restaurants import (
    RestaurantClient,
    RestaurantDecodeError,
    RestaurantStatusError,
    RestaurantTransportError,
)
from uos.domain.common.ids import RestaurantId
from uos.domain.restaurant.entities import Restaurant

RESTAURANTS_PATH = "/v1/restaurants"
DEFAULT_TIMEOUT_SECONDS = 5.0

logger = logging.getLogger(__name__)


class RestaurantPayload(BaseModel):
    id: int
    name: str


_restaurant_list_adapter = TypeAdapter(list[RestaurantPayload])


class HttpxRestaurantClient(RestaurantClient):
    """Client for the restaurant service.

    Requests every id in one call, ``GET {base_url}/v1/restaurants?id=1,2,3``.
    The response may omit ids that the service does not know about; callers
    reconcile missing restaurants themselves.
    """

    def __init__(
        self,
        base_url: str | None = None,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
        http_client: httpx.Client | None = None,
    ) -> None:
        resolved = base_url if base_url is not None else _base_url()
        self._base_url = resolved.rstrip("/")
        self._client = http_client or httpx.Client(timeout=timeout_seconds)

    @property
    def base_url(self) -> str:
        return self._base_url

    def get_restaurants_by_ids(self, ids: Iterable[RestaurantId]) -> list[Restaurant]:
        unique_ids = list(dict.fromkeys(int(restaurant_id) for restaurant_id in ids))
        if not unique_ids:
            return []

        record_restaurant_lookup_ids(len(unique_ids))
        url = f"{self._base_url}{RESTAURANTS_PATH}"
        params = {"id": ",".join(str(restaurant_id) for restaurant_id in unique_ids)}

        started = time.perf_counter()
        try:
            response = self._client.get(url, params=params)
        except httpx.DecodingError as exc:
            self._observe("decode_error", started)
            logger.warning("restaurant_lookup_failed", extra={"error_code": "decode_error"})
            raise RestaurantDecodeError(f"undecodable restaurant service response: {exc}") from exc
        except httpx.RequestError as exc:
            self._observe("transport_error", started)
            logger.warning(
                "restaurant_lookup_failed",
                extra={"error_code": "transport_error", "restaurant_count": len(unique_ids)},
            )
            raise RestaurantTransportError(str(exc)) from exc

        if response.status_code != 200:
            self._observe("status_error", started)
            logger.warning(
                "restaurant_lookup_failed",
                extra={"error_code": "status_error", "status_code": response.status_code},
            )
            raise RestaurantStatusError(response.status_code)

        try:
            payloads = _restaurant_list_adapter.validate_json(response.content)
        except ValidationError as exc:
            self._observe("decode_error", started)
            logger.warning("restaurant_lookup_failed", extra={"error_code": "decode_error"})
            raise RestaurantDecodeError(
                f"malformed restaurant service response ({exc.error_count()} errors)"
            ) from exc

        self._observe("ok", started)
        return [
            Restaurant(restaurant_id=RestaurantId(payload.id), name=payload.name)
            for payload in payloads
        ]

    def close(self) -> None:
        self._client.close()

    def _observe(self, outcome: str, started: float) -> None:
        record_restaurant_lookup_duration(outcome, time.perf_counter() - started)


_clients: dict[tuple[str, float], HttpxRestaurantClient] = {}
_clients_lock = Lock()


def _base_url() -> str:
    url = os.getenv("RESTAURANT_SERVICE_BASE_URL")
    if not url:
        raise RuntimeError("RESTAURANT_SERVICE_BASE_URL is not set")
    return url


def _timeout_seconds() -> float:
    raw_value = os.getenv("RESTAURANT_SERVICE_TIMEOUT_SECONDS")
    if not raw_value:
        return DEFAULT_TIMEOUT_SECONDS
    return float(raw_value)


def get_restaurant_client() -> HttpxRestaurantClient:
    key = (_base_url(), _timeout_seconds())
    with _clients_lock:
        client = _clients.get(key)
        if client is None:
            client = HttpxRestaurantClient(base_url=key[0], timeout_seconds=key[1])
            _clients[key] = client
        return client


def close_restaurant_clients() -> None:
    with _clients_lock:
        clients = list(_clients.values())
        _clients.clear()
    for client in clients:
        client.close()
