from __future__ import annotations

from typing import Iterable, Protocol

from uos.domain.common.ids import RestaurantId
from uos.domain.restaurant.entities import Restaurant


class RestaurantClient(Protocol):
    def get_restaurants_by_ids(self, ids: Iterable[RestaurantId]) -> list[Restaurant]: ...


class RestaurantLookupError(Exception):
    pass


class RestaurantTransportError(RestaurantLookupError):
    pass


class RestaurantStatusError(RestaurantLookupError):
    def __init__(self, status_code: int) -> None:
        super().__init__(f"restaurant service responded with status {status_code}")
        self.status_code = status_code


class RestaurantDecodeError(RestaurantLookupError):
    pass
