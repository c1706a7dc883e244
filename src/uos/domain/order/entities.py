from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from uos.domain.common.ids import OrderId, RestaurantId, UserId
from uos.domain.common.money import Money
from uos.domain.restaurant.entities import Restaurant


@dataclass
class Order:
    """A placed order as read from storage.

    ``restaurant`` is never persisted. It stays ``None`` until the order is
    enriched in memory with the snapshot returned by the restaurant service.
    """

    order_id: OrderId
    user_id: UserId
    restaurant_id: RestaurantId
    total: Money
    placed_at: datetime
    restaurant: Restaurant | None = field(default=None, compare=False)

    def attach_restaurant(self, restaurant: Restaurant) -> None:
        if restaurant.restaurant_id != self.restaurant_id:
            raise RestaurantMismatchError(
                f"order {self.order_id} references restaurant {self.restaurant_id}, "
                f"got restaurant {restaurant.restaurant_id}"
            )
        if self.restaurant is not None:
            raise RestaurantAlreadyAttachedError(
                f"order {self.order_id} already has restaurant {self.restaurant.restaurant_id}"
            )
        self.restaurant = restaurant

    @property
    def is_enriched(self) -> bool:
        return self.restaurant is not None


class RestaurantMismatchError(Exception):
    pass


class RestaurantAlreadyAttachedError(Exception):
    pass
