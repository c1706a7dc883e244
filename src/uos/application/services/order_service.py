from __future__ import annotations

import logging

from uos.application.metrics.order_enrichment import record_user_order_lookup
from uos.application.ports.repositories import OrderRepository, OrderStorageError
from uos.application.ports.restaurants import RestaurantClient, RestaurantLookupError
from uos.domain.common.ids import RestaurantId, UserId
from uos.domain.order.entities import Order
from uos.domain.restaurant.entities import Restaurant

logger = logging.getLogger(__name__)


class RestaurantNotFoundError(Exception):
    def __init__(self, restaurant_id: RestaurantId) -> None:
        super().__init__(f"restaurant with ID {restaurant_id} not found")
        self.restaurant_id = restaurant_id


class OrderService:
    """Reads a user's orders and enriches each with its restaurant.

    Enrichment is all-or-nothing: if the restaurant service does not return a
    restaurant referenced by any order, the whole call fails with
    :class:`RestaurantNotFoundError` and no order is modified.
    """

    def __init__(
        self,
        order_repository: OrderRepository,
        restaurant_client: RestaurantClient,
    ) -> None:
        self._order_repository = order_repository
        self._restaurant_client = restaurant_client

    def find_all_orders_by_user_id(self, user_id: UserId) -> list[Order]:
        try:
            orders = self._order_repository.find_all_orders_by_user_id(user_id)
            if not orders:
                record_user_order_lookup("empty")
                return orders

            restaurant_ids = _distinct_restaurant_ids(orders)
            restaurants = self._restaurant_client.get_restaurants_by_ids(restaurant_ids)
        except (OrderStorageError, RestaurantLookupError):
            record_user_order_lookup("failed")
            raise

        restaurants_by_id: dict[RestaurantId, Restaurant] = {
            restaurant.restaurant_id: restaurant for restaurant in restaurants
        }

        matched: list[tuple[Order, Restaurant]] = []
        for order in orders:
            restaurant = restaurants_by_id.get(order.restaurant_id)
            if restaurant is None:
                record_user_order_lookup("restaurant_missing")
                logger.warning(
                    "restaurant_missing_for_order",
                    extra={
                        "user_id": user_id,
                        "restaurant_id": order.restaurant_id,
                        "order_count": len(orders),
                        "restaurant_count": len(restaurants_by_id),
                    },
                )
                raise RestaurantNotFoundError(order.restaurant_id)
            matched.append((order, restaurant))

        for order, restaurant in matched:
            order.attach_restaurant(restaurant)

        record_user_order_lookup("enriched")
        return orders


def _distinct_restaurant_ids(orders: list[Order]) -> list[RestaurantId]:
    return list(dict.fromkeys(order.restaurant_id for order in orders))
