from __future__ import annotations

from uos.application.dto.responses import RestaurantResponse, UserOrderResponse
from uos.domain.order.entities import Order


def to_user_order_response(order: Order) -> UserOrderResponse:
    restaurant = None
    if order.restaurant is not None:
        restaurant = RestaurantResponse(name=order.restaurant.name)

    return UserOrderResponse(
        id=int(order.order_id),
        restaurant=restaurant,
        total=order.total.amount_minor,
        currency_code=order.total.currency,
        placed_at=order.placed_at,
    )


def to_user_order_responses(orders: list[Order]) -> list[UserOrderResponse]:
    return [to_user_order_response(order) for order in orders]
