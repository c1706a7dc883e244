from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Path
from fastapi.exceptions import RequestValidationError

from uos.application.dto.responses import UserOrderResponse
from uos.application.mappers.order_mapper import to_user_order_responses
from uos.application.services.order_service import OrderService
from uos.domain.common.ids import UserId
from uos.infrastructure.db.repositories.order_repo import SqlAlchemyOrderRepository
from uos.infrastructure.restaurants.http_client import get_restaurant_client

router = APIRouter()

USER_ID_PATTERN = r"^[+-]?[0-9]+$"
INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1


def _order_service() -> OrderService:
    return OrderService(
        order_repository=SqlAlchemyOrderRepository(),
        restaurant_client=get_restaurant_client(),
    )


def _parse_user_id(raw: str) -> UserId:
    value = int(raw)
    if not INT64_MIN <= value <= INT64_MAX:
        raise RequestValidationError(
            [
                {
                    "type": "int_range",
                    "loc": ("path", "user_id"),
                    "msg": "user_id is outside the 64-bit integer range",
                    "input": raw,
                }
            ]
        )
    return UserId(value)


@router.get("/users/{user_id}/orders", response_model=list[UserOrderResponse])
def find_orders_for_user(
    user_id: Annotated[str, Path(pattern=USER_ID_PATTERN)],
) -> list[UserOrderResponse]:
    # decimal literals only
    parsed_user_id = _parse_user_id(user_id)
    orders = _order_service().find_all_orders_by_user_id(parsed_user_id)
    return to_user_order_responses(orders)
