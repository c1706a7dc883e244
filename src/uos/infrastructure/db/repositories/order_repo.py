from __future__ import annotations

from datetime import timezone

from sqlalchemy import Connection, Engine, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from uos.application.ports.repositories import OrderRepository, OrderStorageError
from uos.domain.common.ids import OrderId, RestaurantId, UserId
from uos.domain.common.money import Money
from uos.domain.order.entities import Order
from uos.infrastructure.db.models.order import OrderModel
from uos.infrastructure.db.session import get_engine


class SqlAlchemyOrderRepository(OrderRepository):
    def __init__(self, bind: Engine | Connection | None = None) -> None:
        self._bind = bind if bind is not None else get_engine()

    def find_all_orders_by_user_id(self, user_id: UserId) -> list[Order]:
        statement = (
            select(OrderModel)
            .where(OrderModel.user_id == int(user_id))
            .order_by(OrderModel.placed_at.desc(), OrderModel.id.desc())
        )
        try:
            with Session(self._bind) as session:
                models = list(session.execute(statement).scalars().all())
        except SQLAlchemyError as exc:
            raise OrderStorageError(f"failed to load orders for user {user_id}") from exc

        return [self._to_domain(model) for model in models]

    def _to_domain(self, model: OrderModel) -> Order:
        placed_at = model.placed_at
        if placed_at.tzinfo is None:
            placed_at = placed_at.replace(tzinfo=timezone.utc)

        return Order(
            order_id=OrderId(model.id),
            user_id=UserId(model.user_id),
            restaurant_id=RestaurantId(model.restaurant_id),
            total=Money(amount_minor=model.total, currency=model.currency_code),
            placed_at=placed_at,
        )
