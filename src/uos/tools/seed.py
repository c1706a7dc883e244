from __future__ import annotations

from datetime import datetime, timedelta, timezone

from sqlalchemy import delete, inspect, insert
from sqlalchemy.orm import Session

from uos.infrastructure.db.models.order import OrderModel
from uos.infrastructure.db.session import get_engine

DEMO_USER_IDS = (5, 7)


def demo_orders(now: datetime) -> list[dict[str, object]]:
    return [
        {
            "user_id": 5,
            "restaurant_id": 8,
            "total": 1000,
            "currency_code": "GBP",
            "placed_at": now - timedelta(hours=72),
        },
        {
            "user_id": 5,
            "restaurant_id": 9,
            "total": 2500,
            "currency_code": "GBP",
            "placed_at": now - timedelta(hours=36),
        },
        {
            "user_id": 7,
            "restaurant_id": 8,
            "total": 600,
            "currency_code": "GBP",
            "placed_at": now - timedelta(hours=24),
        },
    ]


def main() -> None:
    engine = get_engine(timeout_seconds=2.0)
    inspector = inspect(engine)
    if "orders" not in set(inspector.get_table_names(schema="public")):
        print("no schema yet")
        return

    with Session(engine) as session:
        # demo users are rewritten on every run so repeated seeding stays stable
        session.execute(delete(OrderModel).where(OrderModel.user_id.in_(DEMO_USER_IDS)))
        session.execute(insert(OrderModel), demo_orders(datetime.now(timezone.utc)))
        session.commit()
        print("seed complete")


if __name__ == "__main__":
    main()
