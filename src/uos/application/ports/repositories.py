from __future__ import annotations

from typing import Protocol

from uos.domain.common.ids import UserId
from uos.domain.order.entities import Order


class OrderRepository(Protocol):
    def find_all_orders_by_user_id(self, user_id: UserId) -> list[Order]: ...


class OrderStorageError(Exception):
    pass
