from __future__ import annotations

from typing import NewType

UserId = NewType("UserId", int)
OrderId = NewType("OrderId", int)
RestaurantId = NewType("RestaurantId", int)
