from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel


class RestaurantResponse(BaseModel):
    name: str


class UserOrderResponse(BaseModel):
    id: int
    restaurant: RestaurantResponse | None = None
    total: int
    currency_code: str
    placed_at: datetime
