from __future__ import annotations

from dataclasses import dataclass

from uos.domain.common.ids import RestaurantId


@dataclass(frozen=True)
class Restaurant:
    """Snapshot of a restaurant owned by the remote restaurant service."""

    restaurant_id: RestaurantId
    name: str
