from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Money:
    """Order total as stored: minor units and the currency code, unvalidated."""

    amount_minor: int
    currency: str
