"""Data models for the price feed."""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from enum import Enum


class PriceType(Enum):
    """Which quote of a MarketPrice the subscriber observes."""

    ASK = "Ask"
    BID = "Bid"
    LAST = "Last"

    @property
    def display_name(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class MarketPrice:
    """Immutable snapshot of one currency's quotes at a point in time.

    Any quote may be None when the provider did not report it.
    """

    currency_code: str
    ask: float | None = None
    bid: float | None = None
    last: float | None = None
    timestamp: float = field(default_factory=time.time)  # Unix seconds

    def __post_init__(self) -> None:
        for name in ("ask", "bid", "last"):
            value = getattr(self, name)
            if value is not None and value < 0:
                raise ValueError(f"{name} quote for {self.currency_code} must be non-negative, got {value}")

    def get_price(self, price_type: PriceType) -> float | None:
        """Quote matching the given price type, or None if absent."""
        if price_type is PriceType.ASK:
            return self.ask
        elif price_type is PriceType.BID:
            return self.bid
        return self.last

    def to_dict(self) -> dict:
        """Serialize for JSON / SSE transmission."""
        return {
            "currency_code": self.currency_code,
            "ask": self.ask,
            "bid": self.bid,
            "last": self.last,
            "timestamp": self.timestamp,
        }
