"""In-memory cache of the latest market price per currency."""

from __future__ import annotations

from collections.abc import Mapping

from .models import MarketPrice


class PriceCache:
    """Latest MarketPrice for each currency code.

    Writer: PriceFeed, after a successful fetch.
    Readers: PriceFeed selection apply and get_price() collaborators.

    Not locked. Every read and write happens on the event loop thread that
    owns the PriceFeed.
    """

    def __init__(self) -> None:
        self._prices: dict[str, MarketPrice] = {}

    def upsert(self, market_price: MarketPrice) -> None:
        """Replace any existing entry for the snapshot's currency code."""
        self._prices[market_price.currency_code] = market_price

    def upsert_all(self, market_prices: Mapping[str, MarketPrice]) -> None:
        """Bulk replace, one entry per key.

        Codes missing from ``market_prices`` keep their previous (possibly
        stale) snapshot until a later update replaces them.
        """
        self._prices.update(market_prices)

    def get(self, currency_code: str) -> MarketPrice | None:
        """Latest snapshot for a code, or None if never fetched."""
        return self._prices.get(currency_code)

