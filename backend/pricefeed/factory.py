"""Factory for creating price providers and the price feed."""

from __future__ import annotations

import logging
import os

from .currencies import MarketClass
from .feed import PriceFeed
from .interface import PriceProvider

logger = logging.getLogger(__name__)


def create_price_providers() -> dict[MarketClass, PriceProvider]:
    """Create one price provider per market class based on environment variables.

    - MASSIVE_API_KEY set and non-empty → Massive fiat/crypto providers (real data)
    - Otherwise → simulated providers (GBM simulation)

    PRICE_FEED_BASE_CURRENCY picks the asset fiat prices are quoted for and
    alt-coin prices are quoted in (default BTC).
    """
    api_key = os.environ.get("MASSIVE_API_KEY", "").strip()

    if api_key:
        from .massive_client import MassiveCryptoPriceProvider, MassiveFiatPriceProvider

        base = os.environ.get("PRICE_FEED_BASE_CURRENCY", "").strip() or "BTC"
        logger.info("Price providers: Massive API (real data), base %s", base)
        return {
            MarketClass.FIAT: MassiveFiatPriceProvider(api_key=api_key, base_currency=base),
            MarketClass.CRYPTO: MassiveCryptoPriceProvider(api_key=api_key, base_currency=base),
        }
    else:
        from .simulator import SimulatedPriceProvider

        logger.info("Price providers: GBM Simulator")
        return {market_class: SimulatedPriceProvider(market_class) for market_class in MarketClass}


def create_price_feed(**kwargs) -> PriceFeed:
    """Create an uninitialized PriceFeed wired to the providers chosen above.

    Keyword arguments are passed through to PriceFeed (intervals, scheduler...).
    Caller must call feed.initialize(on_price_changed, on_fault) on a running loop.
    """
    return PriceFeed(create_price_providers(), **kwargs)
