"""Asynchronous single-currency and bulk requests against a PriceProvider."""

from __future__ import annotations

import asyncio
import logging

from .errors import ProviderError
from .interface import PriceProvider
from .models import MarketPrice

logger = logging.getLogger(__name__)


class PriceFetcher:
    """Runs provider calls off the event loop and normalizes their failures.

    Stateless: each call is independent and no retries happen here. A failed
    request is simply retried by the next scheduled tick.
    """

    async def fetch_one(self, currency_code: str, provider: PriceProvider) -> MarketPrice:
        """Request one currency's price.

        Raises ProviderError if the call fails or the provider has no data
        for the code.
        """
        try:
            # Providers are synchronous — run in a thread to avoid blocking the event loop.
            market_price = await asyncio.to_thread(provider.get_price, currency_code)
        except ProviderError:
            raise
        except Exception as e:
            raise ProviderError(f"{provider.name} failed to fetch {currency_code}: {e}") from e

        if market_price is None:
            raise ProviderError(f"{provider.name} has no price for {currency_code}")
        logger.debug("%s: fetched %s", provider.name, market_price)
        return market_price

    async def fetch_all(self, provider: PriceProvider) -> dict[str, MarketPrice]:
        """Request the provider's full price table. An empty table is not an error."""
        try:
            market_prices = await asyncio.to_thread(provider.get_all_prices)
        except ProviderError:
            raise
        except Exception as e:
            raise ProviderError(f"{provider.name} failed to fetch all prices: {e}") from e

        logger.debug("%s: fetched %d prices", provider.name, len(market_prices))
        return dict(market_prices)
