"""Abstract interface for price providers."""

from __future__ import annotations

from abc import ABC, abstractmethod

from .currencies import MarketClass
from .models import MarketPrice


class PriceProvider(ABC):
    """Contract for external price providers, one per market class.

    Implementations perform a blocking network (or simulated) call and return
    MarketPrice snapshots. They are never called on the event loop directly:
    PriceFetcher runs them in a worker thread. Any exception raised here is
    reported by the fetcher as a ProviderError.

    Lifecycle:
        fiat = MassiveFiatPriceProvider(api_key=...)
        crypto = MassiveCryptoPriceProvider(api_key=...)
        feed = PriceFeed({MarketClass.FIAT: fiat, MarketClass.CRYPTO: crypto})
    """

    @property
    @abstractmethod
    def market_class(self) -> MarketClass:
        """The market class whose currencies this provider prices."""

    @abstractmethod
    def get_price(self, currency_code: str) -> MarketPrice | None:
        """Fetch one currency's snapshot, or None if the provider has no data for it."""

    @abstractmethod
    def get_all_prices(self) -> dict[str, MarketPrice]:
        """Fetch the provider's full price table, keyed by currency code.

        An empty table is a valid result.
        """

    @property
    def name(self) -> str:
        """Human-readable provider name for log lines."""
        return type(self).__name__
