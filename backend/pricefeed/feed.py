"""Feed controller: owns the cache and the selection, notifies the subscriber."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Mapping

from .cache import PriceCache
from .currencies import MarketClass, market_class_of, normalize_code
from .errors import PriceRequestException, ProviderError
from .fetcher import PriceFetcher
from .interface import PriceProvider
from .models import MarketPrice, PriceType
from .scheduler import Scheduler

logger = logging.getLogger(__name__)

PriceHandler = Callable[[float], None]
FaultHandler = Callable[[str, BaseException], None]

PERIOD_FIAT_SEC = 60.0
PERIOD_ALL_FIAT_SEC = 60.0 * 5
PERIOD_CRYPTO_SEC = 60.0
PERIOD_ALL_CRYPTO_SEC = 60.0 * 5


class PriceFeed:
    """Live price feed for the selected currency and price type.

    Two providers, one per market class, are refreshed on independent
    schedules:

        fiat   selected currency   every ``fiat_interval``      (armed by first fiat bulk success)
        fiat   all currencies      every ``all_fiat_interval``
        crypto all currencies      every ``crypto_interval``    (armed by first crypto bulk success)
        crypto all currencies      every ``all_crypto_interval``

    Everything that touches the cache, the selection, or the subscriber
    callbacks runs on the event loop that called initialize(). Provider calls
    run in worker threads and their results resume on that loop, so no locks
    are needed. Results are applied in completion order.

    Usage:
        feed = PriceFeed({MarketClass.FIAT: fiat, MarketClass.CRYPTO: crypto})
        feed.initialize(on_price_changed, on_fault)
        feed.set_selected_price_type(PriceType.LAST)
        feed.set_selected_currency("EUR")
    """

    def __init__(
        self,
        providers: Mapping[MarketClass, PriceProvider],
        *,
        fetcher: PriceFetcher | None = None,
        scheduler: Scheduler | None = None,
        cache: PriceCache | None = None,
        fiat_interval: float = PERIOD_FIAT_SEC,
        all_fiat_interval: float = PERIOD_ALL_FIAT_SEC,
        crypto_interval: float = PERIOD_CRYPTO_SEC,
        all_crypto_interval: float = PERIOD_ALL_CRYPTO_SEC,
        classify: Callable[[str], MarketClass] = market_class_of,
    ) -> None:
        missing = set(MarketClass) - set(providers)
        if missing:
            raise ValueError(f"No price provider for {', '.join(sorted(m.value for m in missing))}")

        self._providers = dict(providers)
        self._fetcher = fetcher or PriceFetcher()
        self._scheduler = scheduler or Scheduler()
        self._cache = cache if cache is not None else PriceCache()
        self._fiat_interval = fiat_interval
        self._all_fiat_interval = all_fiat_interval
        self._crypto_interval = crypto_interval
        self._all_crypto_interval = all_crypto_interval
        self._classify = classify

        self._on_price_changed: PriceHandler | None = None
        self._on_fault: FaultHandler | None = None
        self._currency_code: str | None = None
        self._price_type: PriceType | None = None
        self._update_count: int = 0
        self._armed: set[MarketClass] = set()

    # --- API ---

    def initialize(self, on_price_changed: PriceHandler, on_fault: FaultHandler) -> None:
        """Store the subscriber callbacks and start refreshing.

        Must be called from a running event loop. Returns immediately; the
        initial bulk fetches for both market classes complete in the background.
        """
        asyncio.get_running_loop()  # raises RuntimeError outside a loop
        if self.is_initialized:
            raise RuntimeError("PriceFeed is already initialized")
        self._on_price_changed = on_price_changed
        self._on_fault = on_fault

        for market_class in MarketClass:
            self._scheduler.run_soon(
                f"initial-all-{market_class.value}",
                lambda mc=market_class: self._request_all_prices(mc),
            )

        self._scheduler.run_periodically(
            "all-fiat",
            lambda: self._request_all_prices(MarketClass.FIAT),
            self._all_fiat_interval,
        )
        self._scheduler.run_periodically(
            "all-crypto",
            lambda: self._request_all_prices(MarketClass.CRYPTO),
            self._all_crypto_interval,
        )
        logger.info("Price feed initialized")

    async def stop(self) -> None:
        """Cancel all scheduled refreshes and in-flight fetches.

        Drops the subscriber callbacks; the cache and selection are kept, and
        the feed can be initialized again.
        """
        await self._scheduler.stop()
        self._armed.clear()
        self._on_price_changed = None
        self._on_fault = None
        logger.info("Price feed stopped")

    def get_price(self, currency_code: str) -> MarketPrice | None:
        """Cached snapshot for any currency, independent of the selection."""
        return self._cache.get(normalize_code(currency_code))

    def set_selected_currency(self, currency_code: str) -> None:
        """Select a currency, apply the cached price, and prime its fast path."""
        self._currency_code = normalize_code(currency_code)
        self.apply_price()

        if not self.is_initialized:
            logger.debug("Feed not initialized; skipping fetch for %s", self._currency_code)
            return
        market_class = self._classify(self._currency_code)
        code = self._currency_code
        self._scheduler.run_soon(
            f"price-{code}",
            lambda: self._request_price(code, self._providers[market_class]),
        )

    def set_selected_price_type(self, price_type: PriceType) -> None:
        """Select a price type and apply the cached price. Never fetches."""
        self._price_type = price_type
        self.apply_price()

    # --- Getters ---

    @property
    def currency_code(self) -> str | None:
        return self._currency_code

    @property
    def price_type(self) -> PriceType | None:
        return self._price_type

    @property
    def update_count(self) -> int:
        """Bumped on every apply attempt, so observers can detect a refresh
        even when the price did not numerically change."""
        return self._update_count

    @property
    def is_initialized(self) -> bool:
        return self._on_price_changed is not None

    @property
    def selected_price(self) -> float | None:
        """Cached quote for the current selection, or None."""
        if self._currency_code is None or self._price_type is None:
            return None
        market_price = self._cache.get(self._currency_code)
        return market_price.get_price(self._price_type) if market_price else None

    def is_fast_path_armed(self, market_class: MarketClass) -> bool:
        return market_class in self._armed

    def apply_price(self) -> None:
        """Push the cached quote for the current selection to the subscriber.

        Reports a PriceRequestException through the fault handler if the
        selected currency (or its quote) is not cached yet.
        """
        code, price_type = self._currency_code, self._price_type
        try:
            if self.is_initialized and code is not None and price_type is not None:
                market_price = self._cache.get(code)
                if market_price is None:
                    self._report_missing(f"no price for {code}")
                else:
                    quote = market_price.get_price(price_type)
                    if quote is None:
                        self._report_missing(f"no {price_type.display_name.lower()} price for {code}")
                    else:
                        self._on_price_changed(quote)
        finally:
            self._update_count += 1

    # --- Internal ---

    def _report_missing(self, message: str) -> None:
        logger.debug(message)
        self._on_fault(message, PriceRequestException(message))

    async def _request_price(self, currency_code: str, provider: PriceProvider) -> None:
        try:
            market_price = await self._fetcher.fetch_one(currency_code, provider)
        except ProviderError as e:
            # The previous cached value, if any, stays authoritative.
            logger.debug("Could not load market price for %s: %s", currency_code, e)
            return

        self._cache.upsert(market_price)
        if (
            self.is_initialized
            and market_price.currency_code == self._currency_code
            and self._price_type is not None
        ):
            quote = market_price.get_price(self._price_type)
            if quote is not None:
                self._on_price_changed(quote)

    async def _refresh_selected_fiat(self) -> None:
        code = self._currency_code
        if code is None or self._classify(code) is not MarketClass.FIAT:
            return
        await self._request_price(code, self._providers[MarketClass.FIAT])

    async def _request_all_prices(self, market_class: MarketClass) -> None:
        provider = self._providers[market_class]
        try:
            market_prices = await self._fetcher.fetch_all(provider)
        except ProviderError as e:
            logger.warning("Bulk %s refresh failed: %s", market_class.value, e)
            try:
                self._on_fault("Could not load market prices", e)
            finally:
                self._update_count += 1
            return

        self._cache.upsert_all(market_prices)
        self._arm_fast_path(market_class)
        self.apply_price()

    def _arm_fast_path(self, market_class: MarketClass) -> None:
        if market_class in self._armed:
            return
        self._armed.add(market_class)
        if market_class is MarketClass.FIAT:
            self._scheduler.run_periodically("selected-fiat", self._refresh_selected_fiat, self._fiat_interval)
        else:
            self._scheduler.run_periodically(
                "crypto",
                lambda: self._request_all_prices(MarketClass.CRYPTO),
                self._crypto_interval,
            )
        logger.info("Fast path armed for %s", market_class.value)
