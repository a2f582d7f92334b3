"""Fixtures for price feed tests.

Providers here are in-memory PriceProvider implementations whose tables and
failures are set per test, so the feed can be driven without network access.
"""

import asyncio

import pytest
import pytest_asyncio

from pricefeed.currencies import MarketClass
from pricefeed.feed import PriceFeed
from pricefeed.interface import PriceProvider
from pricefeed.models import MarketPrice

# Long enough that no periodic tick fires during a test
NEVER = 3600.0


class FakeProvider(PriceProvider):
    """PriceProvider serving a mutable in-memory table."""

    def __init__(self, market_class: MarketClass, prices: dict[str, MarketPrice] | None = None) -> None:
        self._market_class = market_class
        self.prices: dict[str, MarketPrice] = dict(prices or {})
        self.error: Exception | None = None
        self.one_calls: list[str] = []
        self.all_calls = 0

    @property
    def market_class(self) -> MarketClass:
        return self._market_class

    def get_price(self, currency_code: str) -> MarketPrice | None:
        self.one_calls.append(currency_code)
        if self.error is not None:
            raise self.error
        return self.prices.get(currency_code)

    def get_all_prices(self) -> dict[str, MarketPrice]:
        self.all_calls += 1
        if self.error is not None:
            raise self.error
        return dict(self.prices)


class Subscriber:
    """Records on_price_changed / on_fault invocations."""

    def __init__(self) -> None:
        self.prices: list[float] = []
        self.faults: list[tuple[str, BaseException]] = []

    def on_price_changed(self, quote: float) -> None:
        self.prices.append(quote)

    def on_fault(self, message: str, error: BaseException) -> None:
        self.faults.append((message, error))

    def reset(self) -> None:
        self.prices.clear()
        self.faults.clear()


@pytest.fixture
def fiat_provider() -> FakeProvider:
    return FakeProvider(MarketClass.FIAT)


@pytest.fixture
def crypto_provider() -> FakeProvider:
    return FakeProvider(MarketClass.CRYPTO)


@pytest.fixture
def subscriber() -> Subscriber:
    return Subscriber()


@pytest_asyncio.fixture
async def feed(fiat_provider, crypto_provider):
    """A PriceFeed over the fake providers with periodic ticks effectively disabled."""
    price_feed = PriceFeed(
        {MarketClass.FIAT: fiat_provider, MarketClass.CRYPTO: crypto_provider},
        fiat_interval=NEVER,
        all_fiat_interval=NEVER,
        crypto_interval=NEVER,
        all_crypto_interval=NEVER,
    )
    yield price_feed
    await price_feed.stop()


async def settle(feed: PriceFeed) -> None:
    """Wait until every fetch the feed has spawned has completed."""
    scheduler = feed._scheduler
    while scheduler.in_flight:
        await asyncio.gather(*scheduler.in_flight, return_exceptions=True)


@pytest.fixture
def ready(feed, subscriber):
    """Coroutine that initializes the feed and waits for the initial bulk fetches."""

    async def _ready() -> PriceFeed:
        feed.initialize(subscriber.on_price_changed, subscriber.on_fault)
        await settle(feed)
        return feed

    return _ready
