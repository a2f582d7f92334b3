"""Live market-price feed for fiat and crypto-asset currencies.

Public API:
    MarketPrice          - Immutable ask/bid/last snapshot dataclass
    PriceType            - ASK / BID / LAST selector
    MarketClass          - FIAT / CRYPTO classification
    PriceCache           - In-memory latest-price store
    PriceProvider        - Abstract interface for price providers
    PriceFetcher         - Async single/bulk provider requests
    Scheduler            - Fixed-rate periodic asyncio tasks
    PriceFeed            - Feed controller (selection, cache, subscriber callbacks)
    create_price_feed    - Factory that wires Massive or simulated providers
    create_stream_router - FastAPI router factory for the SSE endpoint
"""

from .cache import PriceCache
from .currencies import MarketClass, is_fiat_currency, market_class_of
from .errors import PriceFeedError, PriceRequestException, ProviderError
from .factory import create_price_feed, create_price_providers
from .feed import PriceFeed
from .fetcher import PriceFetcher
from .interface import PriceProvider
from .models import MarketPrice, PriceType
from .scheduler import Scheduler
from .stream import create_stream_router

__all__ = [
    "MarketPrice",
    "PriceType",
    "MarketClass",
    "is_fiat_currency",
    "market_class_of",
    "PriceCache",
    "PriceProvider",
    "PriceFetcher",
    "Scheduler",
    "PriceFeed",
    "PriceFeedError",
    "ProviderError",
    "PriceRequestException",
    "create_price_feed",
    "create_price_providers",
    "create_stream_router",
]
