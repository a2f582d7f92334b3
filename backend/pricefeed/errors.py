"""Exceptions raised and reported by the price feed."""


class PriceFeedError(Exception):
    """Base class for price feed errors."""


class ProviderError(PriceFeedError):
    """A price provider call failed: transport, parse, or no data for the code.

    Never fatal. The next scheduled tick retries implicitly.
    """


class PriceRequestException(PriceFeedError):
    """The selection points at a currency (or quote) missing from the cache.

    Recoverable once data for the currency arrives.
    """
