"""Massive (Polygon.io) snapshot API price providers for real market data."""

from __future__ import annotations

import logging
from abc import abstractmethod
from typing import Any

from massive import RESTClient
from massive.rest.models import SnapshotMarketType

from .currencies import MarketClass, is_fiat_currency, normalize_code
from .interface import PriceProvider
from .models import MarketPrice

logger = logging.getLogger(__name__)

CRYPTO_TICKER_PREFIX = "X:"


class MassivePriceProvider(PriceProvider):
    """PriceProvider backed by the Massive crypto snapshot REST API.

    Single-currency requests use GET /v2/snapshot/locale/global/markets/crypto/tickers/{ticker};
    bulk requests fetch the whole crypto snapshot table in one call and keep
    the pairs that belong to this provider's market class.

    Ask and bid come from the snapshot's last quote, last from the last trade.
    Missing fields become absent quotes. The client's own connect/read
    timeouts bound each call.
    """

    def __init__(
        self,
        api_key: str | None = None,
        base_currency: str = "BTC",
        client: Any = None,
    ) -> None:
        if client is None and not api_key:
            raise ValueError("Either api_key or client is required")
        self._base = normalize_code(base_currency)
        self._client = client if client is not None else RESTClient(api_key=api_key)

    @abstractmethod
    def ticker_for(self, currency_code: str) -> str:
        """Massive ticker symbol for a currency code."""

    @abstractmethod
    def currency_for(self, ticker: str) -> str | None:
        """Currency code for a Massive ticker, or None if the pair is not ours."""

    def get_price(self, currency_code: str) -> MarketPrice | None:
        code = normalize_code(currency_code)
        snap = self._client.get_snapshot_ticker(SnapshotMarketType.CRYPTO, self.ticker_for(code))
        if snap is None:
            return None
        return self._to_market_price(code, snap)

    def get_all_prices(self) -> dict[str, MarketPrice]:
        snapshots = self._client.get_snapshot_all(SnapshotMarketType.CRYPTO)
        result: dict[str, MarketPrice] = {}
        for snap in snapshots or []:
            code = self.currency_for(getattr(snap, "ticker", None) or "")
            if code is None:
                continue
            market_price = self._to_market_price(code, snap)
            if market_price is not None:
                result[code] = market_price
        logger.debug("%s: parsed %d prices", self.name, len(result))
        return result

    # --- Internal ---

    def _to_market_price(self, code: str, snap: Any) -> MarketPrice | None:
        try:
            last_quote = getattr(snap, "last_quote", None)
            last_trade = getattr(snap, "last_trade", None)
            ask = _quote(last_quote, "ask_price")
            bid = _quote(last_quote, "bid_price")
            last = _quote(last_trade, "price")
            timestamp = getattr(snap, "updated", None)

            if ask is None and bid is None and last is None:
                logger.warning("Skipping snapshot for %s: no quotes", code)
                return None
            kwargs = {}
            if isinstance(timestamp, (int, float)) and timestamp > 0:
                # Massive snapshot timestamps are Unix nanoseconds → convert to seconds
                kwargs["timestamp"] = timestamp / 1e9
            return MarketPrice(currency_code=code, ask=ask, bid=bid, last=last, **kwargs)
        except (TypeError, ValueError) as e:
            logger.warning("Skipping snapshot for %s: %s", code, e)
            return None


class MassiveFiatPriceProvider(MassivePriceProvider):
    """Price of the base asset in each fiat currency (pairs ``X:BTC<FIAT>``)."""

    @property
    def market_class(self) -> MarketClass:
        return MarketClass.FIAT

    def ticker_for(self, currency_code: str) -> str:
        return f"{CRYPTO_TICKER_PREFIX}{self._base}{normalize_code(currency_code)}"

    def currency_for(self, ticker: str) -> str | None:
        prefix = f"{CRYPTO_TICKER_PREFIX}{self._base}"
        if not ticker.startswith(prefix):
            return None
        code = ticker[len(prefix):]
        return code if is_fiat_currency(code) else None


class MassiveCryptoPriceProvider(MassivePriceProvider):
    """Price of each alt-coin in the base asset (pairs ``X:<ALT>BTC``)."""

    @property
    def market_class(self) -> MarketClass:
        return MarketClass.CRYPTO

    def ticker_for(self, currency_code: str) -> str:
        return f"{CRYPTO_TICKER_PREFIX}{normalize_code(currency_code)}{self._base}"

    def currency_for(self, ticker: str) -> str | None:
        if not ticker.startswith(CRYPTO_TICKER_PREFIX) or not ticker.endswith(self._base):
            return None
        code = ticker[len(CRYPTO_TICKER_PREFIX):-len(self._base)]
        if not code or is_fiat_currency(code):
            return None
        return code


def _quote(obj: Any, attr: str) -> float | None:
    value = getattr(obj, attr, None) if obj is not None else None
    if value is None:
        return None
    return float(value)
