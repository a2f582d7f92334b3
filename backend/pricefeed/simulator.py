"""GBM-based price simulator and the offline PriceProvider built on it."""

from __future__ import annotations

import logging
import math
import time
from threading import Lock

import numpy as np

from .currencies import MarketClass, normalize_code
from .errors import ProviderError
from .interface import PriceProvider
from .models import MarketPrice
from .seed_prices import (
    CURRENCY_PARAMS,
    DEFAULT_CRYPTO_PARAMS,
    DEFAULT_FIAT_PARAMS,
    DEFAULT_SPREAD,
    INTRA_CRYPTO_CORR,
    INTRA_FIAT_CORR,
    SEED_CRYPTO_PRICES,
    SEED_FIAT_PRICES,
)

logger = logging.getLogger(__name__)


class GBMSimulator:
    """Geometric Brownian Motion simulator for correlated currency prices.

    Math:
        S(t+dt) = S(t) * exp((mu - sigma^2/2) * dt + sigma * sqrt(dt) * Z)

    Where:
        S(t)   = current price
        mu     = annualized drift
        sigma  = annualized volatility
        dt     = time step as fraction of a calendar year (crypto trades 24/7)
        Z      = correlated standard normal random variable

    All currencies share one pairwise correlation, since within a market class
    they are all quoted against the same base asset.
    """

    SECONDS_PER_YEAR = 365 * 24 * 3600
    DEFAULT_DT = 60.0 / SECONDS_PER_YEAR  # one refresh tick

    def __init__(
        self,
        seed_prices: dict[str, float],
        params: dict[str, dict[str, float]],
        correlation: float = 0.0,
        dt: float = DEFAULT_DT,
        event_probability: float = 0.001,
        rng: np.random.Generator | None = None,
    ) -> None:
        self._dt = dt
        self._event_prob = event_probability
        self._rng = rng or np.random.default_rng()

        self._codes: list[str] = list(seed_prices)
        self._prices: dict[str, float] = dict(seed_prices)
        self._params = params

        # Cholesky decomposition of the correlation matrix (for correlated moves)
        self._cholesky: np.ndarray | None = None
        n = len(self._codes)
        if n > 1 and correlation:
            corr = np.full((n, n), correlation)
            np.fill_diagonal(corr, 1.0)
            self._cholesky = np.linalg.cholesky(corr)

    def step(self) -> dict[str, float]:
        """Advance every price by one time step. Returns the new prices."""
        n = len(self._codes)
        if n == 0:
            return {}

        z = self._rng.standard_normal(n)
        if self._cholesky is not None:
            z = self._cholesky @ z

        for i, code in enumerate(self._codes):
            mu = self._params[code]["mu"]
            sigma = self._params[code]["sigma"]
            drift = (mu - 0.5 * sigma**2) * self._dt
            diffusion = sigma * math.sqrt(self._dt) * z[i]
            self._prices[code] *= math.exp(drift + diffusion)

            if self._rng.random() < self._event_prob:
                shock = self._rng.uniform(0.02, 0.05) * self._rng.choice([-1, 1])
                self._prices[code] *= 1 + shock
                logger.debug("Random event on %s: %+.1f%%", code, shock * 100)

        return dict(self._prices)

    def get_price(self, currency_code: str) -> float | None:
        """Current price for a currency, or None if not simulated."""
        return self._prices.get(currency_code)

    @property
    def currencies(self) -> list[str]:
        return list(self._codes)


class SimulatedPriceProvider(PriceProvider):
    """PriceProvider backed by the GBM simulator.

    Every call advances the simulation one step, so successive refreshes see
    moving prices. Ask and bid are placed symmetrically around last.
    ``failure_probability`` makes calls raise ProviderError at random.
    """

    def __init__(
        self,
        market_class: MarketClass,
        seed_prices: dict[str, float] | None = None,
        spread: float = DEFAULT_SPREAD,
        failure_probability: float = 0.0,
        event_probability: float = 0.001,
        rng: np.random.Generator | None = None,
    ) -> None:
        if seed_prices is None:
            seed_prices = SEED_FIAT_PRICES if market_class is MarketClass.FIAT else SEED_CRYPTO_PRICES
        defaults = DEFAULT_FIAT_PARAMS if market_class is MarketClass.FIAT else DEFAULT_CRYPTO_PARAMS

        self._market_class = market_class
        self._spread = spread
        self._failure_prob = failure_probability
        self._rng = rng or np.random.default_rng()
        self._sim = GBMSimulator(
            seed_prices={normalize_code(c): p for c, p in seed_prices.items()},
            params={normalize_code(c): CURRENCY_PARAMS.get(normalize_code(c), dict(defaults)) for c in seed_prices},
            correlation=INTRA_FIAT_CORR if market_class is MarketClass.FIAT else INTRA_CRYPTO_CORR,
            event_probability=event_probability,
            rng=self._rng,
        )
        # Called from several worker threads when fetches overlap
        self._lock = Lock()

    @property
    def market_class(self) -> MarketClass:
        return self._market_class

    @property
    def name(self) -> str:
        return f"Simulator({self._market_class.value})"

    def get_price(self, currency_code: str) -> MarketPrice | None:
        code = normalize_code(currency_code)
        with self._lock:
            self._maybe_fail()
            self._sim.step()
            price = self._sim.get_price(code)
        return self._snapshot(code, price) if price is not None else None

    def get_all_prices(self) -> dict[str, MarketPrice]:
        with self._lock:
            self._maybe_fail()
            prices = self._sim.step()
        now = time.time()
        return {code: self._snapshot(code, price, now) for code, price in prices.items()}

    def _maybe_fail(self) -> None:
        if self._failure_prob and self._rng.random() < self._failure_prob:
            raise ProviderError(f"{self.name}: simulated outage")

    def _snapshot(self, code: str, price: float, timestamp: float | None = None) -> MarketPrice:
        half_spread = price * self._spread / 2
        return MarketPrice(
            currency_code=code,
            ask=price + half_spread,
            bid=price - half_spread,
            last=price,
            timestamp=timestamp or time.time(),
        )
