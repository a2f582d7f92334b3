"""Market classification of currency codes."""

from __future__ import annotations

from enum import Enum


class MarketClass(Enum):
    """Which provider and refresh cadence a currency belongs to."""

    FIAT = "fiat"
    CRYPTO = "crypto"


# ISO 4217 codes of actively traded national currencies
FIAT_CURRENCIES: frozenset[str] = frozenset(
    {
        "AED", "ARS", "AUD", "BDT", "BGN", "BRL", "CAD", "CHF", "CLP", "CNY",
        "COP", "CZK", "DKK", "EGP", "EUR", "GBP", "HKD", "HUF", "IDR", "ILS",
        "INR", "ISK", "JPY", "KES", "KRW", "KZT", "MXN", "MYR", "NGN", "NOK",
        "NZD", "PEN", "PHP", "PKR", "PLN", "QAR", "RON", "RUB", "SAR", "SEK",
        "SGD", "THB", "TRY", "TWD", "UAH", "USD", "VND", "ZAR",
    }
)


def normalize_code(currency_code: str) -> str:
    return currency_code.strip().upper()


def is_fiat_currency(currency_code: str) -> bool:
    """True if the code names a national (fiat) currency."""
    return normalize_code(currency_code) in FIAT_CURRENCIES


def market_class_of(currency_code: str) -> MarketClass:
    """Classify a currency code. Anything that is not fiat is crypto."""
    return MarketClass.FIAT if is_fiat_currency(currency_code) else MarketClass.CRYPTO
