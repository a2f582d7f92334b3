"""Tests for PriceCache."""

from pricefeed.cache import PriceCache
from pricefeed.models import MarketPrice


def _price(code: str, last: float) -> MarketPrice:
    return MarketPrice(currency_code=code, ask=last + 1, bid=last - 1, last=last, timestamp=1234567890.0)


class TestPriceCache:
    """Unit tests for the PriceCache."""

    def test_upsert_and_get(self):
        """Test upserting and getting a price."""
        cache = PriceCache()
        price = _price("USD", 65000.0)
        cache.upsert(price)
        assert cache.get("USD") is price

    def test_get_unknown_returns_none(self):
        """Test that an unknown code is absent."""
        cache = PriceCache()
        assert cache.get("EUR") is None

    def test_upsert_replaces_wholesale(self):
        """Test that a newer snapshot replaces the old one entirely."""
        cache = PriceCache()
        cache.upsert(_price("USD", 65000.0))
        newer = MarketPrice(currency_code="USD", ask=None, bid=None, last=66000.0)
        cache.upsert(newer)
        assert cache.get("USD") is newer
        assert cache.get("USD").ask is None

    def test_upsert_all(self):
        """Test bulk upsert adds every entry."""
        cache = PriceCache()
        cache.upsert_all({"USD": _price("USD", 65000.0), "EUR": _price("EUR", 60000.0)})
        assert cache.get("USD").last == 65000.0
        assert cache.get("EUR").last == 60000.0

    def test_upsert_all_keeps_codes_missing_from_new_map(self):
        """Codes absent from a bulk update keep their stale value (not evicted)."""
        cache = PriceCache()
        stale = _price("GBP", 51000.0)
        cache.upsert_all({"USD": _price("USD", 65000.0), "GBP": stale})
        cache.upsert_all({"USD": _price("USD", 66000.0)})
        assert cache.get("USD").last == 66000.0
        assert cache.get("GBP") is stale

    def test_upsert_all_empty_map(self):
        """Test that an empty bulk update changes nothing."""
        cache = PriceCache()
        cache.upsert(_price("USD", 65000.0))
        cache.upsert_all({})
        assert cache.get("USD").last == 65000.0

    def test_most_recent_write_wins(self):
        """Test that get() returns the latest snapshot across mixed writes."""
        cache = PriceCache()
        cache.upsert(_price("USD", 1.0))
        cache.upsert_all({"USD": _price("USD", 2.0), "EUR": _price("EUR", 3.0)})
        cache.upsert(_price("EUR", 4.0))
        cache.upsert_all({"USD": _price("USD", 5.0)})
        assert cache.get("USD").last == 5.0
        assert cache.get("EUR").last == 4.0

