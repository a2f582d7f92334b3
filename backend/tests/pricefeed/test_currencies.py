"""Tests for market classification."""

import pytest

from pricefeed.currencies import MarketClass, is_fiat_currency, market_class_of, normalize_code


class TestMarketClassification:
    """Unit tests for fiat/crypto classification."""

    @pytest.mark.parametrize("code", ["USD", "EUR", "JPY", "CHF"])
    def test_fiat_codes(self, code):
        assert is_fiat_currency(code)
        assert market_class_of(code) is MarketClass.FIAT

    @pytest.mark.parametrize("code", ["BTC", "ETH", "XMR", "DOGE"])
    def test_crypto_codes(self, code):
        assert not is_fiat_currency(code)
        assert market_class_of(code) is MarketClass.CRYPTO

    def test_case_and_whitespace_insensitive(self):
        """Test that classification normalizes the code."""
        assert market_class_of("  eur ") is MarketClass.FIAT

    def test_unknown_code_is_crypto(self):
        """Anything not in the fiat set is treated as crypto."""
        assert market_class_of("SOMECOIN") is MarketClass.CRYPTO

    def test_normalize_code(self):
        assert normalize_code(" btc\n") == "BTC"
