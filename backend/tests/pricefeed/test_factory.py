"""Tests for the provider and feed factories."""

import os
from unittest.mock import patch

from pricefeed.currencies import MarketClass
from pricefeed.factory import create_price_feed, create_price_providers
from pricefeed.feed import PriceFeed
from pricefeed.massive_client import MassiveCryptoPriceProvider, MassiveFiatPriceProvider
from pricefeed.simulator import SimulatedPriceProvider


class TestFactory:
    """Tests for create_price_providers / create_price_feed."""

    def test_creates_simulators_when_no_api_key(self):
        """Test that simulators are created when MASSIVE_API_KEY is not set."""
        with patch.dict(os.environ, {}, clear=True):
            providers = create_price_providers()

        assert isinstance(providers[MarketClass.FIAT], SimulatedPriceProvider)
        assert isinstance(providers[MarketClass.CRYPTO], SimulatedPriceProvider)
        assert providers[MarketClass.FIAT].market_class is MarketClass.FIAT
        assert providers[MarketClass.CRYPTO].market_class is MarketClass.CRYPTO

    def test_creates_simulators_when_api_key_whitespace(self):
        """Test that a whitespace-only MASSIVE_API_KEY counts as unset."""
        with patch.dict(os.environ, {"MASSIVE_API_KEY": "   "}, clear=True):
            providers = create_price_providers()

        assert isinstance(providers[MarketClass.FIAT], SimulatedPriceProvider)

    def test_creates_massive_when_api_key_set(self):
        """Test that Massive providers are created when MASSIVE_API_KEY is set."""
        with patch.dict(os.environ, {"MASSIVE_API_KEY": "test-key"}, clear=True):
            with patch("pricefeed.massive_client.RESTClient") as rest_client:
                providers = create_price_providers()

        assert isinstance(providers[MarketClass.FIAT], MassiveFiatPriceProvider)
        assert isinstance(providers[MarketClass.CRYPTO], MassiveCryptoPriceProvider)
        rest_client.assert_called_with(api_key="test-key")

    def test_base_currency_from_environment(self):
        """Test that PRICE_FEED_BASE_CURRENCY changes the quoted pairs."""
        env = {"MASSIVE_API_KEY": "test-key", "PRICE_FEED_BASE_CURRENCY": "eth"}
        with patch.dict(os.environ, env, clear=True):
            with patch("pricefeed.massive_client.RESTClient"):
                providers = create_price_providers()

        assert providers[MarketClass.FIAT].ticker_for("USD") == "X:ETHUSD"
        assert providers[MarketClass.CRYPTO].ticker_for("LINK") == "X:LINKETH"

    def test_create_price_feed_passes_options(self):
        """Test that the feed factory wires providers and keyword options."""
        with patch.dict(os.environ, {}, clear=True):
            feed = create_price_feed(fiat_interval=5.0)

        assert isinstance(feed, PriceFeed)
        assert feed._fiat_interval == 5.0
        assert not feed.is_initialized
