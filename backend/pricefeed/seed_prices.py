"""Seed prices and per-currency parameters for the price simulator."""

# Starting price of one BTC in each fiat currency
SEED_FIAT_PRICES: dict[str, float] = {
    "USD": 65_000.00,
    "EUR": 60_000.00,
    "GBP": 51_500.00,
    "JPY": 9_750_000.00,
    "CHF": 57_500.00,
    "CAD": 88_500.00,
    "AUD": 98_000.00,
    "CNY": 470_000.00,
    "BRL": 355_000.00,
    "INR": 5_420_000.00,
}

# Starting price of each alt-coin in BTC
SEED_CRYPTO_PRICES: dict[str, float] = {
    "ETH": 0.0520,
    "LTC": 0.00125,
    "XMR": 0.00245,
    "DOGE": 0.0000024,
    "DASH": 0.00042,
    "ETC": 0.00038,
    "XRP": 0.0000085,
    "SOL": 0.00225,
}

# Per-currency GBM parameters
# sigma: annualized volatility (higher = more price movement)
# mu: annualized drift / expected return
CURRENCY_PARAMS: dict[str, dict[str, float]] = {
    "JPY": {"sigma": 0.65, "mu": 0.02},
    "BRL": {"sigma": 0.70, "mu": 0.03},
    "DOGE": {"sigma": 1.20, "mu": 0.00},  # High volatility
    "XMR": {"sigma": 0.85, "mu": 0.00},
}

# Defaults for currencies not listed above
DEFAULT_FIAT_PARAMS: dict[str, float] = {"sigma": 0.60, "mu": 0.02}
DEFAULT_CRYPTO_PARAMS: dict[str, float] = {"sigma": 0.90, "mu": 0.00}

# Relative ask/bid spread around the simulated last price
DEFAULT_SPREAD = 0.002

# Correlation coefficients
INTRA_FIAT_CORR = 0.9  # Every fiat quote prices the same BTC
INTRA_CRYPTO_CORR = 0.5  # Alt-coins move together against BTC
