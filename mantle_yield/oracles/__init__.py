"""Price sources and the cached price oracle."""
from .coingecko import CoinGeckoSource
from .defillama import DefiLlamaSource
from .price_oracle import PriceOracle

__all__ = ["CoinGeckoSource", "DefiLlamaSource", "PriceOracle"]
