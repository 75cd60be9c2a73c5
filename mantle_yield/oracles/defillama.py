"""DeFiLlama price source — USD prices keyed by Mantle contract address."""
import logging
import ssl

import aiohttp
import certifi

from ..config import OracleConfig
from ..models import SourceQuote, TrackedToken

logger = logging.getLogger(__name__)

CHAIN_PREFIX = "mantle"


class DefiLlamaSource:
    """Fetch current prices from the DeFiLlama coins API."""

    def __init__(self, config: OracleConfig) -> None:
        self.api_url = config.defillama_url.rstrip("/")
        self.timeout = config.request_timeout

    @property
    def source_name(self) -> str:
        return "defillama"

    async def fetch_prices(self, tokens: list[TrackedToken]) -> dict[str, SourceQuote]:
        prices: dict[str, SourceQuote] = {}
        if not tokens:
            return prices

        key_to_symbols: dict[str, list[str]] = {}
        for token in tokens:
            key = f"{CHAIN_PREFIX}:{token.address}".lower()
            key_to_symbols.setdefault(key, []).append(token.symbol)

        url = f"{self.api_url}/{','.join(key_to_symbols)}"

        ssl_context = ssl.create_default_context(cafile=certifi.where())
        connector = aiohttp.TCPConnector(ssl=ssl_context)

        try:
            async with aiohttp.ClientSession(connector=connector) as session:
                async with session.get(
                    url, timeout=aiohttp.ClientTimeout(total=self.timeout)
                ) as response:
                    if response.status != 200:
                        logger.error(
                            "Error fetching prices from DeFiLlama: HTTP %s", response.status
                        )
                        return prices

                    data = await response.json()

            # Response keys may come back in either case
            coins = {k.lower(): v for k, v in (data.get("coins") or {}).items()}
            for key, symbols in key_to_symbols.items():
                price = (coins.get(key) or {}).get("price")
                if price is None:
                    continue
                for symbol in symbols:
                    prices[symbol] = SourceQuote(price=float(price))

            logger.info("Fetched %d prices from DeFiLlama", len(prices))

        except Exception as e:
            logger.error("Error fetching prices from DeFiLlama: %s", e)

        return prices
