"""CoinGecko price source — USD prices keyed by CoinGecko asset id."""
import logging
import ssl

import aiohttp
import certifi

from ..config import OracleConfig
from ..models import SourceQuote, TrackedToken

logger = logging.getLogger(__name__)


class CoinGeckoSource:
    """Fetch USD prices and 24h change from the CoinGecko simple-price API."""

    def __init__(self, config: OracleConfig) -> None:
        self.api_url = config.coingecko_url
        self.timeout = config.request_timeout

    @property
    def source_name(self) -> str:
        return "coingecko"

    async def fetch_prices(self, tokens: list[TrackedToken]) -> dict[str, SourceQuote]:
        """Fetch prices for every token that has a CoinGecko id.

        Returns a symbol → quote mapping; empty on any failure.
        """
        prices: dict[str, SourceQuote] = {}

        id_to_symbols: dict[str, list[str]] = {}
        for token in tokens:
            if token.coingecko_id:
                id_to_symbols.setdefault(token.coingecko_id, []).append(token.symbol)

        if not id_to_symbols:
            return prices

        params = {
            "ids": ",".join(sorted(id_to_symbols)),
            "vs_currencies": "usd",
            "include_24hr_change": "true",
        }

        ssl_context = ssl.create_default_context(cafile=certifi.where())
        connector = aiohttp.TCPConnector(ssl=ssl_context)

        try:
            async with aiohttp.ClientSession(connector=connector) as session:
                async with session.get(
                    self.api_url,
                    params=params,
                    timeout=aiohttp.ClientTimeout(total=self.timeout),
                ) as response:
                    if response.status != 200:
                        logger.error(
                            "Error fetching prices from CoinGecko: HTTP %s", response.status
                        )
                        return prices

                    data = await response.json()

            for asset_id, symbols in id_to_symbols.items():
                entry = data.get(asset_id) or {}
                usd = entry.get("usd")
                if usd is None:
                    continue
                change = entry.get("usd_24h_change")
                quote = SourceQuote(
                    price=float(usd),
                    change24h=float(change) if change is not None else None,
                )
                for symbol in symbols:
                    prices[symbol] = quote

            logger.info("Fetched %d prices from CoinGecko", len(prices))

        except Exception as e:
            logger.error("Error fetching prices from CoinGecko: %s", e)

        return prices
