"""Cached multi-source USD price oracle and swap quotes.

Prices are refreshed as one batch: if any tracked symbol is missing or older
than ``cache_timeout`` seconds, every symbol is re-fetched. Per symbol the
first source (in priority order) that returns a price wins; symbols no source
priced fall back to a peg, a derived price, or an estimate.
"""
from __future__ import annotations

import asyncio
import logging
import math
import time
from typing import Callable, Sequence

from ..config import OracleConfig
from ..interfaces.price_oracle import PriceSource
from ..models import SourceQuote, SwapQuote, TokenPrice, TrackedToken
from .coingecko import CoinGeckoSource
from .defillama import DefiLlamaSource
from .tokens import (
    DERIVED_PRICES,
    ESTIMATED_PRICES,
    GENERIC_DEFAULT_PRICE,
    PEGGED_PRICES,
    TRACKED_TOKENS,
)

logger = logging.getLogger(__name__)

SWAP_VENUE = "Mantle DEX Aggregator"
ASSUMED_LIQUIDITY_USD = 20_000_000.0
MAX_PRICE_IMPACT = 5.0  # percent


class PriceOracle:
    """Process-wide price cache. Construct once and share by reference."""

    def __init__(
        self,
        config: OracleConfig,
        sources: Sequence[PriceSource] | None = None,
        tokens: Sequence[TrackedToken] = TRACKED_TOKENS,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.cache_timeout = config.cache_timeout
        self._sources: list[PriceSource] = (
            list(sources)
            if sources is not None
            else [CoinGeckoSource(config), DefiLlamaSource(config)]
        )
        self._tokens = list(tokens)
        self._clock = clock
        self._cache: dict[str, TokenPrice] = {}
        self._refresh_lock = asyncio.Lock()

    @property
    def symbols(self) -> list[str]:
        return [t.symbol for t in self._tokens]

    # ------------------------------------------------------------------
    # Cache
    # ------------------------------------------------------------------

    def _is_stale(self, entry: TokenPrice | None) -> bool:
        if entry is None:
            return True
        age = self._clock() - entry.timestamp / 1000
        return age > self.cache_timeout

    def _needs_refresh(self) -> bool:
        return any(self._is_stale(self._cache.get(t.symbol)) for t in self._tokens)

    async def get_token_prices(self) -> list[TokenPrice]:
        """Return prices for all tracked tokens, refreshing when any is stale."""
        if self._needs_refresh():
            async with self._refresh_lock:
                # Another caller may have refreshed while we waited
                if self._needs_refresh():
                    await self.refresh()
        return [self._cache[t.symbol] for t in self._tokens]

    async def refresh(self) -> None:
        """Query all sources concurrently and rewrite every cache entry."""
        logger.info("Refreshing prices for %d tokens", len(self._tokens))

        results = await asyncio.gather(
            *(source.fetch_prices(self._tokens) for source in self._sources),
            return_exceptions=True,
        )

        by_source: list[tuple[str, dict[str, SourceQuote]]] = []
        for source, result in zip(self._sources, results):
            if isinstance(result, BaseException):
                logger.error("Price source %s failed: %s", source.source_name, result)
                result = {}
            by_source.append((source.source_name, result))

        now_ms = int(self._clock() * 1000)
        for entry in self._merge(by_source, now_ms):
            self._cache[entry.symbol] = entry

    def _merge(
        self, by_source: list[tuple[str, dict[str, SourceQuote]]], now_ms: int
    ) -> list[TokenPrice]:
        resolved: dict[str, TokenPrice] = {}

        for token in self._tokens:
            for source_name, quotes in by_source:
                quote = quotes.get(token.symbol)
                if quote is not None and quote.price > 0:
                    resolved[token.symbol] = TokenPrice(
                        symbol=token.symbol,
                        address=token.address,
                        price=quote.price,
                        source=source_name,
                        timestamp=now_ms,
                        change24h=quote.change24h,
                    )
                    break

        for token in self._tokens:
            if token.symbol in resolved:
                continue
            price, source = self._fallback_price(token.symbol, resolved)
            logger.warning("No live price for %s, using %s price %.4f", token.symbol, source, price)
            resolved[token.symbol] = TokenPrice(
                symbol=token.symbol,
                address=token.address,
                price=price,
                source=source,
                timestamp=now_ms,
            )

        return [resolved[t.symbol] for t in self._tokens]

    @staticmethod
    def _fallback_price(
        symbol: str, resolved: dict[str, TokenPrice]
    ) -> tuple[float, str]:
        if symbol in PEGGED_PRICES:
            return PEGGED_PRICES[symbol], "peg"

        derivation = DERIVED_PRICES.get(symbol)
        if derivation is not None:
            base_symbol, multiplier = derivation
            base = resolved.get(base_symbol)
            if base is not None:
                return base.price * multiplier, "derived"

        return ESTIMATED_PRICES.get(symbol, GENERIC_DEFAULT_PRICE), "estimate"

    # ------------------------------------------------------------------
    # Swap quotes
    # ------------------------------------------------------------------

    async def get_swap_quote(
        self, from_symbol: str, to_symbol: str, amount: str | float
    ) -> SwapQuote | None:
        """Quote a swap at cached USD prices.

        Returns None for unknown symbols or a non-numeric / non-positive
        amount. Price impact is synthetic:
            impact% = min(amount * price_from / ASSUMED_LIQUIDITY_USD * 100, 5)
        """
        try:
            amount_value = float(amount)
        except (TypeError, ValueError):
            return None
        if not math.isfinite(amount_value) or amount_value <= 0:
            return None

        prices = {p.symbol.lower(): p for p in await self.get_token_prices()}
        from_price = prices.get(str(from_symbol).lower())
        to_price = prices.get(str(to_symbol).lower())
        if from_price is None or to_price is None or to_price.price <= 0:
            return None

        rate = from_price.price / to_price.price
        impact = min(
            amount_value * from_price.price / ASSUMED_LIQUIDITY_USD * 100,
            MAX_PRICE_IMPACT,
        )

        return SwapQuote(
            from_symbol=from_price.symbol,
            to_symbol=to_price.symbol,
            from_amount=str(amount),
            to_amount=f"{amount_value * rate:.8f}",
            exchange_rate=f"{rate:.8f}",
            price_impact=f"{impact:.2f}",
            from_price=from_price.price,
            to_price=to_price.price,
            venue=SWAP_VENUE,
            route=(from_price.symbol, to_price.symbol),
        )
