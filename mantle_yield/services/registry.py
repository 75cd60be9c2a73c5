"""Adapter registry: aggregates positions, yields and transactions across protocols."""
from __future__ import annotations

import asyncio
import logging
import re
from typing import Sequence

from ..chains.mantle import MantleClient
from ..config import AppConfig
from ..errors import InvalidAddress, ProtocolNotFound
from ..interfaces.chain import ChainClient
from ..interfaces.protocol_adapter import ProtocolAdapter
from ..models import (
    BuiltTransaction,
    PoolYield,
    Portfolio,
    PortfolioSummary,
    ProtocolMetadata,
    UserPosition,
)
from ..protocols import PROTOCOL_DESCRIPTORS, MantleProtocolAdapter, ProtocolDescriptor
from ..units import format_usd, parse_usd
from . import demo

logger = logging.getLogger(__name__)

_ADDRESS_RE = re.compile(r"^0x[0-9a-fA-F]{40}$")


def summarize_positions(positions: Sequence[UserPosition]) -> PortfolioSummary:
    """Total value, value-weighted APR and distinct protocol count.

    averageApr = sum(value * apr) / sum(value), 0 for an empty portfolio.
    """
    total = 0.0
    weighted = 0.0
    for position in positions:
        value = parse_usd(position.value)
        total += value
        weighted += value * position.apr

    average_apr = round(weighted / total, 2) if total > 0 else 0.0

    return PortfolioSummary(
        total_balance=format_usd(total),
        average_apr=average_apr,
        protocol_count=len({p.protocol_id for p in positions}),
    )


class YieldRegistry:
    """Owns one adapter per supported protocol, in registration order."""

    def __init__(
        self,
        config: AppConfig,
        client: ChainClient | None = None,
        descriptors: Sequence[ProtocolDescriptor] = PROTOCOL_DESCRIPTORS,
    ) -> None:
        self._network = config.network.name
        self._adapter_timeout = config.registry.adapter_timeout
        self._client: ChainClient = client if client is not None else MantleClient(config.network)

        self._adapters: dict[str, ProtocolAdapter] = {}
        for desc in descriptors:
            self._adapters[desc.id] = MantleProtocolAdapter(self._client, desc, self._network)

        logger.info(
            "Registry ready on %s with %d protocols: %s",
            self._network, len(self._adapters), ", ".join(self._adapters),
        )

    @property
    def network(self) -> str:
        return self._network

    def _adapter(self, protocol_id: str) -> ProtocolAdapter:
        adapter = self._adapters.get(protocol_id)
        if adapter is None:
            raise ProtocolNotFound(protocol_id)
        return adapter

    # ------------------------------------------------------------------
    # Metadata & yields
    # ------------------------------------------------------------------

    def list_supported_protocols(self) -> list[ProtocolMetadata]:
        return [adapter.metadata for adapter in self._adapters.values()]

    def get_protocol(self, protocol_id: str) -> ProtocolMetadata:
        return self._adapter(protocol_id).metadata

    def get_pool_yields(self) -> list[PoolYield]:
        yields: list[PoolYield] = []
        for adapter in self._adapters.values():
            yields.extend(adapter.get_pool_yields())
        return yields

    # ------------------------------------------------------------------
    # Positions
    # ------------------------------------------------------------------

    async def get_user_positions(self, owner: str) -> Portfolio:
        """Positions across every protocol plus the portfolio summary.

        Raises:
            InvalidAddress: If ``owner`` is not a 0x-prefixed 20-byte hex address.
        """
        if not isinstance(owner, str) or not _ADDRESS_RE.match(owner):
            raise InvalidAddress(owner)

        if demo.is_demo_address(owner):
            logger.info("Serving demo portfolio for %s", owner)
            positions = demo.demo_positions(self._network)
        else:
            results = await asyncio.gather(
                *(self._read_adapter(adapter, owner) for adapter in self._adapters.values())
            )
            positions = [p for result in results for p in result]

        summary = summarize_positions(positions)
        logger.info(
            "Portfolio for %s: %d positions, total %s, avg APR %.2f%%",
            owner, len(positions), summary.total_balance, summary.average_apr,
        )
        return Portfolio(positions=tuple(positions), summary=summary)

    async def _read_adapter(self, adapter: ProtocolAdapter, owner: str) -> list[UserPosition]:
        try:
            return await asyncio.wait_for(
                adapter.get_user_positions(owner), timeout=self._adapter_timeout
            )
        except asyncio.TimeoutError:
            logger.warning(
                "[%s] Position read timed out after %ss", adapter.metadata.name, self._adapter_timeout
            )
            return []

    # ------------------------------------------------------------------
    # Transactions
    # ------------------------------------------------------------------

    def build_deposit_tx(self, protocol_id: str, owner: str, amount: str) -> BuiltTransaction:
        return self._adapter(protocol_id).build_deposit_tx(owner, amount)

    def build_withdraw_tx(self, protocol_id: str, owner: str, amount: str) -> BuiltTransaction:
        return self._adapter(protocol_id).build_withdraw_tx(owner, amount)

    # ------------------------------------------------------------------
    # Chain
    # ------------------------------------------------------------------

    async def get_block_number(self) -> int:
        return await self._client.get_block_number()
