"""Configurable protocol adapter — one class for all integrated protocols."""
from __future__ import annotations

import asyncio
import logging

from ..abi import FixedSelectorEncoder
from ..interfaces.chain import ChainClient
from ..interfaces.encoder import CallEncoder
from ..models import BuiltTransaction, PoolYield, ProtocolMetadata, UserPosition
from . import parser
from .catalog import PositionSource, ProtocolDescriptor

logger = logging.getLogger(__name__)


class MantleProtocolAdapter:
    """Read positions and build transactions for one protocol on Mantle.

    Behaviour differences between protocols live entirely in the
    :class:`ProtocolDescriptor`.
    """

    def __init__(
        self,
        chain_client: ChainClient,
        descriptor: ProtocolDescriptor,
        network: str,
        encoder: CallEncoder | None = None,
    ) -> None:
        self._client = chain_client
        self._desc = descriptor
        self._network = network
        self._encoder: CallEncoder = encoder or FixedSelectorEncoder()
        self._metadata = parser.build_metadata(descriptor, network)

    @property
    def metadata(self) -> ProtocolMetadata:
        return self._metadata

    @property
    def protocol_id(self) -> str:
        return self._desc.id

    @property
    def descriptor(self) -> ProtocolDescriptor:
        return self._desc

    async def get_user_positions(self, owner: str) -> list[UserPosition]:
        """Best-effort position read: read failures are logged and yield []."""
        source = self._desc.position_source
        logger.info("[%s] Fetching %s positions for %s", self._desc.name, self._desc.asset_symbol, owner)

        if source is PositionSource.NONE:
            return []

        try:
            if source is PositionSource.PROXY_BALANCE:
                position = await self._read_proxy_position(owner)
            else:
                position = await self._read_token_position(owner)
        except Exception as e:
            logger.error("[%s] Error fetching positions: %s", self._desc.name, e)
            return []

        if position is None:
            return []

        logger.info(
            "[%s] Balance: %s %s, Value: %s",
            self._desc.name, position.balance, position.asset_symbol, position.value,
        )
        return [position]

    async def _read_token_position(self, owner: str) -> UserPosition | None:
        token = self._desc.asset_address
        balance, decimals = await asyncio.gather(
            self._client.read_erc20_balance(token, owner),
            self._client.read_erc20_decimals(token),
        )
        return parser.build_position(self._desc, balance, decimals, self._network)

    async def _read_proxy_position(self, owner: str) -> UserPosition | None:
        if not self._desc.proxy_token:
            return None
        proxy_raw = await self._client.read_erc20_balance(self._desc.proxy_token, owner)
        raw = parser.proxy_raw_balance(self._desc, proxy_raw)
        return parser.build_position(self._desc, raw, self._desc.decimals, self._network)

    def get_pool_yields(self) -> list[PoolYield]:
        return [parser.build_pool_yield(self._desc)]

    def build_deposit_tx(self, owner: str, amount: str) -> BuiltTransaction:
        logger.debug("[%s] Building deposit of %s for %s", self._desc.name, amount, owner)
        return parser.build_transaction(
            self._desc, parser.DEPOSIT, amount, self._client.chain_id, self._encoder
        )

    def build_withdraw_tx(self, owner: str, amount: str) -> BuiltTransaction:
        logger.debug("[%s] Building withdraw of %s for %s", self._desc.name, amount, owner)
        return parser.build_transaction(
            self._desc, parser.WITHDRAW, amount, self._client.chain_id, self._encoder
        )
