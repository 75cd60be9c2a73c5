"""Integration tests for the registry with a mocked chain client."""
from __future__ import annotations

import asyncio
import dataclasses
from unittest.mock import AsyncMock

import pytest

from mantle_yield.config import AppConfig, RegistryConfig
from mantle_yield.errors import InvalidAddress, ProtocolNotFound
from mantle_yield.models import UserPosition
from mantle_yield.protocols import catalog
from mantle_yield.services import YieldRegistry, summarize_positions
from mantle_yield.services.demo import DEMO_ADDRESS


@pytest.fixture()
def mock_chain_client() -> AsyncMock:
    client = AsyncMock()
    client.chain_id = 5000
    client.read_erc20_balance.return_value = 0
    client.read_erc20_decimals.return_value = 18
    return client


@pytest.fixture()
def registry(sample_app_config: AppConfig, mock_chain_client: AsyncMock) -> YieldRegistry:
    return YieldRegistry(sample_app_config, client=mock_chain_client)


def _position(protocol_id: str, value: str, apr: float) -> UserPosition:
    return UserPosition(
        protocol_id=protocol_id,
        protocol_name=protocol_id,
        asset_symbol="USDC",
        asset_name="USD Coin",
        asset_address="0x0",
        balance="1",
        balance_raw="1",
        apr=apr,
        value=value,
        network="mantle-mainnet",
    )


class TestSummarizePositions:
    def test_empty_portfolio(self) -> None:
        summary = summarize_positions([])
        assert summary.total_balance == "$0.00"
        assert summary.average_apr == 0
        assert summary.protocol_count == 0

    def test_value_weighted_apr(self) -> None:
        summary = summarize_positions(
            [_position("lendle", "$100.00", 4.0), _position("aurelius", "$300.00", 8.0)]
        )
        assert summary.total_balance == "$400.00"
        assert summary.average_apr == pytest.approx(7.0)
        assert summary.protocol_count == 2

    def test_protocol_count_is_distinct(self) -> None:
        summary = summarize_positions(
            [_position("lendle", "$1.00", 1.0), _position("lendle", "$1.00", 1.0)]
        )
        assert summary.protocol_count == 1


class TestProtocols:
    def test_registration_order(self, registry: YieldRegistry) -> None:
        ids = [p.id for p in registry.list_supported_protocols()]
        assert ids == ["meth", "cmeth", "lendle", "aurelius", "usd1", "ondo"]

    def test_get_protocol(self, registry: YieldRegistry) -> None:
        assert registry.get_protocol("lendle").name == "Lendle"

    def test_unknown_protocol(self, registry: YieldRegistry) -> None:
        with pytest.raises(ProtocolNotFound):
            registry.get_protocol("aave")

    def test_pool_yields_cover_every_protocol(self, registry: YieldRegistry) -> None:
        assert len(registry.get_pool_yields()) == 6

    def test_network(self, registry: YieldRegistry) -> None:
        assert registry.network == "mantle-mainnet"


class TestUserPositions:
    @pytest.mark.asyncio
    async def test_empty_wallet(self, registry: YieldRegistry, wallet: str) -> None:
        portfolio = await registry.get_user_positions(wallet)
        assert portfolio.positions == ()
        assert portfolio.summary.total_balance == "$0.00"
        assert portfolio.summary.average_apr == 0
        assert portfolio.summary.protocol_count == 0

    @pytest.mark.asyncio
    async def test_aggregates_across_adapters(
        self, registry: YieldRegistry, mock_chain_client: AsyncMock, wallet: str
    ) -> None:
        async def balance(token: str, owner: str) -> int:
            if token == catalog.USDC:
                return 300_000_000  # 300 USDC
            if token == catalog.USDT:
                return 100_000_000  # 100 USDT
            return 0

        async def decimals(token: str) -> int:
            return 6 if token in (catalog.USDC, catalog.USDT) else 18

        mock_chain_client.read_erc20_balance.side_effect = balance
        mock_chain_client.read_erc20_decimals.side_effect = decimals

        portfolio = await registry.get_user_positions(wallet)

        assert [p.protocol_id for p in portfolio.positions] == ["lendle", "aurelius"]
        assert portfolio.summary.total_balance == "$400.00"
        # (300 * 6.2 + 100 * 5.8) / 400
        assert portfolio.summary.average_apr == 6.1
        assert portfolio.summary.protocol_count == 2

    @pytest.mark.asyncio
    async def test_demo_wallet(self, registry: YieldRegistry, mock_chain_client: AsyncMock) -> None:
        portfolio = await registry.get_user_positions(DEMO_ADDRESS)

        assert portfolio.summary.total_balance == "$175,135.00"
        assert portfolio.summary.average_apr == 5.18
        assert portfolio.summary.protocol_count == 6
        mock_chain_client.read_erc20_balance.assert_not_called()

    @pytest.mark.asyncio
    async def test_demo_wallet_is_case_insensitive(self, registry: YieldRegistry) -> None:
        portfolio = await registry.get_user_positions(DEMO_ADDRESS.lower())
        assert portfolio.summary.total_balance == "$175,135.00"

    @pytest.mark.asyncio
    async def test_demo_positions_keep_raw_and_balance_consistent(
        self, registry: YieldRegistry
    ) -> None:
        portfolio = await registry.get_user_positions(DEMO_ADDRESS)
        meth = portfolio.positions[0]
        assert meth.balance == "25.5"
        assert meth.balance_raw == "25500000000000000000"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("bad", ["", "0x123", "742d35Cc6634C0532925a3b844Bc9e7595f8bDe7", "0x" + "g" * 40])
    async def test_malformed_address(self, registry: YieldRegistry, bad: str) -> None:
        with pytest.raises(InvalidAddress):
            await registry.get_user_positions(bad)

    @pytest.mark.asyncio
    async def test_adapters_are_read_concurrently(
        self, sample_app_config: AppConfig, mock_chain_client: AsyncMock, wallet: str
    ) -> None:
        descriptors = (catalog.LENDLE, catalog.AURELIUS, catalog.CMETH)
        all_started = asyncio.Event()
        started = 0

        async def balance(token: str, owner: str) -> int:
            nonlocal started
            started += 1
            if started == len(descriptors):
                all_started.set()
            # each read only completes once every adapter has begun
            await all_started.wait()
            return 10**6

        mock_chain_client.read_erc20_balance.side_effect = balance
        registry = YieldRegistry(
            sample_app_config, client=mock_chain_client, descriptors=descriptors
        )

        portfolio = await registry.get_user_positions(wallet)

        assert started == len(descriptors)
        assert [p.protocol_id for p in portfolio.positions] == ["lendle", "aurelius", "cmeth"]

    @pytest.mark.asyncio
    async def test_slow_adapter_times_out(
        self, sample_app_config: AppConfig, mock_chain_client: AsyncMock, wallet: str
    ) -> None:
        async def hang(*args: object) -> int:
            await asyncio.sleep(10)
            return 0

        mock_chain_client.read_erc20_balance.side_effect = hang
        config = dataclasses.replace(
            sample_app_config, registry=RegistryConfig(adapter_timeout=0.05)
        )
        registry = YieldRegistry(
            config, client=mock_chain_client, descriptors=(catalog.LENDLE,)
        )

        portfolio = await registry.get_user_positions(wallet)

        assert portfolio.positions == ()


class TestTransactions:
    def test_build_deposit(self, registry: YieldRegistry, wallet: str) -> None:
        tx = registry.build_deposit_tx("lendle", wallet, "100")
        assert tx.data == "0xb6b55f25" + "5f5e100".rjust(64, "0")
        assert tx.value == "0"
        assert tx.gas_limit == "200000"

    def test_build_withdraw(self, registry: YieldRegistry, wallet: str) -> None:
        tx = registry.build_withdraw_tx("meth", wallet, "2")
        assert tx.type == "withdraw"
        assert tx.to == catalog.METH_STAKING

    def test_unknown_protocol(self, registry: YieldRegistry, wallet: str) -> None:
        with pytest.raises(ProtocolNotFound):
            registry.build_deposit_tx("aave", wallet, "1")


class TestBlockNumber:
    @pytest.mark.asyncio
    async def test_delegates_to_client(
        self, registry: YieldRegistry, mock_chain_client: AsyncMock
    ) -> None:
        mock_chain_client.get_block_number.return_value = 123
        assert await registry.get_block_number() == 123
