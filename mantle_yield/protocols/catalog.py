"""Mantle contract addresses and the per-protocol descriptors."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class ProtocolType(str, Enum):
    LIQUID_STAKING = "Liquid Staking"
    LENDING = "Lending"
    RWA = "RWA"
    YIELD = "Yield"


class PositionSource(str, Enum):
    """How an adapter derives a wallet's position."""

    TOKEN_BALANCE = "token_balance"
    PROXY_BALANCE = "proxy_balance"
    NONE = "none"


# Mantle mainnet
METH_TOKEN = "0xcDA86A272531e8640cD7F1a92c01839911B90bb0"
METH_STAKING = "0xe3cBd06D7dadB3F4e6557bAb7EdD924CD1489E8f"
CMETH_TOKEN = "0xE6829d9a7eE3040e1276Fa75293Bde931859e8fA"
USDC = "0x09Bc4E0D10E52467bde4D26bC7b4F0a684B8A1e0"
USDT = "0x201EBa5CC46D216Ce6DC03F6a759e8E766e956aE"
WETH = "0xdEAddEaDdeadDEadDEADDEAddEADDEAddead1111"
MNT = "0x78c1b0C915c4FAA5FffA6CAbf0219DA63d7f4cb8"

# Placeholder vault addresses; the RWA vault contracts are not integrated yet.
USD1_VAULT = "0x0000000000000000000000000000000000000001"
ONDO_USDY_VAULT = "0x0000000000000000000000000000000000000002"

ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"

ETH_REFERENCE_PRICE = 2380.0
USD_REFERENCE_PRICE = 1.0

# USD1 balance heuristic: 10% of the wallet's MNT balance.
USD1_PROXY_RATIO = 0.1


@dataclass(frozen=True)
class ProtocolDescriptor:
    """Everything that differs between two protocol integrations."""

    id: str
    name: str
    type: ProtocolType
    apy: float
    tvl: float
    color: str
    asset_symbol: str
    asset_name: str
    asset_address: str
    tx_target: str
    decimals: int
    reference_price: float
    position_apr: float
    deposit_gas: int
    withdraw_gas: int
    pool_name: str
    underlying: str
    risk_level: str
    deposit_signature: str = "deposit(uint256)"
    withdraw_signature: str = "withdraw(uint256)"
    position_source: PositionSource = PositionSource.TOKEN_BALANCE
    proxy_token: str | None = None
    proxy_ratio: float = 1.0

    @property
    def deposit_is_payable(self) -> bool:
        """Argument-less deposit calls carry the amount as native value."""
        return self.deposit_signature.endswith("()")


METH = ProtocolDescriptor(
    id="meth",
    name="mETH Protocol",
    type=ProtocolType.LIQUID_STAKING,
    apy=4.8,
    tvl=245_000_000,
    color="from-primary to-primary/60",
    asset_symbol="mETH",
    asset_name="Mantle Staked ETH",
    asset_address=METH_TOKEN,
    tx_target=METH_STAKING,
    decimals=18,
    reference_price=ETH_REFERENCE_PRICE,
    position_apr=4.5,
    deposit_gas=150_000,
    withdraw_gas=180_000,
    pool_name="mETH Staking Pool",
    underlying="ETH staked on Mantle for liquid staking rewards",
    risk_level="medium",
    deposit_signature="stake()",
    withdraw_signature="unstake(uint256)",
)

CMETH = ProtocolDescriptor(
    id="cmeth",
    name="cmETH",
    type=ProtocolType.LIQUID_STAKING,
    apy=5.2,
    tvl=89_000_000,
    color="from-primary to-secondary",
    asset_symbol="cmETH",
    asset_name="Collateral mETH",
    asset_address=CMETH_TOKEN,
    tx_target=CMETH_TOKEN,
    decimals=18,
    reference_price=ETH_REFERENCE_PRICE,
    position_apr=5.2,
    deposit_gas=150_000,
    withdraw_gas=180_000,
    pool_name="cmETH Collateral Pool",
    underlying="Collateralized mETH for enhanced yield and DeFi composability",
    risk_level="medium",
)

LENDLE = ProtocolDescriptor(
    id="lendle",
    name="Lendle",
    type=ProtocolType.LENDING,
    apy=6.2,
    tvl=156_000_000,
    color="from-secondary to-secondary/60",
    asset_symbol="USDC",
    asset_name="USD Coin",
    asset_address=USDC,
    tx_target=USDC,
    decimals=6,
    reference_price=USD_REFERENCE_PRICE,
    position_apr=6.2,
    deposit_gas=200_000,
    withdraw_gas=200_000,
    pool_name="USDC Lending Pool",
    underlying="USDC lending on Mantle via Lendle protocol",
    risk_level="low",
)

AURELIUS = ProtocolDescriptor(
    id="aurelius",
    name="Aurelius",
    type=ProtocolType.LENDING,
    apy=5.8,
    tvl=78_000_000,
    color="from-amber-500 to-amber-600",
    asset_symbol="USDT",
    asset_name="Tether USD",
    asset_address=USDT,
    tx_target=USDT,
    decimals=6,
    reference_price=USD_REFERENCE_PRICE,
    position_apr=5.8,
    deposit_gas=200_000,
    withdraw_gas=200_000,
    pool_name="USDT Lending Pool",
    underlying="USDT lending on Mantle via Aurelius protocol",
    risk_level="low",
)

USD1 = ProtocolDescriptor(
    id="usd1",
    name="USD1",
    type=ProtocolType.RWA,
    apy=5.2,
    tvl=312_000_000,
    color="from-emerald-500 to-emerald-600",
    asset_symbol="USD1",
    asset_name="USD1 – RWA Stablecoin",
    asset_address=USD1_VAULT,
    tx_target=USD1_VAULT,
    decimals=18,
    reference_price=USD_REFERENCE_PRICE,
    position_apr=5.2,
    deposit_gas=250_000,
    withdraw_gas=250_000,
    pool_name="USD1 RWA Stablecoin Pool",
    underlying="Tokenized short-term US Treasury bills via off-chain SPV",
    risk_level="low",
    position_source=PositionSource.PROXY_BALANCE,
    proxy_token=MNT,
    proxy_ratio=USD1_PROXY_RATIO,
)

ONDO = ProtocolDescriptor(
    id="ondo",
    name="Ondo Finance",
    type=ProtocolType.RWA,
    apy=4.5,
    tvl=198_000_000,
    color="from-blue-500 to-blue-600",
    asset_symbol="USDY",
    asset_name="Ondo US Dollar Yield",
    asset_address=ONDO_USDY_VAULT,
    tx_target=ONDO_USDY_VAULT,
    decimals=18,
    reference_price=USD_REFERENCE_PRICE,
    position_apr=4.5,
    deposit_gas=200_000,
    withdraw_gas=200_000,
    pool_name="USDY Yield Pool",
    underlying="US Dollar Yield - tokenized short-term US Treasuries and bank demand deposits",
    risk_level="low",
    position_source=PositionSource.NONE,
)

# Registration order is display order.
PROTOCOL_DESCRIPTORS: tuple[ProtocolDescriptor, ...] = (
    METH,
    CMETH,
    LENDLE,
    AURELIUS,
    USD1,
    ONDO,
)
