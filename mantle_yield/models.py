"""Data models — all frozen (immutable).

``to_dict()`` returns the wire form consumed by the dashboard, with camelCase
field names.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class ProtocolMetadata:
    """Static descriptor of a supported protocol."""

    id: str
    name: str
    type: str
    network: str
    apy: float
    color: str = ""
    tvl: float | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "id": self.id,
            "name": self.name,
            "type": self.type,
            "network": self.network,
            "apy": self.apy,
            "color": self.color,
        }
        if self.tvl is not None:
            data["tvl"] = self.tvl
        return data


@dataclass(frozen=True)
class UserPosition:
    """A wallet's holding of one asset in one protocol."""

    protocol_id: str
    protocol_name: str
    asset_symbol: str
    asset_name: str
    asset_address: str
    balance: str
    balance_raw: str
    apr: float
    value: str
    network: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "protocolId": self.protocol_id,
            "protocolName": self.protocol_name,
            "assetSymbol": self.asset_symbol,
            "assetName": self.asset_name,
            "assetAddress": self.asset_address,
            "balance": self.balance,
            "balanceRaw": self.balance_raw,
            "apr": self.apr,
            "value": self.value,
            "network": self.network,
        }


@dataclass(frozen=True)
class PoolYield:
    protocol_id: str
    protocol_name: str
    pool_name: str
    asset_symbol: str
    asset_address: str
    apr: float
    underlying: str
    risk_level: str
    tvl: float | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "protocolId": self.protocol_id,
            "protocolName": self.protocol_name,
            "poolName": self.pool_name,
            "assetSymbol": self.asset_symbol,
            "assetAddress": self.asset_address,
            "apr": self.apr,
            "underlying": self.underlying,
            "riskLevel": self.risk_level,
        }
        if self.tvl is not None:
            data["tvl"] = self.tvl
        return data


@dataclass(frozen=True)
class BuiltTransaction:
    """Unsigned transaction skeleton. Never signed or sent by this package."""

    to: str
    data: str
    value: str
    chain_id: int
    gas_limit: str
    type: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "to": self.to,
            "data": self.data,
            "value": self.value,
            "chainId": self.chain_id,
            "gasLimit": self.gas_limit,
            "type": self.type,
        }


@dataclass(frozen=True)
class PortfolioSummary:
    total_balance: str
    average_apr: float
    protocol_count: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "totalBalance": self.total_balance,
            "averageApr": self.average_apr,
            "protocolCount": self.protocol_count,
        }


@dataclass(frozen=True)
class Portfolio:
    """Positions across all protocols plus the aggregate summary."""

    positions: tuple[UserPosition, ...]
    summary: PortfolioSummary

    def to_dict(self) -> dict[str, Any]:
        return {
            "positions": [p.to_dict() for p in self.positions],
            "summary": self.summary.to_dict(),
        }


@dataclass(frozen=True)
class TrackedToken:
    """A token priced by the oracle."""

    symbol: str
    address: str
    coingecko_id: str | None = None


@dataclass(frozen=True)
class TokenPrice:
    symbol: str
    address: str
    price: float
    source: str
    timestamp: int  # epoch milliseconds
    change24h: float | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "symbol": self.symbol,
            "address": self.address,
            "price": self.price,
            "source": self.source,
            "timestamp": self.timestamp,
        }
        if self.change24h is not None:
            data["change24h"] = self.change24h
        return data


@dataclass(frozen=True)
class SourceQuote:
    """One price reading from a single price source."""

    price: float
    change24h: float | None = None


@dataclass(frozen=True)
class SwapQuote:
    from_symbol: str
    to_symbol: str
    from_amount: str
    to_amount: str
    exchange_rate: str
    price_impact: str
    from_price: float
    to_price: float
    venue: str
    route: tuple[str, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict[str, Any]:
        return {
            "fromSymbol": self.from_symbol,
            "toSymbol": self.to_symbol,
            "fromAmount": self.from_amount,
            "toAmount": self.to_amount,
            "exchangeRate": self.exchange_rate,
            "priceImpact": self.price_impact,
            "fromPrice": self.from_price,
            "toPrice": self.to_price,
            "route": list(self.route),
            "venue": self.venue,
        }
