"""Action dispatcher: maps dashboard requests onto the registry and price oracle.

Each action returns a JSON-ready ``dict``. Bad input raises a
:class:`~mantle_yield.errors.ValidationError` subclass, unknown protocols raise
:class:`~mantle_yield.errors.ProtocolNotFound`; callers map ``error.status`` to
their transport.
"""
from __future__ import annotations

import json
import logging
import random
from datetime import date
from typing import Any, Awaitable, Callable, Mapping

from ..errors import InvalidQuoteRequest, MissingParameter, UnknownAction
from ..oracles import PriceOracle
from ..protocols.catalog import ZERO_ADDRESS
from ..units import parse_usd
from . import analytics
from .registry import YieldRegistry

logger = logging.getLogger(__name__)

DEFAULT_PERFORMANCE_BASE = 20000.0
UNKNOWN_PROTOCOL_TYPE = "Unknown"
DEFAULT_COLOR = "from-gray-500 to-gray-600"

Handler = Callable[[Mapping[str, Any]], Awaitable[dict[str, Any]]]


def _percent(value: float) -> str:
    return f"{value:g}%"


class RequestDispatcher:
    """Route ``action`` names to handlers."""

    def __init__(
        self,
        registry: YieldRegistry,
        oracle: PriceOracle,
        rng: random.Random | None = None,
        today: Callable[[], date] | None = None,
    ) -> None:
        self._registry = registry
        self._oracle = oracle
        self._rng = rng
        self._today = today or date.today

        self._handlers: dict[str, Handler] = {
            "listSupportedProtocols": self._list_supported_protocols,
            "getProtocolDetails": self._get_protocol_details,
            "getUserPositions": self._get_user_positions,
            "getPoolYields": self._get_pool_yields,
            "getYieldHistory": self._get_yield_history,
            "getProtocolDistribution": self._get_protocol_distribution,
            "getUserPerformanceHistory": self._get_user_performance_history,
            "buildDepositTx": self._build_deposit_tx,
            "buildWithdrawTx": self._build_withdraw_tx,
            "getBlockNumber": self._get_block_number,
            "getTokenPrices": self._get_token_prices,
            "getSwapQuote": self._get_swap_quote,
        }

    @property
    def actions(self) -> list[str]:
        return list(self._handlers)

    async def dispatch(
        self, action: str | None, params: Mapping[str, Any] | None = None
    ) -> dict[str, Any]:
        """Run one action.

        Raises:
            UnknownAction: ``action`` is not a supported action name.
            MissingParameter: A required parameter is absent or empty.
            InvalidQuoteRequest: A swap quote could not be produced.
            ProtocolNotFound: ``protocol`` does not name a supported protocol.
        """
        handler = self._handlers.get(action or "")
        if handler is None:
            raise UnknownAction(action)

        params = params or {}
        logger.info("Action: %s, Wallet: %s", action, params.get("wallet"))

        response = await handler(params)

        logger.debug("Response for %s: %s", action, json.dumps(response)[:300])
        return response

    @staticmethod
    def _require(params: Mapping[str, Any], *names: str) -> None:
        if any(not params.get(name) for name in names):
            raise MissingParameter(*names)

    # ------------------------------------------------------------------
    # Protocols
    # ------------------------------------------------------------------

    async def _list_supported_protocols(self, params: Mapping[str, Any]) -> dict[str, Any]:
        return {
            "protocols": [p.to_dict() for p in self._registry.list_supported_protocols()],
            "network": self._registry.network,
        }

    async def _get_protocol_details(self, params: Mapping[str, Any]) -> dict[str, Any]:
        self._require(params, "protocol")
        protocol_id = params["protocol"]
        protocol = self._registry.get_protocol(protocol_id)
        yields = [y for y in self._registry.get_pool_yields() if y.protocol_id == protocol_id]
        return {
            "protocol": protocol.to_dict(),
            "yields": [y.to_dict() for y in yields],
        }

    async def _get_pool_yields(self, params: Mapping[str, Any]) -> dict[str, Any]:
        return {"yields": [y.to_dict() for y in self._registry.get_pool_yields()]}

    # ------------------------------------------------------------------
    # Positions
    # ------------------------------------------------------------------

    async def _get_user_positions(self, params: Mapping[str, Any]) -> dict[str, Any]:
        self._require(params, "wallet")
        portfolio = await self._registry.get_user_positions(params["wallet"])
        protocols = {p.id: p for p in self._registry.list_supported_protocols()}

        grouped: dict[str, dict[str, Any]] = {}
        for position in portfolio.positions:
            if position.protocol_id not in grouped:
                meta = protocols.get(position.protocol_id)
                grouped[position.protocol_id] = {
                    "protocol": position.protocol_name,
                    "protocolType": meta.type if meta else UNKNOWN_PROTOCOL_TYPE,
                    "color": meta.color if meta and meta.color else DEFAULT_COLOR,
                    "assets": [],
                }
            grouped[position.protocol_id]["assets"].append(
                {
                    "name": position.asset_name,
                    "symbol": position.asset_symbol,
                    "balance": position.balance,
                    "apr": _percent(position.apr),
                    "value": position.value,
                }
            )

        summary = portfolio.summary
        return {
            "positions": list(grouped.values()),
            "totalBalance": summary.total_balance,
            "totalYield": _percent(summary.average_apr),
            "protocolCount": summary.protocol_count,
        }

    # ------------------------------------------------------------------
    # Analytics
    # ------------------------------------------------------------------

    async def _get_yield_history(self, params: Mapping[str, Any]) -> dict[str, Any]:
        history = analytics.generate_yield_history(
            self._registry.list_supported_protocols(), today=self._today(), rng=self._rng
        )
        return {"history": history}

    async def _get_protocol_distribution(self, params: Mapping[str, Any]) -> dict[str, Any]:
        return {
            "distribution": analytics.protocol_distribution(
                self._registry.list_supported_protocols()
            )
        }

    async def _get_user_performance_history(self, params: Mapping[str, Any]) -> dict[str, Any]:
        self._require(params, "wallet")
        portfolio = await self._registry.get_user_positions(params["wallet"])
        base_value = parse_usd(portfolio.summary.total_balance) or DEFAULT_PERFORMANCE_BASE
        history = analytics.generate_performance_history(
            base_value, today=self._today(), rng=self._rng
        )
        return {"history": history}

    # ------------------------------------------------------------------
    # Transactions
    # ------------------------------------------------------------------

    async def _build_deposit_tx(self, params: Mapping[str, Any]) -> dict[str, Any]:
        self._require(params, "protocol", "amount")
        tx = self._registry.build_deposit_tx(
            params["protocol"], params.get("wallet") or ZERO_ADDRESS, str(params["amount"])
        )
        return {"transaction": tx.to_dict()}

    async def _build_withdraw_tx(self, params: Mapping[str, Any]) -> dict[str, Any]:
        self._require(params, "protocol", "amount")
        tx = self._registry.build_withdraw_tx(
            params["protocol"], params.get("wallet") or ZERO_ADDRESS, str(params["amount"])
        )
        return {"transaction": tx.to_dict()}

    async def _get_block_number(self, params: Mapping[str, Any]) -> dict[str, Any]:
        block_number = await self._registry.get_block_number()
        return {"blockNumber": str(block_number)}

    # ------------------------------------------------------------------
    # Prices
    # ------------------------------------------------------------------

    async def _get_token_prices(self, params: Mapping[str, Any]) -> dict[str, Any]:
        prices = await self._oracle.get_token_prices()
        return {
            "prices": [p.to_dict() for p in prices],
            "timestamp": max((p.timestamp for p in prices), default=0),
        }

    async def _get_swap_quote(self, params: Mapping[str, Any]) -> dict[str, Any]:
        self._require(params, "fromSymbol", "toSymbol", "amount")
        from_symbol, to_symbol = params["fromSymbol"], params["toSymbol"]
        quote = await self._oracle.get_swap_quote(from_symbol, to_symbol, params["amount"])
        if quote is None:
            raise InvalidQuoteRequest(
                f"Cannot quote {params['amount']} {from_symbol} -> {to_symbol}"
            )
        return {"quote": quote.to_dict()}
