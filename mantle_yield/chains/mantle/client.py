"""Mantle JSON-RPC client — raw eth_call reads without contract bindings."""
from __future__ import annotations

import asyncio
import itertools
import logging
import ssl
from typing import Any

import aiohttp
import certifi

from ...abi import FixedSelectorEncoder, UNKNOWN_SYMBOL, decode_short_string, decode_uint
from ...config import NetworkConfig
from ...errors import RpcError, TransportError
from ...interfaces.encoder import CallEncoder

logger = logging.getLogger(__name__)

DEFAULT_DECIMALS = 18
MAX_DECIMALS = 255  # uint8


class MantleClient:
    """Single-endpoint JSON-RPC client for the Mantle network.

    Request ids come from a strictly increasing counter and are only used to
    correlate request and response. Failed calls are not retried.
    """

    def __init__(
        self, config: NetworkConfig, encoder: CallEncoder | None = None
    ) -> None:
        self.rpc_url = config.rpc_url
        self.timeout = config.rpc_timeout
        self.network = config.name
        self._chain_id = config.chain_id
        self._encoder: CallEncoder = encoder or FixedSelectorEncoder()
        self._request_ids = itertools.count(1)

    @property
    def chain_id(self) -> int:
        return self._chain_id

    async def rpc_call(self, method: str, params: list[Any]) -> Any:
        """Send one JSON-RPC request and return its ``result``.

        Raises:
            RpcError: The response envelope carries an ``error`` field.
            TransportError: Connection failure, timeout, non-2xx status or
                malformed JSON.
        """
        request_id = next(self._request_ids)
        payload = {"jsonrpc": "2.0", "id": request_id, "method": method, "params": params}

        ssl_context = ssl.create_default_context(cafile=certifi.where())
        connector = aiohttp.TCPConnector(ssl=ssl_context)

        try:
            async with aiohttp.ClientSession(connector=connector) as session:
                async with session.post(
                    self.rpc_url,
                    json=payload,
                    timeout=aiohttp.ClientTimeout(total=self.timeout),
                ) as response:
                    if response.status >= 300:
                        raise TransportError(
                            f"RPC endpoint {self.rpc_url} returned HTTP {response.status}"
                        )
                    result = await response.json(content_type=None)
        except TransportError:
            raise
        except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as e:
            logger.warning("RPC %s #%d to %s failed: %s", method, request_id, self.rpc_url, e)
            raise TransportError(f"RPC request {method} failed: {e}") from e

        if not isinstance(result, dict):
            raise TransportError(f"Malformed RPC response for {method}: {result!r}")

        error = result.get("error")
        if error:
            if isinstance(error, dict):
                raise RpcError(str(error.get("message", error)), error.get("code"))
            raise RpcError(str(error))

        logger.debug("RPC %s #%d ok", method, request_id)
        return result.get("result")

    async def get_block_number(self) -> int:
        result = await self.rpc_call("eth_blockNumber", [])
        try:
            return int(result, 16)
        except (TypeError, ValueError) as e:
            raise TransportError(f"Malformed eth_blockNumber result: {result!r}") from e

    async def call(self, to: str, data: str) -> str:
        """``eth_call`` against the latest block; returns the raw hex result."""
        result = await self.rpc_call("eth_call", [{"to": to, "data": data}, "latest"])
        return result or "0x"

    async def get_balance(self, address: str) -> int:
        result = await self.rpc_call("eth_getBalance", [address, "latest"])
        return decode_uint(result)

    async def read_erc20_balance(self, token: str, owner: str) -> int:
        """ERC20 ``balanceOf``. An empty ``0x`` result counts as zero."""
        data = self._encoder.encode("balanceOf(address)", [owner])
        return decode_uint(await self.call(token, data))

    async def read_erc20_decimals(self, token: str) -> int:
        """ERC20 ``decimals``, defaulting to 18 when the read fails."""
        data = self._encoder.encode("decimals()")
        try:
            result = await self.call(token, data)
            if result == "0x":
                return DEFAULT_DECIMALS
            decimals = decode_uint(result)
            if decimals > MAX_DECIMALS:
                raise ValueError(f"decimals out of range: {decimals}")
            return decimals
        except Exception as e:
            logger.warning("decimals() failed for %s, assuming %d: %s", token, DEFAULT_DECIMALS, e)
            return DEFAULT_DECIMALS

    async def read_erc20_symbol(self, token: str) -> str:
        data = self._encoder.encode("symbol()")
        try:
            return decode_short_string(await self.call(token, data))
        except Exception as e:
            logger.warning("symbol() failed for %s: %s", token, e)
            return UNKNOWN_SYMBOL
