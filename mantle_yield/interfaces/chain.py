"""Chain client protocol — EVM JSON-RPC abstraction."""
from typing import Any, Protocol


class ChainClient(Protocol):
    """Abstract interface for raw contract reads on one EVM network."""

    @property
    def chain_id(self) -> int: ...

    async def rpc_call(self, method: str, params: list[Any]) -> Any: ...

    async def call(self, to: str, data: str) -> str: ...

    async def get_balance(self, address: str) -> int: ...

    async def get_block_number(self) -> int: ...

    async def read_erc20_balance(self, token: str, owner: str) -> int: ...

    async def read_erc20_decimals(self, token: str) -> int: ...

    async def read_erc20_symbol(self, token: str) -> str: ...
