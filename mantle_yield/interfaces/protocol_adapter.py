"""Protocol adapter — per-protocol positions, yields and transactions."""
from typing import Protocol

from ..models import BuiltTransaction, PoolYield, ProtocolMetadata, UserPosition


class ProtocolAdapter(Protocol):
    """Abstract interface for one integrated protocol."""

    @property
    def metadata(self) -> ProtocolMetadata: ...

    async def get_user_positions(self, owner: str) -> list[UserPosition]: ...

    def get_pool_yields(self) -> list[PoolYield]: ...

    def build_deposit_tx(self, owner: str, amount: str) -> BuiltTransaction: ...

    def build_withdraw_tx(self, owner: str, amount: str) -> BuiltTransaction: ...
