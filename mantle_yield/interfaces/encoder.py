"""Call encoder protocol — contract call-data construction."""
from typing import Protocol, Sequence


class CallEncoder(Protocol):
    """Abstract interface for turning a function signature + args into call data."""

    def encode(self, signature: str, args: Sequence[str | int] = ()) -> str: ...

    def supports(self, signature: str) -> bool: ...
