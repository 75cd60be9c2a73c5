"""Price source protocol — one upstream price feed."""
from typing import Protocol

from ..models import SourceQuote, TrackedToken


class PriceSource(Protocol):
    """Abstract interface for fetching USD prices for a batch of tokens.

    Implementations never raise on network failure; they return what they
    could fetch, possibly nothing.
    """

    @property
    def source_name(self) -> str: ...

    async def fetch_prices(self, tokens: list[TrackedToken]) -> dict[str, SourceQuote]: ...
