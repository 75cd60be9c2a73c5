"""Protocol interfaces for the Mantle yield aggregator."""
from .chain import ChainClient
from .encoder import CallEncoder
from .price_oracle import PriceSource
from .protocol_adapter import ProtocolAdapter

__all__ = ["CallEncoder", "ChainClient", "PriceSource", "ProtocolAdapter"]
