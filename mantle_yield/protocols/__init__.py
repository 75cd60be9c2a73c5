"""Protocol integrations."""
from .adapter import MantleProtocolAdapter
from .catalog import PROTOCOL_DESCRIPTORS, PositionSource, ProtocolDescriptor, ProtocolType

__all__ = [
    "PROTOCOL_DESCRIPTORS",
    "PositionSource",
    "MantleProtocolAdapter",
    "ProtocolDescriptor",
    "ProtocolType",
]
