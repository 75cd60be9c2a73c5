"""Canned portfolio for the example wallet shown on the dashboard.

Requests for :data:`DEMO_ADDRESS` never touch the network; the positions are
built from fixed raw balances with the same builders live reads use.
"""
from __future__ import annotations

from ..models import UserPosition
from ..protocols import catalog, parser

DEMO_ADDRESS = "0x742d35Cc6634C0532925a3b844Bc9e7595f8bDe7"

# protocol descriptor -> raw balance in the asset's smallest unit
DEMO_BALANCES: tuple[tuple[catalog.ProtocolDescriptor, int], ...] = (
    (catalog.METH, 25_500_000_000_000_000_000),      # 25.5 mETH   = $60,690.00
    (catalog.CMETH, 12_000_000_000_000_000_000),     # 12 cmETH    = $28,560.00
    (catalog.LENDLE, 35_000_000_000),                # 35,000 USDC = $35,000.00
    (catalog.AURELIUS, 20_000_000_000),              # 20,000 USDT = $20,000.00
    (catalog.USD1, 18_385 * 10**18),                 # 18,385 USD1 = $18,385.00
    (catalog.ONDO, 12_500 * 10**18),                 # 12,500 USDY = $12,500.00
)


def is_demo_address(address: str) -> bool:
    return address.lower() == DEMO_ADDRESS.lower()


def demo_positions(network: str) -> list[UserPosition]:
    positions: list[UserPosition] = []
    for desc, raw in DEMO_BALANCES:
        position = parser.build_position(desc, raw, desc.decimals, network)
        if position is not None:
            positions.append(position)
    return positions
