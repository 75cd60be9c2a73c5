"""Tokens priced by the oracle and their fallback pricing rules."""
from __future__ import annotations

from ..models import TrackedToken
from ..protocols.catalog import CMETH_TOKEN, METH_TOKEN, MNT, USDC, USDT, WETH

USD1_TOKEN = "0xC74E9cB8df25597bD6A6bD4D5c0cA1e170Aa8af4"
USDY_TOKEN = "0x5bE26527e817998A7206475496fDE1E68957c5A6"

TRACKED_TOKENS: tuple[TrackedToken, ...] = (
    TrackedToken("MNT", MNT, "mantle"),
    TrackedToken("WETH", WETH, "weth"),
    TrackedToken("mETH", METH_TOKEN, "mantle-staked-ether"),
    TrackedToken("cmETH", CMETH_TOKEN, None),
    TrackedToken("USDC", USDC, "usd-coin"),
    TrackedToken("USDT", USDT, "tether"),
    TrackedToken("USD1", USD1_TOKEN, "usd1-wlfi"),
    TrackedToken("USDY", USDY_TOKEN, "ondo-us-dollar-yield"),
)

# Fallback rules, applied only to symbols neither source priced.
PEGGED_PRICES: dict[str, float] = {
    "USD1": 1.00,
}

# symbol -> (base symbol, multiplier); bases are listed before dependents.
DERIVED_PRICES: dict[str, tuple[str, float]] = {
    "mETH": ("WETH", 1.05),
    "cmETH": ("mETH", 1.0),
}

ESTIMATED_PRICES: dict[str, float] = {
    "MNT": 0.85,
    "WETH": 2380.0,
    "mETH": 2500.0,
    "cmETH": 2500.0,
    "USDC": 1.0,
    "USDT": 1.0,
    "USDY": 1.05,
}

GENERIC_DEFAULT_PRICE = 1.0
