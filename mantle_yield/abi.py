"""Call-data encoding for a fixed set of contract functions — no I/O.

Selectors are hardcoded rather than derived from keccak hashes; only the
signatures below are supported.
"""
from __future__ import annotations

import logging
from typing import Sequence

logger = logging.getLogger(__name__)

ZERO_SELECTOR = "0x00000000"

FUNCTION_SELECTORS: dict[str, str] = {
    "balanceOf(address)": "0x70a08231",
    "decimals()": "0x313ce567",
    "symbol()": "0x95d89b41",
    "totalSupply()": "0x18160ddd",
    "stake()": "0x3a4b66f1",
    "unstake(uint256)": "0x2e1a7d4d",
    "deposit(uint256)": "0xb6b55f25",
    "withdraw(uint256)": "0x2e1a7d4d",
}

UNKNOWN_SYMBOL = "UNKNOWN"


def _encode_word(arg: str | int) -> str:
    """Encode one static argument as a 32-byte word (64 hex chars)."""
    if isinstance(arg, str) and arg.startswith("0x"):
        return arg[2:].lower().rjust(64, "0")
    return format(int(arg), "x").rjust(64, "0")


def encode_call(signature: str, args: Sequence[str | int] = ()) -> str:
    """Build call data for ``signature`` with static ``args``.

    Strings starting with ``0x`` are encoded as addresses, anything else as
    uint256. Unknown signatures fall back to the zero selector.
    """
    selector = FUNCTION_SELECTORS.get(signature)
    if selector is None:
        logger.warning("No selector for %s, using %s", signature, ZERO_SELECTOR)
        selector = ZERO_SELECTOR

    return selector + "".join(_encode_word(arg) for arg in args)


def decode_uint(result: str) -> int:
    """Decode a uint word returned by ``eth_call``; ``0x`` is zero."""
    if not result or result == "0x":
        return 0
    return int(result, 16)


def decode_short_string(result: str) -> str:
    """Decode an ABI-encoded string return value (offset, length, data).

    Stops at the first NUL byte. Returns ``UNKNOWN`` when the payload is too
    short or cannot be decoded.
    """
    try:
        payload = result[2:] if result.startswith("0x") else result
        if len(payload) <= 128:
            return UNKNOWN_SYMBOL

        offset = int(payload[:64], 16) * 2
        length = int(payload[offset : offset + 64], 16)
        data = bytes.fromhex(payload[offset + 64 : offset + 64 + length * 2])
        if len(data) != length:
            return UNKNOWN_SYMBOL

        return data.split(b"\x00", 1)[0].decode("utf-8")
    except (ValueError, UnicodeDecodeError):
        return UNKNOWN_SYMBOL


class FixedSelectorEncoder:
    """CallEncoder backed by the fixed selector table."""

    def encode(self, signature: str, args: Sequence[str | int] = ()) -> str:
        return encode_call(signature, args)

    def supports(self, signature: str) -> bool:
        return signature in FUNCTION_SELECTORS
