"""Pure builders for protocol data — no I/O."""
from __future__ import annotations

from ..interfaces.encoder import CallEncoder
from ..models import BuiltTransaction, PoolYield, ProtocolMetadata, UserPosition
from ..units import format_units, format_usd, parse_units
from .catalog import ProtocolDescriptor

DEPOSIT = "deposit"
WITHDRAW = "withdraw"


def build_metadata(desc: ProtocolDescriptor, network: str) -> ProtocolMetadata:
    return ProtocolMetadata(
        id=desc.id,
        name=desc.name,
        type=desc.type.value,
        network=network,
        apy=desc.apy,
        color=desc.color,
        tvl=desc.tvl,
    )


def build_pool_yield(desc: ProtocolDescriptor) -> PoolYield:
    return PoolYield(
        protocol_id=desc.id,
        protocol_name=desc.name,
        pool_name=desc.pool_name,
        asset_symbol=desc.asset_symbol,
        asset_address=desc.asset_address,
        apr=desc.position_apr,
        underlying=desc.underlying,
        risk_level=desc.risk_level,
        tvl=desc.tvl,
    )


def build_position(
    desc: ProtocolDescriptor, raw_balance: int, decimals: int, network: str
) -> UserPosition | None:
    """Build a position from a raw on-chain balance.

    Returns None for a zero balance. ``value`` is the balance times the
    descriptor's reference price:
        value = raw_balance / 10^decimals * reference_price
    """
    if raw_balance <= 0:
        return None

    balance = format_units(raw_balance, decimals)
    value = float(balance) * desc.reference_price

    return UserPosition(
        protocol_id=desc.id,
        protocol_name=desc.name,
        asset_symbol=desc.asset_symbol,
        asset_name=desc.asset_name,
        asset_address=desc.asset_address,
        balance=balance,
        balance_raw=str(raw_balance),
        apr=desc.position_apr,
        value=format_usd(value),
        network=network,
    )


def proxy_raw_balance(desc: ProtocolDescriptor, proxy_raw: int) -> int:
    """Synthetic balance derived from an unrelated token's balance.

    The proxy amount is read with 18 decimals, scaled by ``proxy_ratio`` and
    rounded to cents before being converted back to raw units of the asset.
    """
    proxy_amount = float(format_units(proxy_raw, 18))
    if proxy_amount <= 0:
        return 0
    synthetic = f"{proxy_amount * desc.proxy_ratio:.2f}"
    return parse_units(synthetic, desc.decimals)


def build_transaction(
    desc: ProtocolDescriptor,
    kind: str,
    amount: str,
    chain_id: int,
    encoder: CallEncoder,
) -> BuiltTransaction:
    """Encode a deposit or withdraw call for ``amount`` (human units).

    Raises:
        MalformedAmount: If ``amount`` is not a decimal number.
        ValueError: If ``kind`` is neither deposit nor withdraw.
    """
    amount_raw = parse_units(amount, desc.decimals)

    if kind == DEPOSIT:
        signature, gas = desc.deposit_signature, desc.deposit_gas
    elif kind == WITHDRAW:
        signature, gas = desc.withdraw_signature, desc.withdraw_gas
    else:
        raise ValueError(f"Unknown transaction type '{kind}'")

    payable = kind == DEPOSIT and desc.deposit_is_payable
    data = encoder.encode(signature, [] if payable else [amount_raw])

    return BuiltTransaction(
        to=desc.tx_target,
        data=data,
        value=str(amount_raw) if payable else "0",
        chain_id=chain_id,
        gas_limit=str(gas),
        type=kind,
    )
