"""Synthetic time series for the analytics charts. No I/O."""
from __future__ import annotations

import math
import random
from datetime import date, timedelta
from typing import Any, Sequence

from ..models import ProtocolMetadata

HISTORY_DAYS = 30
DEFAULT_APY = 5.0


def _dates(days: int, today: date | None) -> list[tuple[int, str]]:
    """(days_ago, ISO date) pairs from ``days`` ago up to and including today."""
    today = today or date.today()
    return [(i, (today - timedelta(days=i)).isoformat()) for i in range(days, -1, -1)]


def generate_yield_history(
    protocols: Sequence[ProtocolMetadata],
    days: int = HISTORY_DAYS,
    today: date | None = None,
    rng: random.Random | None = None,
) -> list[dict[str, Any]]:
    """APY per protocol name for each of the last ``days`` days plus today.

    apy(i) = base_apy + sin(i * 0.3) * 0.5 + U(-0.15, 0.15)
    """
    rng = rng or random.Random()
    history: list[dict[str, Any]] = []

    for i, day in _dates(days, today):
        entry: dict[str, Any] = {"date": day}
        for protocol in protocols:
            base = protocol.apy or DEFAULT_APY
            variation = math.sin(i * 0.3) * 0.5 + (rng.random() * 0.3 - 0.15)
            entry[protocol.name] = round(base + variation, 2)
        history.append(entry)

    return history


def generate_performance_history(
    base_value: float,
    days: int = HISTORY_DAYS,
    today: date | None = None,
    rng: random.Random | None = None,
) -> list[dict[str, Any]]:
    """Random-walk portfolio value seeded from ``base_value``.

    Earnings are 10% of each positive daily change, 0 otherwise.
    """
    rng = rng or random.Random()
    history: list[dict[str, Any]] = []
    value = base_value

    for i, day in _dates(days, today):
        daily_change = math.sin(i * 0.2) * 200 + (rng.random() * 100 - 50)
        value += daily_change
        history.append(
            {
                "date": day,
                "value": round(value, 2),
                "earnings": round(daily_change * 0.1 if daily_change > 0 else 0.0, 2),
            }
        )

    return history


def protocol_distribution(protocols: Sequence[ProtocolMetadata]) -> list[dict[str, Any]]:
    return [
        {"name": p.name, "value": p.tvl or 0, "type": p.type}
        for p in protocols
    ]
