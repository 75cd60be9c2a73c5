"""Configuration loader — reads config.yaml, interpolates env vars, validates."""
from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv

logger = logging.getLogger(__name__)

DEFAULT_NETWORK = "mantle-mainnet"
DEFAULT_RPC_URL = "https://mantle-rpc.publicnode.com"

CHAIN_IDS: dict[str, int] = {
    "mantle-mainnet": 5000,
    "mantle-testnet": 5003,
}

# ---------------------------------------------------------------------------
# Frozen config dataclasses
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class NetworkConfig:
    name: str = DEFAULT_NETWORK
    rpc_url: str = DEFAULT_RPC_URL
    rpc_timeout: int = 15

    @property
    def chain_id(self) -> int:
        return CHAIN_IDS.get(self.name, CHAIN_IDS[DEFAULT_NETWORK])


@dataclass(frozen=True)
class RegistryConfig:
    adapter_timeout: float = 20.0


@dataclass(frozen=True)
class OracleConfig:
    cache_timeout: float = 60.0
    request_timeout: int = 10
    coingecko_url: str = "https://api.coingecko.com/api/v3/simple/price"
    defillama_url: str = "https://coins.llama.fi/prices/current"


@dataclass(frozen=True)
class AppConfig:
    network: NetworkConfig = field(default_factory=NetworkConfig)
    registry: RegistryConfig = field(default_factory=RegistryConfig)
    oracle: OracleConfig = field(default_factory=OracleConfig)


# ---------------------------------------------------------------------------
# Env interpolation
# ---------------------------------------------------------------------------

_ENV_VAR_RE = re.compile(r"\$\{([^}]+)}")


def _interpolate_env(value: Any) -> Any:
    """Recursively replace ${VAR} references with environment variable values."""
    if isinstance(value, str):
        return _ENV_VAR_RE.sub(lambda m: os.environ.get(m.group(1), ""), value)
    if isinstance(value, dict):
        return {k: _interpolate_env(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_interpolate_env(item) for item in value]
    return value


def _or_default(value: Any, default: Any) -> Any:
    """Treat missing and empty (un-set env var) values as absent."""
    if value is None or value == "":
        return default
    return value


# ---------------------------------------------------------------------------
# YAML → dataclass builders
# ---------------------------------------------------------------------------


def _build_network(raw: dict[str, Any]) -> NetworkConfig:
    return NetworkConfig(
        name=_or_default(raw.get("name"), DEFAULT_NETWORK),
        rpc_url=_or_default(raw.get("rpc_url"), DEFAULT_RPC_URL),
        rpc_timeout=int(_or_default(raw.get("rpc_timeout"), 15)),
    )


def _build_registry(raw: dict[str, Any]) -> RegistryConfig:
    return RegistryConfig(
        adapter_timeout=float(_or_default(raw.get("adapter_timeout"), 20.0)),
    )


def _build_oracle(raw: dict[str, Any]) -> OracleConfig:
    return OracleConfig(
        cache_timeout=float(_or_default(raw.get("cache_timeout"), 60.0)),
        request_timeout=int(_or_default(raw.get("request_timeout"), 10)),
        coingecko_url=_or_default(raw.get("coingecko_url"), OracleConfig.coingecko_url),
        defillama_url=_or_default(raw.get("defillama_url"), OracleConfig.defillama_url),
    )


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def load_config(config_path: str | Path | None = None) -> AppConfig:
    """Load and validate application configuration from YAML + .env.

    Args:
        config_path: Path to config.yaml. Defaults to ``config.yaml`` in the
            project root (one level up from this package).
    """
    load_dotenv()

    if config_path is None:
        config_path = Path(__file__).resolve().parent.parent / "config.yaml"
    config_path = Path(config_path)

    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path) as f:
        raw = yaml.safe_load(f) or {}

    raw = _interpolate_env(raw)

    cfg = AppConfig(
        network=_build_network(raw.get("network") or {}),
        registry=_build_registry(raw.get("registry") or {}),
        oracle=_build_oracle(raw.get("oracle") or {}),
    )

    _validate(cfg)
    logger.info("Configuration loaded from %s", config_path)
    return cfg


def _validate(cfg: AppConfig) -> None:
    """Raise on invalid configuration."""
    if cfg.network.name not in CHAIN_IDS:
        raise ValueError(
            f"Unknown network '{cfg.network.name}'. "
            f"Available: {', '.join(CHAIN_IDS)}"
        )
    if cfg.network.rpc_timeout <= 0:
        raise ValueError("network.rpc_timeout must be positive")
    if cfg.registry.adapter_timeout <= 0:
        raise ValueError("registry.adapter_timeout must be positive")
    if cfg.oracle.cache_timeout <= 0:
        raise ValueError("oracle.cache_timeout must be positive")
    if cfg.oracle.request_timeout <= 0:
        raise ValueError("oracle.request_timeout must be positive")
