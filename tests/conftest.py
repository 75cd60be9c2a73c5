"""Shared test fixtures and sample data."""
from __future__ import annotations

import textwrap
from pathlib import Path

import pytest

from mantle_yield.config import AppConfig, NetworkConfig, OracleConfig, RegistryConfig
from mantle_yield.models import UserPosition


# ---------------------------------------------------------------------------
# Config fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def sample_network_config() -> NetworkConfig:
    return NetworkConfig(
        name="mantle-mainnet",
        rpc_url="https://rpc.example.com",
        rpc_timeout=5,
    )


@pytest.fixture()
def sample_oracle_config() -> OracleConfig:
    return OracleConfig(
        cache_timeout=60.0,
        request_timeout=5,
        coingecko_url="https://coingecko.example.com/simple/price",
        defillama_url="https://llama.example.com/prices/current",
    )


@pytest.fixture()
def sample_app_config(
    sample_network_config: NetworkConfig, sample_oracle_config: OracleConfig
) -> AppConfig:
    return AppConfig(
        network=sample_network_config,
        registry=RegistryConfig(adapter_timeout=1.0),
        oracle=sample_oracle_config,
    )


# ---------------------------------------------------------------------------
# Model fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def sample_position() -> UserPosition:
    return UserPosition(
        protocol_id="lendle",
        protocol_name="Lendle",
        asset_symbol="USDC",
        asset_name="USD Coin",
        asset_address="0x09Bc4E0D10E52467bde4D26bC7b4F0a684B8A1e0",
        balance="1500.5",
        balance_raw="1500500000",
        apr=6.2,
        value="$1,500.50",
        network="mantle-mainnet",
    )


# ---------------------------------------------------------------------------
# Config YAML fixture
# ---------------------------------------------------------------------------

SAMPLE_YAML = textwrap.dedent("""\
    network:
      name: mantle-testnet
      rpc_url: "https://rpc.sepolia.example.com"
      rpc_timeout: 7
    registry:
      adapter_timeout: 12
    oracle:
      cache_timeout: 30
      request_timeout: 4
      coingecko_url: "https://cg.example.com/simple/price"
      defillama_url: "https://llama.example.com/prices/current"
""")


@pytest.fixture()
def sample_yaml_path(tmp_path: Path) -> Path:
    cfg_file = tmp_path / "config.yaml"
    cfg_file.write_text(SAMPLE_YAML)
    return cfg_file


# ---------------------------------------------------------------------------
# Sample on-chain data
# ---------------------------------------------------------------------------

WALLET = "0x1111111111111111111111111111111111111111"


@pytest.fixture()
def wallet() -> str:
    return WALLET


@pytest.fixture()
def symbol_result() -> str:
    """ABI-encoded ``symbol()`` return value for "USDC"."""
    return (
        "0x"
        + "20".rjust(64, "0")
        + "4".rjust(64, "0")
        + "55534443".ljust(64, "0")
    )
