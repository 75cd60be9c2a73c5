"""Command-line interface for the Mantle yield aggregator."""
from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from typing import Any

from .chains.mantle import MantleClient
from .config import load_config
from .errors import MantleYieldError
from .logging_setup import configure_logging
from .oracles import PriceOracle
from .services import RequestDispatcher, YieldRegistry

logger = logging.getLogger(__name__)

# CLI flag dest -> dispatcher parameter name
_PARAM_NAMES = {
    "wallet": "wallet",
    "protocol": "protocol",
    "amount": "amount",
    "from_symbol": "fromSymbol",
    "to_symbol": "toSymbol",
}


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse CLI parser."""
    parser = argparse.ArgumentParser(
        prog="mantle-yield",
        description="Mantle DeFi yield aggregator",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Path to config.yaml (default: config.yaml in project root)",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: INFO)",
    )

    sub = parser.add_subparsers(dest="command")

    call_parser = sub.add_parser("call", help="Run one dispatcher action and print its JSON")
    call_parser.add_argument("action", help="Action name, e.g. getUserPositions")
    call_parser.add_argument("--wallet", default=None, help="Wallet address")
    call_parser.add_argument("--protocol", default=None, help="Protocol id, e.g. lendle")
    call_parser.add_argument("--amount", default=None, help="Amount in human units")
    call_parser.add_argument("--from-symbol", default=None, help="Swap source token")
    call_parser.add_argument("--to-symbol", default=None, help="Swap target token")

    sub.add_parser("prices", help="Print current token prices")
    sub.add_parser("block", help="Print the latest block number")

    return parser


def _call_params(args: argparse.Namespace) -> dict[str, Any]:
    params: dict[str, Any] = {}
    for dest, name in _PARAM_NAMES.items():
        value = getattr(args, dest, None)
        if value is not None:
            params[name] = value
    return params


async def _run(args: argparse.Namespace) -> int:
    """Execute the selected command. Returns the process exit code."""
    configure_logging(args.log_level)
    config = load_config(args.config)

    client = MantleClient(config.network)
    registry = YieldRegistry(config, client=client)
    oracle = PriceOracle(config.oracle)
    dispatcher = RequestDispatcher(registry, oracle)

    if args.command == "call":
        action, params = args.action, _call_params(args)
    elif args.command == "prices":
        action, params = "getTokenPrices", {}
    elif args.command == "block":
        action, params = "getBlockNumber", {}
    else:
        build_parser().print_help()
        return 1

    try:
        result = await dispatcher.dispatch(action, params)
    except MantleYieldError as e:
        logger.error("%s failed: %s", action, e)
        print(json.dumps({"error": str(e), "status": e.status}, indent=2))
        return 1

    print(json.dumps(result, indent=2))
    return 0


def main() -> None:
    """Entry point."""
    parser = build_parser()
    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        sys.exit(1)

    sys.exit(asyncio.run(_run(args)))
