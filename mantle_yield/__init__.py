"""Mantle DeFi yield aggregator."""

__version__ = "0.1.0"
