"""Service modules"""
from .dispatcher import RequestDispatcher
from .registry import YieldRegistry, summarize_positions

__all__ = ["RequestDispatcher", "YieldRegistry", "summarize_positions"]
