from .client import MantleClient

__all__ = ["MantleClient"]
