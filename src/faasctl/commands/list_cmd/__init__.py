"""List command for deployed functions."""

from .handlers import handle
from .parser import register_parser

__all__ = ["register_parser", "handle"]
