"""Push command for function images."""

from .handlers import handle
from .parser import register_parser

__all__ = ["register_parser", "handle"]
