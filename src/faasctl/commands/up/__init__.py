"""Up command: build, push and deploy in one step."""

from .handlers import handle
from .parser import register_parser

__all__ = ["register_parser", "handle"]
