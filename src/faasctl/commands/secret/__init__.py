"""Secret command for gateway secrets.

Available commands:
    faasctl secret list          List secrets
    faasctl secret remove NAME   Remove a secret
"""

from .handlers import handle
from .parser import register_parser

__all__ = ["register_parser", "handle"]
