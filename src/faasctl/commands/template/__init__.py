"""Template command for language templates.

Available commands:
    faasctl template pull [REPOSITORY]   Download templates into ./template
"""

from .handlers import handle
from .parser import register_parser

__all__ = ["register_parser", "handle"]
