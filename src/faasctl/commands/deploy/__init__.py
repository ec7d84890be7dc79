"""Deploy command for functions.

Deploys every function of a stack file, or one function from flags, to the
gateway's REST API. --replace (the default) removes an existing deployment
first; --update performs a rolling update in place.
"""

from .handlers import handle
from .parser import register_parser

__all__ = ["register_parser", "handle"]
