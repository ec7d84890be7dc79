"""Build command for function images.

Builds one function from flags, or every function of a stack file with a
pool of concurrent workers:

    faasctl build -f stack.yml --parallel 4
    faasctl build --image alexellis/fn --handler ./fn --name fn --lang node
"""

from .handlers import handle
from .parser import register_parser

__all__ = ["register_parser", "handle"]
