"""Stack file (function manifest) parsing."""

from faasctl.stack.parser import (
    NO_MATCHES_MESSAGE,
    VALID_PROVIDERS,
    parse_stack_data,
    parse_stack_file,
)
from faasctl.stack.schema import FunctionDescriptor, FunctionSet, Provider, Stack

__all__ = [
    "FunctionDescriptor",
    "FunctionSet",
    "NO_MATCHES_MESSAGE",
    "Provider",
    "Stack",
    "VALID_PROVIDERS",
    "parse_stack_data",
    "parse_stack_file",
]
