"""Parser configuration for remove command."""

import argparse

from faasctl.lib.arguments import add_gateway_argument, add_stack_arguments


def register_parser(subparsers: argparse._SubParsersAction) -> None:
    """Register the remove command parser.

    Parameters
    ----------
    subparsers : argparse._SubParsersAction
        Subparser action from main parser
    """
    parser = subparsers.add_parser(
        "remove",
        aliases=["rm"],
        help="Remove deployed functions",
        description=(
            "Remove functions by name or every function of a stack file.\n\n"
            "Examples:\n"
            "  faasctl remove url-ping\n"
            "  faasctl remove -f ./stack.yml --filter '*gif*'"
        ),
    )

    parser.add_argument(
        "names",
        nargs="*",
        metavar="NAME",
        help="Function name(s) to remove",
    )
    add_stack_arguments(parser)
    add_gateway_argument(parser)
