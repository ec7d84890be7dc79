"""Parser configuration for list command."""

import argparse

from faasctl.lib.arguments import add_gateway_argument


def register_parser(subparsers: argparse._SubParsersAction) -> None:
    """Register the list command parser.

    Parameters
    ----------
    subparsers : argparse._SubParsersAction
        Subparser action from main parser
    """
    parser = subparsers.add_parser(
        "list",
        aliases=["ls"],
        help="List deployed functions",
        description="List functions deployed on the gateway",
    )
    add_gateway_argument(parser)
    parser.add_argument(
        "--images",
        action="store_true",
        help="Show the image of each function",
    )
