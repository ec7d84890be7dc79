"""Parser configuration for secret command."""

import argparse

from faasctl.lib.arguments import add_gateway_argument
from faasctl.lib.formatters import create_subparsers


def register_parser(subparsers: argparse._SubParsersAction) -> None:
    """Register the secret command parser.

    Parameters
    ----------
    subparsers : argparse._SubParsersAction
        Subparser action from main parser
    """
    parser = subparsers.add_parser(
        "secret",
        help="Manage gateway secrets",
        description="List and remove secrets known to the gateway",
    )

    # Store parser for help printing
    parser.set_defaults(_secret_parser=parser)

    secret_subparsers = create_subparsers(parser, "secret_subcommand")

    list_parser = secret_subparsers.add_parser(
        "list",
        aliases=["ls"],
        help="List secrets",
    )
    add_gateway_argument(list_parser)

    remove_parser = secret_subparsers.add_parser(
        "remove",
        aliases=["rm"],
        help="Remove a secret",
    )
    remove_parser.add_argument("secret_name", metavar="NAME", help="Secret name")
    add_gateway_argument(remove_parser)
