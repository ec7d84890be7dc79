"""Parser configuration for template command."""

import argparse

from faasctl.lib.formatters import create_subparsers


def register_parser(subparsers: argparse._SubParsersAction) -> None:
    """Register the template command parser.

    Parameters
    ----------
    subparsers : argparse._SubParsersAction
        Subparser action from main parser
    """
    parser = subparsers.add_parser(
        "template",
        help="Manage language templates",
        description="Download language templates used to build functions",
    )

    # Store parser for help printing
    parser.set_defaults(_template_parser=parser)

    template_subparsers = create_subparsers(parser, "template_subcommand")

    pull_parser = template_subparsers.add_parser(
        "pull",
        help="Download templates from a repository",
        description=(
            "Download the template/ folder of a repository archive into ./template.\n\n"
            "Examples:\n"
            "  faasctl template pull\n"
            "  faasctl template pull https://github.com/openfaas-incubator/golang-http-template\n"
            "  faasctl template pull --overwrite"
        ),
    )
    pull_parser.add_argument(
        "repository",
        nargs="?",
        help="Repository URL (default: templates.repository from config)",
    )
    pull_parser.add_argument(
        "--overwrite",
        action="store_true",
        help="Overwrite existing templates",
    )
