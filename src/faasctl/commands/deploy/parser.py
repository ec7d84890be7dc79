"""Parser configuration for deploy command."""

import argparse

from faasctl.lib.arguments import (
    add_function_arguments,
    add_gateway_argument,
    add_stack_arguments,
)


def add_deploy_options(parser: argparse.ArgumentParser) -> None:
    """Add the options that shape a deployment.

    Parameters
    ----------
    parser : argparse.ArgumentParser
        Command parser.
    """
    add_gateway_argument(parser)
    parser.add_argument(
        "--network",
        help="Name of the network (default: stack file, then gateway.network)",
    )
    parser.add_argument(
        "--fprocess",
        default="",
        help="Fprocess to be run by the watchdog",
    )
    parser.add_argument(
        "-e",
        "--env",
        action="append",
        metavar="ENVVAR=VALUE",
        help="Set an environment variable (repeatable)",
    )
    parser.add_argument(
        "-l",
        "--label",
        action="append",
        metavar="LABEL=VALUE",
        help="Set a label (repeatable)",
    )
    parser.add_argument(
        "--constraint",
        action="append",
        help="Apply a placement constraint to the function (repeatable)",
    )
    parser.add_argument(
        "--secret",
        action="append",
        help="Give the function access to a secret (repeatable)",
    )
    parser.add_argument(
        "--replace",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Remove an existing function before deploying (default unless --update)",
    )
    parser.add_argument(
        "--update",
        action="store_true",
        help="Perform a rolling update of existing functions",
    )


def register_parser(subparsers: argparse._SubParsersAction) -> None:
    """Register the deploy command parser.

    Parameters
    ----------
    subparsers : argparse._SubParsersAction
        Subparser action from main parser
    """
    parser = subparsers.add_parser(
        "deploy",
        help="Deploy functions to the gateway",
        description=(
            "Deploy functions from a stack file or from flags.\n"
            "--replace and --update are mutually exclusive.\n\n"
            "Examples:\n"
            "  faasctl deploy -f ./stack.yml\n"
            "  faasctl deploy -f ./stack.yml --label canary=true --filter '*gif*'\n"
            "  faasctl deploy -f ./stack.yml --update\n"
            "  faasctl deploy --image alexellis/faas-url-ping --name url-ping"
        ),
    )

    add_stack_arguments(parser)
    add_function_arguments(parser)
    add_deploy_options(parser)
