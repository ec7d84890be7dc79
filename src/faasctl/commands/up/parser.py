"""Parser configuration for up command."""

import argparse

from faasctl.commands.build.parser import add_build_options
from faasctl.commands.deploy.parser import add_deploy_options
from faasctl.lib.arguments import add_function_arguments, add_stack_arguments


def register_parser(subparsers: argparse._SubParsersAction) -> None:
    """Register the up command parser.

    Parameters
    ----------
    subparsers : argparse._SubParsersAction
        Subparser action from main parser
    """
    parser = subparsers.add_parser(
        "up",
        help="Build, push and deploy functions",
        description=(
            "Build, push and deploy functions from a stack file or from flags.\n"
            "All build, push and deploy options are accepted.\n\n"
            "Examples:\n"
            "  faasctl up -f ./stack.yml\n"
            "  faasctl up -f ./stack.yml --filter '*gif*' --secret dockerhuborg\n"
            "  faasctl up -f ./stack.yml --skip-push"
        ),
    )

    add_stack_arguments(parser)
    add_function_arguments(parser)
    add_build_options(parser)
    add_deploy_options(parser)

    parser.add_argument(
        "--skip-push",
        action="store_true",
        help="Skip pushing function images to the registry",
    )
    parser.add_argument(
        "--skip-deploy",
        action="store_true",
        help="Skip function deployment",
    )
