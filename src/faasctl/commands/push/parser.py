"""Parser configuration for push command."""

import argparse

from faasctl.lib.arguments import add_parallel_argument, add_stack_arguments


def register_parser(subparsers: argparse._SubParsersAction) -> None:
    """Register the push command parser.

    Parameters
    ----------
    subparsers : argparse._SubParsersAction
        Subparser action from main parser
    """
    parser = subparsers.add_parser(
        "push",
        help="Push function images to a registry",
        description=(
            "Push the images of a stack file to their registries with docker push.\n\n"
            "Examples:\n"
            "  faasctl push -f ./stack.yml\n"
            "  faasctl push -f ./stack.yml --parallel 4 --regex '^fn-'"
        ),
    )

    add_stack_arguments(parser)
    add_parallel_argument(parser)
