"""Parser configuration for build command."""

import argparse

from faasctl.lib.arguments import (
    add_function_arguments,
    add_parallel_argument,
    add_stack_arguments,
)


def add_build_options(parser: argparse.ArgumentParser) -> None:
    """Add the options that control docker build.

    Parameters
    ----------
    parser : argparse.ArgumentParser
        Command parser.
    """
    parser.add_argument(
        "--no-cache",
        action="store_true",
        help="Do not use Docker's build cache",
    )
    parser.add_argument(
        "--squash",
        action="store_true",
        help="Use Docker's squash flag for smaller images (experimental)",
    )
    parser.add_argument(
        "--shrinkwrap",
        action="store_true",
        help="Just write files to ./build/ folder for shrink-wrapping",
    )
    parser.add_argument(
        "-b",
        "--build-arg",
        action="append",
        metavar="KEY=VALUE",
        help="Add a build-arg for Docker (repeatable)",
    )
    add_parallel_argument(parser)


def register_parser(subparsers: argparse._SubParsersAction) -> None:
    """Register the build command parser.

    Parameters
    ----------
    subparsers : argparse._SubParsersAction
        Subparser action from main parser
    """
    parser = subparsers.add_parser(
        "build",
        help="Build function images",
        description=(
            "Build function images from a stack file or from flags.\n\n"
            "Examples:\n"
            "  faasctl build -f ./stack.yml\n"
            "  faasctl build -f ./stack.yml --parallel 4 --filter '*gif*'\n"
            "  faasctl build --image alexellis/fn --handler ./fn --name fn --lang node"
        ),
    )

    add_stack_arguments(parser)
    add_function_arguments(parser)
    add_build_options(parser)
