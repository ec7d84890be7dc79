"""Argument groups shared by several commands."""

import argparse


def add_stack_arguments(parser: argparse.ArgumentParser) -> None:
    """Add -f/--yaml, --regex and --filter.

    Parameters
    ----------
    parser : argparse.ArgumentParser
        Command parser.
    """
    parser.add_argument(
        "-f",
        "--yaml",
        dest="yaml_file",
        help="Path or URL to a stack file (e.g. stack.yml)",
    )
    parser.add_argument(
        "--regex",
        help="Regex to match with function names in the stack file",
    )
    parser.add_argument(
        "--filter",
        help="Wildcard to match with function names in the stack file",
    )


def add_function_arguments(parser: argparse.ArgumentParser) -> None:
    """Add the single-function flags --image, --handler, --name and --lang.

    Parameters
    ----------
    parser : argparse.ArgumentParser
        Command parser.
    """
    parser.add_argument("--image", help="Docker image name")
    parser.add_argument(
        "--handler",
        help="Directory with handler for function, e.g. handler.js",
    )
    parser.add_argument("--name", help="Name of the deployed function")
    parser.add_argument("--lang", help="Programming language template")


def add_gateway_argument(parser: argparse.ArgumentParser) -> None:
    """Add -g/--gateway.

    Parameters
    ----------
    parser : argparse.ArgumentParser
        Command parser.
    """
    parser.add_argument(
        "-g",
        "--gateway",
        help="Gateway URL starting with http(s):// (default: stack file, then config)",
    )


def add_parallel_argument(parser: argparse.ArgumentParser) -> None:
    """Add --parallel.

    Parameters
    ----------
    parser : argparse.ArgumentParser
        Command parser.
    """
    parser.add_argument(
        "--parallel",
        type=int,
        help="Build or push in parallel to the depth specified (default: build.parallel, 1)",
    )
