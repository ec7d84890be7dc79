"""Main CLI entry point for faasctl."""

import argparse
import sys
from pathlib import Path

from faasctl import __version__
from faasctl.config.loader import ConfigLoader
from faasctl.lib.formatters import CapitalizedHelpFormatter
from faasctl.lib.logger import setup_logger
from faasctl.lib.output import error, set_color_enabled


def create_parser() -> argparse.ArgumentParser:
    """
    Create the argument parser with all commands and subcommands.

    Configures the main argument parser with global options and registers
    all command-specific subparsers for the faasctl CLI.

    Returns
    -------
    argparse.ArgumentParser
        Configured argument parser with all commands registered.
    """
    parser = argparse.ArgumentParser(
        prog="faasctl",
        description="Build, push and deploy serverless functions to a FaaS gateway",
        formatter_class=CapitalizedHelpFormatter,
    )

    # Global options
    parser.add_argument("--version", "-v", action="version", version=f"faasctl {__version__}")
    parser.add_argument("--config", "-c", type=Path, help="Config file path (default: auto-detect)")
    parser.add_argument("--verbose", action="store_true", help="Verbose output (debug logging)")
    parser.add_argument("--quiet", "-q", action="store_true", help="Quiet mode (errors only)")
    parser.add_argument("--no-color", action="store_true", help="Disable colored output")

    # Customize main parser options title
    parser._optionals.title = "Options"

    # Subcommands
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Monkey-patch add_parser to automatically set Options title and formatter
    original_add_parser = subparsers.add_parser

    def custom_add_parser(*args, **kwargs):
        if "formatter_class" not in kwargs:
            kwargs["formatter_class"] = CapitalizedHelpFormatter
        subparser = original_add_parser(*args, **kwargs)
        subparser._optionals.title = "Options"
        return subparser

    subparsers.add_parser = custom_add_parser

    # Import and register command parsers
    from faasctl.commands import (
        build,
        deploy,
        list_cmd,
        push,
        remove,
        secret,
        template,
        up,
    )

    build.register_parser(subparsers)
    push.register_parser(subparsers)
    deploy.register_parser(subparsers)
    up.register_parser(subparsers)
    remove.register_parser(subparsers)
    list_cmd.register_parser(subparsers)
    secret.register_parser(subparsers)
    template.register_parser(subparsers)

    return parser


def main(argv: list[str] | None = None) -> int:
    """
    Main CLI entry point for the faasctl command.

    Parses command-line arguments, loads configuration, creates command context,
    and routes execution to the appropriate command handler.

    Parameters
    ----------
    argv : list of str or None, optional
        Arguments to parse; defaults to sys.argv[1:].

    Returns
    -------
    int
        Exit code: 0 for success, 1 for command failure, 2 for configuration error,
        130 for keyboard interrupt.
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    # Set color preference based on flag
    if args.no_color:
        set_color_enabled(False)

    setup_logger(level="DEBUG" if args.verbose else None)

    # If no command provided, show help
    if not args.command:
        parser.print_help()
        return 1

    try:
        config = ConfigLoader(config_path=args.config).load()
    except Exception as e:
        if args.verbose:
            import traceback

            traceback.print_exc()
        error(f"Failed to load configuration: {e}")
        return 2

    # Create context for commands
    ctx = {
        "config": config,
        "verbose": args.verbose,
        "quiet": args.quiet,
        "args": args,
    }

    # Route to command handler
    try:
        if args.command == "build":
            from faasctl.commands import build

            return build.handle(ctx)
        elif args.command == "push":
            from faasctl.commands import push

            return push.handle(ctx)
        elif args.command == "deploy":
            from faasctl.commands import deploy

            return deploy.handle(ctx)
        elif args.command == "up":
            from faasctl.commands import up

            return up.handle(ctx)
        elif args.command == "remove" or args.command == "rm":
            from faasctl.commands import remove

            return remove.handle(ctx)
        elif args.command == "list" or args.command == "ls":
            from faasctl.commands import list_cmd

            return list_cmd.handle(ctx)
        elif args.command == "secret":
            from faasctl.commands import secret

            return secret.handle(ctx)
        elif args.command == "template":
            from faasctl.commands import template

            return template.handle(ctx)
        else:
            error(f"Command '{args.command}' not yet implemented")
            return 1

    except KeyboardInterrupt:
        print()
        return 130
    except Exception as e:
        error(f"Command failed: {e}")
        if ctx["verbose"]:
            import traceback

            traceback.print_exc()
        return 1


if __name__ == "__main__":
    sys.exit(main())
