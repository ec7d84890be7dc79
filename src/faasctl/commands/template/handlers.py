"""Handler functions for template subcommands."""

from typing import Any

from faasctl.config.loader import DEFAULT_TEMPLATE_REPOSITORY, get_config_value
from faasctl.exceptions import ConfigError
from faasctl.lib.command_helpers import require_config
from faasctl.lib.output import error, info, success, warning
from faasctl.templates import TemplateError, fetch_templates


def handle(ctx: dict[str, Any]) -> int:
    """Handle the template command and route to appropriate subcommand.

    Parameters
    ----------
    ctx : dict[str, Any]
        Command context with config and args

    Returns
    -------
    int
        Exit code (0 for success)
    """
    args = ctx["args"]

    if not hasattr(args, "template_subcommand") or args.template_subcommand is None:
        if hasattr(args, "_template_parser"):
            args._template_parser.print_help()
        return 1

    if args.template_subcommand == "pull":
        return handle_pull(ctx)

    error(f"Unknown template subcommand: {args.template_subcommand}")
    return 1


def handle_pull(ctx: dict[str, Any]) -> int:
    """Download templates, keeping existing languages unless --overwrite.

    Parameters
    ----------
    ctx : dict[str, Any]
        Command context with config and args

    Returns
    -------
    int
        Exit code (0 for success)
    """
    args = ctx["args"]

    try:
        config = require_config(ctx)
    except ConfigError as e:
        error(str(e))
        return 2

    repository = args.repository or get_config_value(
        config, "templates.repository", DEFAULT_TEMPLATE_REPOSITORY
    )
    info(f"Fetch templates from repository: {repository}")

    try:
        existing, fetched = fetch_templates(repository, overwrite=args.overwrite)
    except TemplateError as e:
        error(str(e))
        return 1

    if existing:
        warning(
            f"Cannot overwrite the following {len(existing)} directories: {existing}. "
            "Use --overwrite to replace them"
        )
    success(f"Fetched {len(fetched)} template(s): {fetched} from {repository}")
    return 0
