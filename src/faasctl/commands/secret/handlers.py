"""Handler functions for secret subcommands."""

from typing import Any

from faasctl.exceptions import ConfigError, GatewayError, ResourceNotFoundError
from faasctl.lib.command_helpers import (
    create_gateway_client,
    get_gateway_config,
    get_gateway_url,
    require_config,
)
from faasctl.lib.formatters import format_table
from faasctl.lib.output import error, info, plain, success


def handle(ctx: dict[str, Any]) -> int:
    """Handle the secret command and route to appropriate subcommand.

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

    if not hasattr(args, "secret_subcommand") or args.secret_subcommand is None:
        if hasattr(args, "_secret_parser"):
            args._secret_parser.print_help()
        return 1

    if args.secret_subcommand in ("list", "ls"):
        return handle_list(ctx)
    elif args.secret_subcommand in ("remove", "rm"):
        return handle_remove(ctx)

    error(f"Unknown secret subcommand: {args.secret_subcommand}")
    return 1


def handle_list(ctx: dict[str, Any]) -> int:
    """List secrets."""
    args = ctx["args"]

    try:
        config = require_config(ctx)
    except ConfigError as e:
        error(str(e))
        return 2

    gateway_url = get_gateway_url(args.gateway, get_gateway_config(config)["url"])

    try:
        secrets = create_gateway_client(config, gateway_url).list_secrets()
    except GatewayError as e:
        error(str(e))
        return 1

    if not secrets:
        info("No secrets found")
        return 0

    rows = [[secret.get("name", "")] for secret in sorted(secrets, key=lambda s: s.get("name", ""))]
    plain(format_table(["Name"], rows))
    return 0


def handle_remove(ctx: dict[str, Any]) -> int:
    """Remove one secret."""
    args = ctx["args"]

    try:
        config = require_config(ctx)
    except ConfigError as e:
        error(str(e))
        return 2

    gateway_url = get_gateway_url(args.gateway, get_gateway_config(config)["url"])

    try:
        create_gateway_client(config, gateway_url).remove_secret(args.secret_name)
    except (GatewayError, ResourceNotFoundError) as e:
        error(str(e))
        return 1

    success(f"Removed: {args.secret_name}.")
    return 0
