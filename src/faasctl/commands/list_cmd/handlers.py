"""Handler functions for list command."""

from typing import Any

from faasctl.exceptions import ConfigError, GatewayError
from faasctl.lib.command_helpers import (
    create_gateway_client,
    get_gateway_config,
    get_gateway_url,
    require_config,
)
from faasctl.lib.formatters import format_table
from faasctl.lib.output import error, info, plain


def handle(ctx: dict[str, Any]) -> int:
    """Handle the list command.

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

    gateway_url = get_gateway_url(args.gateway, get_gateway_config(config)["url"])

    try:
        functions = create_gateway_client(config, gateway_url).list_functions()
    except GatewayError as e:
        error(str(e))
        return 1

    if not functions:
        info("No functions deployed")
        return 0

    headers = ["Function", "Invocations", "Replicas"]
    if args.images:
        headers.append("Image")

    rows = []
    for function in sorted(functions, key=lambda f: f.get("name", "")):
        row = [
            function.get("name", ""),
            str(int(function.get("invocationCount", 0) or 0)),
            str(function.get("replicas", 0) or 0),
        ]
        if args.images:
            row.append(function.get("image", ""))
        rows.append(row)

    plain(format_table(headers, rows))
    return 0
