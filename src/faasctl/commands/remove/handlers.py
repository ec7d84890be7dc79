"""Handler functions for remove command."""

from typing import Any

from faasctl.exceptions import ConfigError, GatewayError, ResourceNotFoundError, StackError
from faasctl.lib.command_helpers import (
    create_gateway_client,
    get_gateway_config,
    get_gateway_url,
    load_stack_from_args,
    require_config,
)
from faasctl.lib.output import error, plain, success, warning


def handle(ctx: dict[str, Any]) -> int:
    """Handle the remove command.

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

    try:
        stack = load_stack_from_args(args)
    except StackError as e:
        error(str(e))
        return 1

    gateway = get_gateway_config(config)
    if stack is not None and stack.functions:
        names = sorted(stack.functions)
        gateway_url = get_gateway_url(args.gateway, gateway["url"], stack.provider.gateway)
    else:
        names = list(args.names)
        gateway_url = get_gateway_url(args.gateway, gateway["url"])

    if not names:
        error("Please provide the name of a function to delete or a stack file with -f")
        return 2

    client = create_gateway_client(config, gateway_url)

    exit_code = 0
    for name in names:
        plain(f"Deleting: {name}.")
        try:
            client.delete_function(name)
        except ResourceNotFoundError as e:
            warning(str(e))
            continue
        except GatewayError as e:
            error(f"{name}: {e}")
            exit_code = 1
            continue
        success(f"Removed: {name}.")

    return exit_code
