"""Handler functions for push command."""

from typing import Any

from faasctl.builder.dispatcher import push_all
from faasctl.builder.executor import push_image
from faasctl.commands.build.display import display_summary
from faasctl.exceptions import BuildError, ConfigError, StackError
from faasctl.lib.command_helpers import (
    load_stack_from_args,
    require_config,
    resolve_parallel,
)
from faasctl.lib.output import error


def handle(ctx: dict[str, Any]) -> int:
    """Handle the push command.

    Pushes every function of the stack file. When called from ``up`` without
    a stack file, the single --image is pushed instead.

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
        parallel = resolve_parallel(args, config)
    except ConfigError as e:
        error(str(e))
        return 2

    try:
        stack = load_stack_from_args(args)
    except StackError as e:
        error(str(e))
        return 1

    if stack is None or not stack.functions:
        image = getattr(args, "image", None)
        if not image:
            error("please provide a stack file with -f")
            return 2
        try:
            push_image(image, getattr(args, "name", None))
        except BuildError as e:
            error(str(e))
            return 1
        return 0

    summary = push_all(stack.functions, parallel)
    display_summary(summary, "Push")

    if not summary.ok:
        error(f"{len(summary.failed)} of {len(summary.results)} push(es) failed")
        return 1
    return 0
