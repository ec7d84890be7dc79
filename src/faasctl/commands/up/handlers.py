"""Handler functions for up command."""

from typing import Any

from faasctl.commands import build, deploy, push
from faasctl.lib.output import plain


def handle(ctx: dict[str, Any]) -> int:
    """Run build, then push and deploy unless skipped.

    Each step runs only when the previous one succeeded.

    Parameters
    ----------
    ctx : dict[str, Any]
        Command context with config and args

    Returns
    -------
    int
        Exit code of the first failing step, or 0.
    """
    args = ctx["args"]

    exit_code = build.handle(ctx)
    if exit_code != 0:
        return exit_code
    plain("")

    if not args.skip_push:
        exit_code = push.handle(ctx)
        if exit_code != 0:
            return exit_code
        plain("")

    if not args.skip_deploy:
        return deploy.handle(ctx)

    return 0
