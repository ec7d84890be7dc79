"""Handler functions for build command."""

import logging
from typing import Any

from faasctl.builder.dispatcher import BuildOptions, dispatch
from faasctl.builder.executor import DOCKERFILE_LANGUAGE, build_image
from faasctl.config.loader import DEFAULT_TEMPLATE_REPOSITORY, get_config_value
from faasctl.exceptions import BuildError, ConfigError, StackError
from faasctl.lib.command_helpers import (
    load_stack_from_args,
    parse_map,
    require_config,
    resolve_parallel,
)
from faasctl.lib.output import error
from faasctl.stack import FunctionSet
from faasctl.templates import TemplateError, pull_templates

from .display import display_summary

logger = logging.getLogger(__name__)


def handle(ctx: dict[str, Any]) -> int:
    """Handle the build command.

    Parameters
    ----------
    ctx : dict[str, Any]
        Command context with config and args

    Returns
    -------
    int
        Exit code (0 for success, 1 if any build failed, 2 for bad input)
    """
    args = ctx["args"]

    try:
        config = require_config(ctx)
        parallel = resolve_parallel(args, config)
        options = BuildOptions(
            no_cache=args.no_cache,
            squash=args.squash,
            shrinkwrap=args.shrinkwrap,
            build_args=parse_map(args.build_arg, "build-arg"),
        )
    except ConfigError as e:
        error(str(e))
        return 2

    try:
        stack = load_stack_from_args(args)
    except StackError as e:
        error(str(e))
        return 1

    repository = get_config_value(config, "templates.repository", DEFAULT_TEMPLATE_REPOSITORY)

    if stack is not None and stack.functions:
        return build_stack(stack.functions, parallel, options, repository)

    return build_single(args, options, repository)


def build_stack(
    functions: FunctionSet,
    parallel: int,
    options: BuildOptions,
    repository: str,
) -> int:
    """Build every function of a stack with ``parallel`` workers.

    Returns
    -------
    int
        0 if every build succeeded or was skipped, 1 otherwise.
    """
    if _needs_templates(functions.values()):
        try:
            pull_templates(repository)
        except TemplateError as e:
            error(str(e))
            return 1

    summary = dispatch(functions, parallel, options)
    display_summary(summary, "Build")

    if not summary.ok:
        error(f"{len(summary.failed)} of {len(summary.results)} build(s) failed")
        return 1
    return 0


def build_single(args: Any, options: BuildOptions, repository: str) -> int:
    """Build the one function described by --image/--handler/--name/--lang.

    Returns
    -------
    int
        Exit code.
    """
    missing = [
        flag
        for flag, value in (
            ("--image", args.image),
            ("--handler", args.handler),
            ("--name", args.name),
            ("--lang", args.lang),
        )
        if not value
    ]
    if missing:
        error(f"please provide {', '.join(missing)} or a stack file with -f")
        return 2

    if args.lang.lower() != DOCKERFILE_LANGUAGE:
        try:
            pull_templates(repository)
        except TemplateError as e:
            error(str(e))
            return 1

    try:
        build_image(
            image=args.image,
            handler=args.handler,
            name=args.name,
            language=args.lang,
            no_cache=options.no_cache,
            squash=options.squash,
            shrinkwrap=options.shrinkwrap,
            build_args=options.build_args,
        )
    except BuildError as e:
        error(str(e))
        return 1

    return 0


def _needs_templates(functions) -> bool:
    return any(
        not function.skip_build and function.language.lower() not in ("", DOCKERFILE_LANGUAGE)
        for function in functions
    )
