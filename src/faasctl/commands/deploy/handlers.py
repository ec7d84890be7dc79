"""Handler functions for deploy command."""

from typing import Any

from faasctl.exceptions import ConfigError, FaasctlError, StackError
from faasctl.gateway import build_deploy_spec
from faasctl.lib.command_helpers import (
    create_gateway_client,
    get_gateway_config,
    get_gateway_url,
    load_stack_from_args,
    merge_map,
    parse_map,
    require_config,
)
from faasctl.lib.output import error, plain
from faasctl.stack import Stack

from .operations import compile_environment, deploy_function, read_env_files, resolve_replace


def handle(ctx: dict[str, Any]) -> int:
    """Handle the deploy command.

    Parameters
    ----------
    ctx : dict[str, Any]
        Command context with config and args

    Returns
    -------
    int
        Exit code (0 for success, 1 if any deployment failed)
    """
    args = ctx["args"]

    try:
        config = require_config(ctx)
        replace = resolve_replace(args.replace, args.update)
        labels = parse_map(args.label, "label")
    except ConfigError as e:
        error(str(e))
        return 2

    try:
        stack = load_stack_from_args(args)
    except StackError as e:
        error(str(e))
        return 1

    if stack is not None and stack.functions:
        return deploy_stack(args, config, stack, labels, replace)

    return deploy_single(args, config, labels, replace)


def deploy_stack(
    args: Any,
    config: dict[str, Any],
    stack: Stack,
    labels: dict[str, str],
    replace: bool,
) -> int:
    """Deploy every function of a stack in name order.

    A failed deployment is reported and the remaining functions are still
    deployed.

    Returns
    -------
    int
        0 if every deployment succeeded, 1 otherwise.
    """
    gateway = get_gateway_config(config)
    gateway_url = get_gateway_url(args.gateway, gateway["url"], stack.provider.gateway)
    network = args.network or stack.provider.network or gateway["network"]
    client = create_gateway_client(config, gateway_url)

    failed = []
    for name in sorted(stack.functions):
        function = stack.functions[name]
        plain(f"Updating: {name}." if args.update else f"Deploying: {name}.")

        try:
            environment = compile_environment(
                args.env,
                function.environment,
                read_env_files(function.environment_file),
            )
            spec = build_deploy_spec(
                name=name,
                image=function.image,
                network=network,
                fprocess=function.fprocess,
                env_vars=environment,
                labels=merge_map(dict(function.labels), labels),
                constraints=list(function.constraints or args.constraint or []),
                secrets=_merge_secrets(function.secrets, args.secret),
                limits=dict(function.limits),
                requests_=dict(function.requests),
            )
            deploy_function(client, spec, replace=replace, update=args.update)
        except FaasctlError as e:
            error(f"{name}: {e}")
            failed.append(name)

    if failed:
        error(f"{len(failed)} of {len(stack.functions)} deployment(s) failed")
        return 1
    return 0


def deploy_single(
    args: Any,
    config: dict[str, Any],
    labels: dict[str, str],
    replace: bool,
) -> int:
    """Deploy the one function described by --image and --name.

    Returns
    -------
    int
        Exit code.
    """
    if not args.image:
        error("Please provide a --image to be deployed.")
        return 2
    if not args.name:
        error("Please provide a --name for your function as it will be deployed on FaaS")
        return 2

    gateway = get_gateway_config(config)
    gateway_url = get_gateway_url(args.gateway, gateway["url"])

    try:
        spec = build_deploy_spec(
            name=args.name,
            image=args.image,
            network=args.network or gateway["network"],
            fprocess=args.fprocess,
            env_vars=compile_environment(args.env, None, None),
            labels=labels,
            constraints=args.constraint,
            secrets=args.secret,
        )
    except ConfigError as e:
        error(str(e))
        return 2

    try:
        client = create_gateway_client(config, gateway_url)
        deploy_function(client, spec, replace=replace, update=args.update)
    except FaasctlError as e:
        error(str(e))
        return 1

    return 0


def _merge_secrets(function_secrets, flag_secrets) -> list[str]:
    merged = list(function_secrets or [])
    for secret in flag_secrets or []:
        if secret not in merged:
            merged.append(secret)
    return merged
