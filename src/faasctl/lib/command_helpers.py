"""
Command Helper Functions.

This module provides common helper functions used across faasctl commands to
reduce code duplication and ensure consistent behavior.

Functions
---------
require_config : Get configuration with validation
get_gateway_config : Extract gateway configuration with defaults
resolve_parallel : Validate the --parallel depth
parse_map : Parse KEY=VALUE options into a dict
merge_map : Merge two string maps, right side wins
get_gateway_url : Resolve the gateway URL from flag, stack file and config
create_gateway_client : Build a GatewayClient from config
load_stack_from_args : Resolve the stack file named by -f/--regex/--filter
"""

import argparse
import logging
from typing import Any, TypedDict

from faasctl.config.loader import DEFAULT_GATEWAY, DEFAULT_NETWORK
from faasctl.exceptions import ConfigError
from faasctl.gateway import GatewayClient
from faasctl.stack import Stack, parse_stack_file

logger = logging.getLogger(__name__)


class CommandContext(TypedDict):
    """
    Type-safe command context dictionary.

    Attributes
    ----------
    config : dict
        Loaded configuration dictionary.
    verbose : bool
        Enable verbose output.
    quiet : bool
        Suppress informational output.
    args : argparse.Namespace
        Parsed command-line arguments.
    """

    config: dict
    verbose: bool
    quiet: bool
    args: argparse.Namespace


def require_config(ctx: CommandContext) -> dict:
    """
    Ensure configuration is loaded and return it.

    Parameters
    ----------
    ctx : CommandContext
        Command context dictionary.

    Returns
    -------
    dict
        Configuration dictionary.

    Raises
    ------
    ConfigError
        If configuration is not loaded or is empty.
    """
    config = ctx.get("config")
    if not config:
        raise ConfigError("Configuration not loaded")
    return config


def get_gateway_config(config: dict[str, Any]) -> dict[str, Any]:
    """
    Extract gateway configuration with defaults.

    Parameters
    ----------
    config : dict
        Configuration dictionary.

    Returns
    -------
    dict
        Dict with keys: url, network, timeout, tls_insecure, username, password

    Examples
    --------
    >>> gateway = get_gateway_config(config)
    >>> url = gateway["url"]
    """
    gateway = config.get("gateway", {}) or {}
    return {
        "url": gateway.get("url") or DEFAULT_GATEWAY,
        "network": gateway.get("network") or DEFAULT_NETWORK,
        "timeout": float(gateway.get("timeout") or 60),
        "tls_insecure": bool(gateway.get("tls_insecure", False)),
        "username": gateway.get("username"),
        "password": gateway.get("password"),
    }


def resolve_parallel(args: argparse.Namespace, config: dict[str, Any]) -> int:
    """
    Resolve and validate the build/push concurrency depth.

    Parameters
    ----------
    args : argparse.Namespace
        Parsed arguments; ``args.parallel`` may be None.
    config : dict
        Configuration dictionary providing ``build.parallel``.

    Returns
    -------
    int
        Positive concurrency depth.

    Raises
    ------
    ConfigError
        If the depth is not a positive integer.
    """
    parallel = getattr(args, "parallel", None)
    if parallel is None:
        parallel = config.get("build", {}).get("parallel", 1)

    try:
        parallel = int(parallel)
    except (TypeError, ValueError):
        raise ConfigError(f"--parallel must be an integer, got: {parallel}")

    if parallel < 1:
        raise ConfigError(f"--parallel must be 1 or greater, got: {parallel}")

    return parallel


def parse_map(values: list[str] | None, key_name: str) -> dict[str, str]:
    """
    Parse KEY=VALUE options into a dict.

    Parameters
    ----------
    values : list of str or None
        Raw option values, e.g. ["NPM_VERSION=0.2.2"].
    key_name : str
        Option name used in error messages (e.g. "build-arg", "env").

    Returns
    -------
    dict[str, str]
        Parsed mapping; later duplicates win.

    Raises
    ------
    ConfigError
        If an entry has no "=", an empty name or an empty value.

    Examples
    --------
    >>> parse_map(["a=1", "b=x=y"], "env")
    {'a': '1', 'b': 'x=y'}
    """
    result = {}
    for value in values or []:
        entry = value.strip()
        if "=" not in entry:
            raise ConfigError(f"Missing value for {key_name}: [{value}]")

        name, _, item = entry.partition("=")
        if not name:
            raise ConfigError(f"Empty {key_name} name: [{value}]")
        if not item:
            raise ConfigError(f"Empty {key_name} value: [{value}]")

        result[name] = item
    return result


def merge_map(base: dict[str, str] | None, override: dict[str, str] | None) -> dict[str, str]:
    """
    Merge two string maps into a new dict; keys in override win.

    Parameters
    ----------
    base : dict or None
        Lower-priority mapping.
    override : dict or None
        Higher-priority mapping.

    Returns
    -------
    dict[str, str]
        New merged mapping.
    """
    merged = dict(base or {})
    merged.update(override or {})
    return merged


def get_gateway_url(argument_url: str | None, default_url: str, yaml_url: str | None = None) -> str:
    """
    Resolve the gateway URL.

    Precedence: explicit flag, then the stack file's provider.gateway, then
    the configured default.

    Parameters
    ----------
    argument_url : str or None
        Value of -g/--gateway.
    default_url : str
        Configured gateway.url.
    yaml_url : str or None, optional
        provider.gateway from the stack file.

    Returns
    -------
    str
        Gateway URL without a trailing slash.

    Examples
    --------
    >>> get_gateway_url(None, "http://localhost:8080", "http://remote:8080/")
    'http://remote:8080'
    """
    if argument_url:
        url = argument_url
    elif yaml_url:
        url = yaml_url
    else:
        url = default_url
    return url.rstrip("/")


def create_gateway_client(config: dict[str, Any], gateway_url: str) -> GatewayClient:
    """
    Create a gateway client using the configured timeout, TLS and credentials.

    Parameters
    ----------
    config : dict
        Configuration dictionary.
    gateway_url : str
        Resolved gateway URL.

    Returns
    -------
    GatewayClient
        Client bound to gateway_url.
    """
    gateway = get_gateway_config(config)
    return GatewayClient(
        gateway_url,
        timeout=gateway["timeout"],
        tls_insecure=gateway["tls_insecure"],
        username=gateway["username"],
        password=gateway["password"],
    )


def load_stack_from_args(args: argparse.Namespace) -> Stack | None:
    """
    Resolve the stack file named on the command line.

    Parameters
    ----------
    args : argparse.Namespace
        Parsed arguments with ``yaml_file``, ``regex`` and ``filter``.

    Returns
    -------
    Stack or None
        Parsed stack, or None when no stack file was given.

    Raises
    ------
    StackError
        If the stack cannot be loaded or filtered.
    """
    yaml_file = getattr(args, "yaml_file", None)
    if not yaml_file:
        return None

    regex = getattr(args, "regex", None) or ""
    name_filter = getattr(args, "filter", None) or ""
    logger.debug("Loading stack file %s (regex=%r, filter=%r)", yaml_file, regex, name_filter)
    return parse_stack_file(yaml_file, regex=regex, name_filter=name_filter)
