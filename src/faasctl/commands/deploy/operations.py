"""Deploy operations: environment compilation and gateway calls."""

import logging
from pathlib import Path

import yaml

from faasctl.exceptions import ConfigError
from faasctl.gateway import GatewayClient
from faasctl.lib.command_helpers import merge_map, parse_map
from faasctl.lib.output import info, success

logger = logging.getLogger(__name__)

UPDATE_REPLACE_MESSAGE = """Cannot specify --update and --replace at the same time.
  --replace    removes an existing deployment before re-creating it
  --update     provides a rolling update to a new function image or configuration"""


def resolve_replace(replace: bool | None, update: bool) -> bool:
    """Resolve the effective --replace value.

    Parameters
    ----------
    replace : bool or None
        Value of --replace/--no-replace; None when neither was given.
    update : bool
        Value of --update.

    Returns
    -------
    bool
        Whether to remove an existing function before deploying.

    Raises
    ------
    ConfigError
        If both --replace and --update were given.
    """
    if replace is None:
        return not update
    if replace and update:
        raise ConfigError(UPDATE_REPLACE_MESSAGE)
    return replace


def read_env_files(files) -> dict[str, str]:
    """Read environment files, later files overriding earlier ones.

    Each file is YAML with a top-level ``environment:`` mapping.

    Parameters
    ----------
    files : iterable of str
        Paths to environment files.

    Returns
    -------
    dict[str, str]
        Merged environment.

    Raises
    ------
    ConfigError
        If a file cannot be read or parsed.
    """
    environment: dict[str, str] = {}
    for file in files or ():
        try:
            data = yaml.safe_load(Path(file).read_text())
        except OSError as e:
            raise ConfigError(f"Cannot read environment file {file}: {e}")
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in environment file {file}: {e}")

        values = (data or {}).get("environment") if isinstance(data, dict) else None
        if values is None:
            continue
        if not isinstance(values, dict):
            raise ConfigError(f"environment in {file} must be a mapping")

        environment.update({str(k): str(v) for k, v in values.items()})
    return environment


def compile_environment(
    env_options: list[str] | None,
    yaml_environment,
    file_environment: dict[str, str] | None,
) -> dict[str, str]:
    """Combine function, file and flag environments.

    Precedence from lowest to highest: the stack file's ``environment``,
    then ``environment_file`` contents, then -e/--env flags.

    Raises
    ------
    ConfigError
        If an -e/--env option is malformed.
    """
    try:
        arguments = parse_map(env_options, "env")
    except ConfigError as e:
        raise ConfigError(f"error parsing envvars: {e}")

    function_and_stack = merge_map(dict(yaml_environment or {}), file_environment)
    return merge_map(function_and_stack, arguments)


def deploy_function(
    client: GatewayClient,
    spec: dict,
    replace: bool = True,
    update: bool = False,
) -> str:
    """Deploy one function, removing the old deployment first on replace.

    Parameters
    ----------
    client : GatewayClient
        Gateway client.
    spec : dict
        Deploy request body from ``build_deploy_spec``.
    replace : bool, optional
        Remove an existing function first.
    update : bool, optional
        Rolling update instead of create.

    Returns
    -------
    str
        URL of the deployed function.

    Raises
    ------
    GatewayError
        If the gateway rejects a request.
    """
    name = spec["service"]

    if replace and not update:
        if client.delete_function(name, missing_ok=True):
            info("Removing old function.")
        else:
            info("No existing function to remove")

    url = client.deploy_function(spec, update=update)
    logger.debug("Deployed %s to %s", name, url)
    success(f"Deployed. URL: {url}")
    return url
