"""Load a stack file from disk or URL and select functions by name."""

import fnmatch
import logging
import re
from pathlib import Path
from typing import Any

import requests
import yaml

from faasctl.exceptions import StackError
from faasctl.stack.schema import FunctionDescriptor, FunctionSet, Provider, Stack

logger = logging.getLogger(__name__)

VALID_PROVIDERS = ("faas", "openfaas")
NO_MATCHES_MESSAGE = "no functions matching --filter/--regex were found in the YAML file"
FETCH_TIMEOUT = 120


def parse_stack_file(
    path_or_url: str,
    regex: str = "",
    name_filter: str = "",
    timeout: float = FETCH_TIMEOUT,
) -> Stack:
    """Load and parse a stack file.

    Parameters
    ----------
    path_or_url : str
        Local path, or an http(s) URL to fetch.
    regex : str, optional
        Keep only functions whose name matches this regular expression.
    name_filter : str, optional
        Keep only functions whose name matches this wildcard pattern.
    timeout : float, optional
        Timeout in seconds when fetching a URL.

    Returns
    -------
    Stack
        Parsed stack with the selected functions.

    Raises
    ------
    StackError
        If the file cannot be read, is invalid, or the selection fails.
    """
    if path_or_url.startswith(("http://", "https://")):
        logger.debug("HTTP GET %s", path_or_url)
        try:
            response = requests.get(path_or_url, timeout=timeout)
        except requests.RequestException as e:
            raise StackError(f"unable to fetch stack file {path_or_url}: {e}")

        if response.status_code != 200:
            raise StackError(
                f"{path_or_url} is not valid, status code {response.status_code}"
            )
        data = response.content
    else:
        try:
            data = Path(path_or_url).read_bytes()
        except OSError as e:
            raise StackError(f"unable to read stack file {path_or_url}: {e}")

    return parse_stack_data(data, regex=regex, name_filter=name_filter)


def parse_stack_data(data: bytes | str, regex: str = "", name_filter: str = "") -> Stack:
    """Parse stack file content and select functions.

    An empty regex and filter select every function. A non-empty term that
    selects nothing is an error.

    Parameters
    ----------
    data : bytes or str
        Raw YAML content.
    regex : str, optional
        Regular expression searched for anywhere in each function name.
    name_filter : str, optional
        Shell-style wildcard matched against the whole function name.

    Returns
    -------
    Stack
        Parsed stack with the selected functions in file order.

    Raises
    ------
    StackError
        On invalid YAML, an unsupported provider, both terms given, an
        invalid regex, or no matches.
    """
    try:
        document = yaml.safe_load(data)
    except yaml.YAMLError as e:
        raise StackError(f"stack file is not valid YAML: {e}")

    if document is None:
        document = {}
    if not isinstance(document, dict):
        raise StackError("stack file must contain a mapping")

    provider = _parse_provider(document.get("provider"))

    if regex and name_filter:
        raise StackError("pass in a regex or a filter, not both")

    functions = _parse_functions(document.get("functions"))

    if regex:
        try:
            pattern = re.compile(regex)
        except re.error as e:
            raise StackError(f"error parsing regexp: {e}")
        backreference = _find_backreference(regex)
        if backreference:
            raise StackError(f"error parsing regexp: invalid escape sequence: `{backreference}`")
        functions = {name: fn for name, fn in functions.items() if pattern.search(name)}
    elif name_filter:
        functions = {
            name: fn for name, fn in functions.items() if fnmatch.fnmatchcase(name, name_filter)
        }

    if (regex or name_filter) and not functions:
        raise StackError(NO_MATCHES_MESSAGE)

    return Stack(provider=provider, functions=functions)


def _parse_provider(section: Any) -> Provider:
    section = section if isinstance(section, dict) else {}
    name = str(section.get("name") or "")

    if name not in VALID_PROVIDERS:
        valid = ", ".join(f"'{p}'" for p in VALID_PROVIDERS)
        raise StackError(f"[{valid}] is the only valid provider for this tool - found: {name}")

    return Provider(
        name=name,
        gateway=str(section.get("gateway") or ""),
        network=str(section.get("network") or ""),
    )


def _parse_functions(section: Any) -> FunctionSet:
    if section is None:
        return {}
    if not isinstance(section, dict):
        raise StackError("functions must be a mapping of name to function")

    functions = {}
    for name, entry in section.items():
        name = str(name)
        if entry is None:
            entry = {}
        if not isinstance(entry, dict):
            raise StackError(f"function {name} must be a mapping")

        functions[name] = FunctionDescriptor(
            name=name,
            image=str(entry.get("image") or ""),
            handler=str(entry.get("handler") or ""),
            language=str(entry.get("lang") or ""),
            skip_build=bool(entry.get("skip_build", False)),
            build_args=_string_map(entry.get("build_args"), name, "build_args"),
            fprocess=str(entry.get("fprocess") or ""),
            environment=_string_map(entry.get("environment"), name, "environment"),
            environment_file=_string_list(entry.get("environment_file"), name, "environment_file"),
            labels=_string_map(entry.get("labels"), name, "labels"),
            constraints=_string_list(entry.get("constraints"), name, "constraints"),
            secrets=_string_list(entry.get("secrets"), name, "secrets"),
            limits=_string_map(entry.get("limits"), name, "limits"),
            requests=_string_map(entry.get("requests"), name, "requests"),
        )

    return functions


def _string_map(value: Any, function: str, key: str) -> dict[str, str]:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise StackError(f"{key} of function {function} must be a mapping")
    return {str(k): "" if v is None else str(v) for k, v in value.items()}


def _string_list(value: Any, function: str, key: str) -> list[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if not isinstance(value, list):
        raise StackError(f"{key} of function {function} must be a list")
    return [str(v) for v in value]


def _find_backreference(regex: str) -> str:
    """Return the first backreference in regex, or "" when there is none.

    Name selection only supports regular patterns, so ``\\1`` style and
    ``(?P=name)`` references are rejected even though ``re`` accepts them.
    """
    in_class = False
    i = 0
    while i < len(regex):
        char = regex[i]
        if char == "\\" and i + 1 < len(regex):
            following = regex[i + 1]
            if not in_class and following in "123456789":
                return char + following
            i += 2
            continue
        if in_class:
            if char == "]":
                in_class = False
        elif char == "[":
            in_class = True
            # A leading "]" (after an optional "^") is literal
            if regex[i + 1 : i + 2] == "^":
                i += 1
            if regex[i + 1 : i + 2] == "]":
                i += 1
        elif regex.startswith("(?P=", i):
            end = regex.find(")", i)
            return regex[i : end + 1]
        i += 1
    return ""
