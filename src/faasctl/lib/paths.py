"""XDG-compliant and working-directory path management for faasctl."""

import os
from pathlib import Path

TEMPLATE_DIRNAME = "template"
BUILD_DIRNAME = "build"


def get_config_dir() -> Path:
    """
    Get the configuration directory following XDG Base Directory spec.

    Returns
    -------
    Path
        Path to ~/.config/faasctl/ or $XDG_CONFIG_HOME/faasctl/.
    """
    xdg_config_home = os.environ.get("XDG_CONFIG_HOME")
    if xdg_config_home:
        base = Path(xdg_config_home)
    else:
        base = Path.home() / ".config"

    return base / "faasctl"


def get_config_file() -> Path:
    """
    Get path to main configuration file.

    Returns
    -------
    Path
        Path to config.yaml in the configuration directory.
    """
    return get_config_dir() / "config.yaml"


def get_project_config_file() -> Path:
    """
    Get path to project-local configuration file.

    Returns
    -------
    Path
        Path to ./faasctl.yaml in the current working directory.
    """
    return Path.cwd() / "faasctl.yaml"


def get_template_dir(language: str | None = None) -> Path:
    """
    Get the local template directory, or one language inside it.

    Parameters
    ----------
    language : str or None, optional
        Language template name (e.g. "node", "python3").

    Returns
    -------
    Path
        ./template or ./template/{language} relative to the working directory.
    """
    template_dir = Path(TEMPLATE_DIRNAME)
    if language:
        return template_dir / language
    return template_dir


def get_build_dir(function_name: str) -> Path:
    """
    Get the build context directory for a function.

    Parameters
    ----------
    function_name : str
        Name of the function.

    Returns
    -------
    Path
        ./build/{function_name} relative to the working directory.
    """
    return Path(BUILD_DIRNAME) / function_name
