"""Build a single function image with the Docker CLI."""

import logging
import os
import shutil
import subprocess
from pathlib import Path
from typing import Mapping

from faasctl.exceptions import BuildError
from faasctl.lib.output import info, success
from faasctl.lib.paths import get_build_dir, get_template_dir

logger = logging.getLogger(__name__)

DOCKERFILE_LANGUAGE = "dockerfile"
FUNCTION_DIRNAME = "function"

# Forwarded to docker build when set in the environment
PROXY_BUILD_ARGS = ("http_proxy", "https_proxy")


def build_image(
    image: str,
    handler: str,
    name: str,
    language: str,
    no_cache: bool = False,
    squash: bool = False,
    shrinkwrap: bool = False,
    build_args: Mapping[str, str] | None = None,
) -> None:
    """Build the container image for one function.

    For the "dockerfile" language the handler directory is the build
    context. Any other language is assembled into ./build/{name}/ from
    ./template/{language}/ with the handler copied into its function/
    folder.

    Parameters
    ----------
    image : str
        Image name and tag to build, e.g. "alexellis/fn:latest".
    handler : str
        Path to the function handler directory.
    name : str
        Function name; also the build context folder name.
    language : str
        Template language, e.g. "node", "python3" or "dockerfile".
    no_cache : bool, optional
        Pass --no-cache to docker build.
    squash : bool, optional
        Pass --squash to docker build.
    shrinkwrap : bool, optional
        Only write the build context, do not run docker build.
    build_args : Mapping[str, str] or None, optional
        Extra --build-arg values.

    Raises
    ------
    BuildError
        If the template is missing, the context cannot be written, or
        docker build fails.
    """
    if language.lower() == DOCKERFILE_LANGUAGE:
        context = Path(handler)
        if not context.is_dir():
            raise BuildError(f"Handler directory not found: {handler}", name=name)
        if shrinkwrap:
            success(f"{name} uses a Dockerfile, nothing to shrink-wrap in {handler}")
            return
    else:
        context = create_build_context(name, handler, language)
        if shrinkwrap:
            success(f"{name} shrink-wrapped to {context}/")
            return

    info(f"Building: {image} with {language} template. Please wait..")
    cmd = build_docker_command(image, no_cache, squash, build_args)
    logger.debug("Executing in %s: %s", context, " ".join(cmd))
    exec_command(cmd, context, name)
    success(f"Image: {image} built.")


def build_docker_command(
    image: str,
    no_cache: bool = False,
    squash: bool = False,
    build_args: Mapping[str, str] | None = None,
) -> list[str]:
    """Assemble the docker build command line.

    Parameters
    ----------
    image : str
        Image tag.
    no_cache : bool, optional
        Add --no-cache.
    squash : bool, optional
        Add --squash.
    build_args : Mapping[str, str] or None, optional
        Build arguments, emitted in sorted key order.

    Returns
    -------
    list[str]
        Command to run from inside the build context.

    Examples
    --------
    >>> build_docker_command("fn:latest", no_cache=True)
    ['docker', 'build', '-t', 'fn:latest', '--no-cache', '.']
    """
    cmd = ["docker", "build", "-t", image]

    if no_cache:
        cmd.append("--no-cache")
    if squash:
        cmd.append("--squash")

    all_args = {}
    for proxy_var in PROXY_BUILD_ARGS:
        value = os.environ.get(proxy_var)
        if value:
            all_args[proxy_var] = value
    all_args.update(build_args or {})

    for key in sorted(all_args):
        cmd.extend(["--build-arg", f"{key}={all_args[key]}"])

    cmd.append(".")
    return cmd


def create_build_context(name: str, handler: str, language: str) -> Path:
    """Write ./build/{name}/ from the language template and the handler.

    Parameters
    ----------
    name : str
        Function name.
    handler : str
        Path to the handler directory.
    language : str
        Template language.

    Returns
    -------
    Path
        Path to the build context.

    Raises
    ------
    BuildError
        If the template does not exist or files cannot be copied.
    """
    template_dir = get_template_dir(language)
    if not template_dir.is_dir():
        raise BuildError(
            f"Language template: {language} not supported. Build a custom Dockerfile instead.",
            name=name,
        )

    handler_dir = Path(handler)
    if not handler_dir.is_dir():
        raise BuildError(f"Handler directory not found: {handler}", name=name)

    context = get_build_dir(name)
    try:
        if context.exists():
            shutil.rmtree(context)
        copy_files(template_dir, context)
        copy_files(handler_dir, context / FUNCTION_DIRNAME)
    except OSError as e:
        raise BuildError(f"Unable to create build context {context}: {e}", name=name)

    logger.debug("Build context for %s written to %s", name, context)
    return context


def copy_files(src: Path, dest: Path) -> None:
    """Recursively copy src into dest, preserving file modes.

    Parameters
    ----------
    src : Path
        Source directory.
    dest : Path
        Destination directory; created if missing, merged if present.
    """
    shutil.copytree(src, dest, dirs_exist_ok=True, copy_function=shutil.copy2)


def exec_command(cmd: list[str], cwd: Path, name: str | None = None) -> None:
    """Run an external command, streaming its output.

    Parameters
    ----------
    cmd : list[str]
        Command and arguments.
    cwd : Path
        Working directory.
    name : str or None, optional
        Function name, attached to the raised error.

    Raises
    ------
    BuildError
        If the command cannot be started or exits non-zero.
    """
    try:
        result = subprocess.run(cmd, cwd=cwd, check=False)
    except OSError as e:
        raise BuildError(f"Could not execute command: {cmd}: {e}", name=name)

    if result.returncode != 0:
        raise BuildError(
            f"Could not execute command: {cmd} (exit code {result.returncode})", name=name
        )


def get_version(cwd: Path | None = None) -> str:
    """Image tag suffix for the git commit checked out in cwd.

    Parameters
    ----------
    cwd : Path or None, optional
        Directory inside the repository; defaults to the current directory.

    Returns
    -------
    str
        ":{tag}-{sha}" where tag is the tag pointing at HEAD, or "latest"
        when untagged. Empty string outside a git repository.

    Examples
    --------
    >>> get_version()
    ':v1.2.0-3f2a9c1'
    """
    sha = _git_output(["git", "rev-parse", "--short", "HEAD"], cwd)
    if not sha:
        return ""

    tag = _git_output(["git", "tag", "--points-at", sha], cwd)
    # Several tags may point at one commit; use the first
    tag = tag.splitlines()[0] if tag else "latest"
    return f":{tag}-{sha}"


def _git_output(cmd: list[str], cwd: Path | None) -> str:
    try:
        result = subprocess.run(
            cmd,
            cwd=cwd,
            capture_output=True,
            text=True,
            timeout=10,
        )
    except (subprocess.TimeoutExpired, FileNotFoundError):
        return ""

    if result.returncode != 0:
        return ""
    return result.stdout.strip()


def push_image(image: str, name: str | None = None) -> None:
    """Push an image to its registry with docker push.

    Parameters
    ----------
    image : str
        Image to push.
    name : str or None, optional
        Function name, attached to the raised error.

    Raises
    ------
    BuildError
        If docker push fails.
    """
    info(f"Pushing: {image}")
    exec_command(["docker", "push", image], Path.cwd(), name)
    success(f"Image: {image} pushed.")

