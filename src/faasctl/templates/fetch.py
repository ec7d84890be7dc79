"""Download language templates from a repository archive."""

import logging
import os
import tempfile
import zipfile
from pathlib import Path, PurePosixPath

import requests

from faasctl.exceptions import FaasctlError
from faasctl.lib.paths import TEMPLATE_DIRNAME, get_template_dir

logger = logging.getLogger(__name__)

ARCHIVE_SUFFIX = "/archive/master.zip"
DOWNLOAD_TIMEOUT = 120


class TemplateError(FaasctlError):
    """Templates could not be downloaded or expanded."""

    pass


def pull_templates(repository: str) -> tuple[list[str], list[str]] | None:
    """Fetch templates only when ./template does not exist yet.

    Parameters
    ----------
    repository : str
        Repository URL, e.g. "https://github.com/openfaas/faas-cli".

    Returns
    -------
    tuple or None
        Result of fetch_templates, or None when templates were present.
    """
    if get_template_dir().exists():
        return None

    logger.info("No templates found in current directory.")
    return fetch_templates(repository, overwrite=False)


def fetch_templates(repository: str, overwrite: bool = False) -> tuple[list[str], list[str]]:
    """Download a repository archive and expand its template/ folder.

    Parameters
    ----------
    repository : str
        Repository URL. The archive is read from {repository}/archive/master.zip.
    overwrite : bool, optional
        Replace language templates that already exist locally.

    Returns
    -------
    tuple[list[str], list[str]]
        (pre-existing languages that were kept, newly fetched languages)

    Raises
    ------
    TemplateError
        If the download or the expansion fails.
    """
    archive = download_archive(repository)
    try:
        logger.info("Attempting to expand templates from %s", archive)
        existing, fetched = expand_templates(archive, Path.cwd(), overwrite)
    finally:
        logger.debug("Cleaning up zip file %s", archive)
        archive.unlink(missing_ok=True)

    return existing, fetched


def download_archive(repository: str) -> Path:
    """Download the master.zip archive of a repository to a temporary file.

    Parameters
    ----------
    repository : str
        Repository URL.

    Returns
    -------
    Path
        Path of the downloaded archive. The caller removes it.

    Raises
    ------
    TemplateError
        On connection errors or a non-200 response.
    """
    url = repository.rstrip("/") + ARCHIVE_SUFFIX
    logger.info("HTTP GET %s", url)

    try:
        response = requests.get(url, timeout=DOWNLOAD_TIMEOUT)
    except requests.RequestException as e:
        raise TemplateError(f"unable to download templates from {url}: {e}")

    if response.status_code != 200:
        raise TemplateError(f"{url} is not valid, status code {response.status_code}")

    fd, name = tempfile.mkstemp(prefix="faasctl-templates-", suffix=".zip")
    with os.fdopen(fd, "wb") as f:
        f.write(response.content)

    logger.info("Wrote %dKb to %s", len(response.content) // 1024, name)
    return Path(name)


def expand_templates(archive: Path, dest: Path, overwrite: bool = False) -> tuple[list[str], list[str]]:
    """Expand template/{language}/ folders from an archive into dest.

    Only entries under the archive's top-level template/ folder are read.
    A language that already exists in dest/template/ is left untouched
    unless ``overwrite`` is set.

    Parameters
    ----------
    archive : Path
        Zip archive whose entries are prefixed by one root folder
        (e.g. "faas-cli-master/template/node/Dockerfile").
    dest : Path
        Directory receiving the template/ folder.
    overwrite : bool, optional
        Replace existing languages.

    Returns
    -------
    tuple[list[str], list[str]]
        (pre-existing languages that were kept, newly fetched languages)

    Raises
    ------
    TemplateError
        If the archive is invalid or an entry escapes the template folder.
    """
    existing_languages: list[str] = []
    fetched_languages: list[str] = []
    writable: dict[str, bool] = {}

    def can_write(language: str) -> bool:
        if language not in writable:
            present = (dest / get_template_dir(language)).exists()
            writable[language] = overwrite or not present
            if writable[language]:
                fetched_languages.append(language)
            else:
                existing_languages.append(language)
        return writable[language]

    template_root = (dest / TEMPLATE_DIRNAME).resolve()

    try:
        zip_file = zipfile.ZipFile(archive)
    except (zipfile.BadZipFile, OSError) as e:
        raise TemplateError(f"unable to open template archive {archive}: {e}")

    with zip_file:
        for entry in zip_file.infolist():
            parts = PurePosixPath(entry.filename).parts[1:]
            # template/{language}/...
            if len(parts) < 2 or parts[0] != TEMPLATE_DIRNAME:
                continue

            language = parts[1]
            if not can_write(language):
                continue

            target = dest.joinpath(*parts)
            if not target.resolve().is_relative_to(template_root):
                raise TemplateError(f"archive entry escapes template folder: {entry.filename}")

            if entry.is_dir():
                target.mkdir(parents=True, exist_ok=True)
                continue

            target.parent.mkdir(parents=True, exist_ok=True)
            with zip_file.open(entry) as src, open(target, "wb") as out:
                out.write(src.read())

            mode = (entry.external_attr >> 16) & 0o777
            if mode:
                target.chmod(mode)

    return sorted(existing_languages), sorted(fetched_languages)
