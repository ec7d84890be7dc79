"""Pytest configuration and shared fixtures."""

import copy
import textwrap

import pytest

from faasctl.config.loader import DEFAULT_CONFIG
from faasctl.lib.output import set_color_enabled


@pytest.fixture(autouse=True)
def no_color():
    """Disable ANSI colors so output assertions see plain text."""
    set_color_enabled(False)
    yield
    set_color_enabled(None)


@pytest.fixture
def mock_config():
    """Standard test configuration.

    Returns
    -------
    dict
        Test configuration dictionary.
    """
    config = copy.deepcopy(DEFAULT_CONFIG)
    config["gateway"]["url"] = "http://gateway.test:8080"
    config["gateway"]["tls_insecure"] = True
    config["_meta"] = {"config_sources": []}
    return config


@pytest.fixture
def stack_file(tmp_path):
    """Write a three-function stack file and return its path.

    Returns
    -------
    Path
        Path to stack.yml inside tmp_path.
    """
    path = tmp_path / "stack.yml"
    path.write_text(
        textwrap.dedent(
            """\
            provider:
              name: openfaas
              gateway: http://yaml-gateway:8080
              network: yaml_net

            functions:
              url-ping:
                lang: python
                handler: ./sample/url-ping
                image: alexellis/faas-url-ping
                environment:
                  MODE: yaml
                  LEVEL: info
                labels:
                  team: core
              nodejs-echo:
                lang: node
                handler: ./sample/nodejs-echo
                image: alexellis/faas-nodejs-echo
                constraints:
                  - node.platform.os == linux
              imagemagick:
                lang: dockerfile
                handler: ./sample/imagemagick
                image: functions/resizer
                skip_build: true
                fprocess: convert - -resize 50% fd:1
            """
        )
    )
    return path


@pytest.fixture
def in_tmp_path(tmp_path, monkeypatch):
    """Run the test with tmp_path as the working directory."""
    monkeypatch.chdir(tmp_path)
    return tmp_path
