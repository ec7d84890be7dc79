"""Unit tests for single-image build and push."""

import os
from pathlib import Path
from unittest.mock import Mock, patch

import pytest

from faasctl.builder.executor import (
    build_docker_command,
    build_image,
    create_build_context,
    exec_command,
    get_version,
    push_image,
)
from faasctl.exceptions import BuildError


@pytest.fixture
def project(in_tmp_path):
    """Working directory with a node template and a handler."""
    template = in_tmp_path / "template" / "node"
    (template / "function").mkdir(parents=True)
    (template / "Dockerfile").write_text("FROM node:18\n")
    (template / "index.js").write_text("// entrypoint\n")
    (template / "function" / "handler.js").write_text("// placeholder\n")

    handler = in_tmp_path / "echo"
    handler.mkdir()
    (handler / "handler.js").write_text("module.exports = () => 'echo'\n")
    (handler / "package.json").write_text("{}\n")
    return in_tmp_path


@pytest.mark.unit
class TestBuildDockerCommand:
    """Tests for build_docker_command()."""

    def test_minimal(self, monkeypatch):
        monkeypatch.delenv("http_proxy", raising=False)
        monkeypatch.delenv("https_proxy", raising=False)

        assert build_docker_command("fn:latest") == ["docker", "build", "-t", "fn:latest", "."]

    def test_flags_and_sorted_build_args(self, monkeypatch):
        monkeypatch.delenv("http_proxy", raising=False)
        monkeypatch.delenv("https_proxy", raising=False)

        cmd = build_docker_command(
            "fn:latest",
            no_cache=True,
            squash=True,
            build_args={"ZED": "1", "ALPHA": "a=b"},
        )

        assert cmd == [
            "docker",
            "build",
            "-t",
            "fn:latest",
            "--no-cache",
            "--squash",
            "--build-arg",
            "ALPHA=a=b",
            "--build-arg",
            "ZED=1",
            ".",
        ]

    def test_proxy_forwarded(self, monkeypatch):
        monkeypatch.setenv("http_proxy", "http://proxy:3128")
        monkeypatch.delenv("https_proxy", raising=False)

        cmd = build_docker_command("fn")

        assert "http_proxy=http://proxy:3128" in cmd


@pytest.mark.unit
class TestCreateBuildContext:
    """Tests for create_build_context()."""

    def test_context_layout(self, project):
        context = create_build_context("echo", "./echo", "node")

        assert context == Path("build") / "echo"
        assert (project / "build" / "echo" / "Dockerfile").exists()
        assert (project / "build" / "echo" / "index.js").exists()
        assert (project / "build" / "echo" / "function" / "handler.js").read_text().startswith(
            "module.exports"
        )
        assert (project / "build" / "echo" / "function" / "package.json").exists()

    def test_stale_context_removed(self, project):
        stale = project / "build" / "echo" / "stale.txt"
        stale.parent.mkdir(parents=True)
        stale.write_text("old")

        create_build_context("echo", "./echo", "node")

        assert not stale.exists()

    def test_unknown_language(self, project):
        with pytest.raises(BuildError, match="Language template: cobol not supported"):
            create_build_context("echo", "./echo", "cobol")

    def test_missing_handler(self, project):
        with pytest.raises(BuildError, match="Handler directory not found"):
            create_build_context("echo", "./missing", "node")


@pytest.mark.unit
class TestBuildImage:
    """Tests for build_image()."""

    @patch("faasctl.builder.executor.exec_command")
    def test_template_build(self, mock_exec, project, capsys):
        build_image("example/echo:latest", "./echo", "echo", "node", no_cache=True)

        cmd, cwd, name = mock_exec.call_args.args
        assert cmd[:5] == ["docker", "build", "-t", "example/echo:latest", "--no-cache"]
        assert cwd == Path("build") / "echo"
        assert name == "echo"
        assert "Image: example/echo:latest built." in capsys.readouterr().out

    @patch("faasctl.builder.executor.exec_command")
    def test_dockerfile_build_uses_handler(self, mock_exec, project):
        build_image("example/echo", "./echo", "echo", "Dockerfile")

        assert mock_exec.call_args.args[1] == Path("./echo")
        assert not (project / "build").exists()

    @patch("faasctl.builder.executor.exec_command")
    def test_shrinkwrap_skips_docker(self, mock_exec, project, capsys):
        build_image("example/echo", "./echo", "echo", "node", shrinkwrap=True)

        mock_exec.assert_not_called()
        assert (project / "build" / "echo" / "Dockerfile").exists()
        assert "echo shrink-wrapped to build/echo/" in capsys.readouterr().out


@pytest.mark.unit
class TestExecCommand:
    """Tests for exec_command() and push_image()."""

    @patch("faasctl.builder.executor.subprocess.run")
    def test_success(self, mock_run):
        mock_run.return_value = Mock(returncode=0)

        exec_command(["docker", "version"], Path("."))

        mock_run.assert_called_once_with(["docker", "version"], cwd=Path("."), check=False)

    @patch("faasctl.builder.executor.subprocess.run")
    def test_non_zero_exit(self, mock_run):
        mock_run.return_value = Mock(returncode=1)

        with pytest.raises(BuildError, match="Could not execute command") as exc_info:
            exec_command(["docker", "build", "."], Path("."), name="fn")

        assert exc_info.value.name == "fn"

    @patch("faasctl.builder.executor.subprocess.run")
    def test_missing_binary(self, mock_run):
        mock_run.side_effect = FileNotFoundError("docker")

        with pytest.raises(BuildError, match="Could not execute command"):
            exec_command(["docker", "build", "."], Path("."))

    @patch("faasctl.builder.executor.subprocess.run")
    def test_push_image(self, mock_run, capsys):
        mock_run.return_value = Mock(returncode=0)

        push_image("example/fn:latest", "fn")

        assert mock_run.call_args.args[0] == ["docker", "push", "example/fn:latest"]
        assert mock_run.call_args.kwargs["cwd"] == Path(os.getcwd())
        assert "Image: example/fn:latest pushed." in capsys.readouterr().out


@pytest.mark.unit
class TestGetVersion:
    """Tests for get_version()."""

    @patch("faasctl.builder.executor.subprocess.run")
    def test_tagged_commit(self, mock_run):
        mock_run.side_effect = [
            Mock(returncode=0, stdout="3f2a9c1\n"),
            Mock(returncode=0, stdout="v1.2.0\nstable\n"),
        ]

        assert get_version() == ":v1.2.0-3f2a9c1"
        assert mock_run.call_args_list[1].args[0] == ["git", "tag", "--points-at", "3f2a9c1"]

    @patch("faasctl.builder.executor.subprocess.run")
    def test_untagged_commit(self, mock_run):
        mock_run.side_effect = [
            Mock(returncode=0, stdout="3f2a9c1\n"),
            Mock(returncode=0, stdout=""),
        ]

        assert get_version() == ":latest-3f2a9c1"

    @patch("faasctl.builder.executor.subprocess.run")
    def test_not_a_repository(self, mock_run):
        mock_run.return_value = Mock(returncode=128, stdout="")

        assert get_version() == ""
        mock_run.assert_called_once()

    @patch("faasctl.builder.executor.subprocess.run")
    def test_git_missing(self, mock_run):
        mock_run.side_effect = FileNotFoundError("git")

        assert get_version() == ""
