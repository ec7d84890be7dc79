"""Integration tests for argument parsing and command routing."""

import os
from unittest.mock import patch

import pytest

from faasctl import __version__
from faasctl.cli import create_parser, main


@pytest.fixture(autouse=True)
def isolated_environment(tmp_path, monkeypatch):
    """Keep user config, project config and logger setup out of CLI runs."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))
    for key in list(os.environ):
        if key.startswith("FAASCTL_"):
            monkeypatch.delenv(key)
    with patch("faasctl.cli.setup_logger"):
        yield


class TestParser:
    """Test argument parsing."""

    def test_build_arguments(self):
        args = create_parser().parse_args(
            ["build", "-f", "stack.yml", "--parallel", "4", "--no-cache", "-b", "A=1", "-b", "B=2"]
        )

        assert args.command == "build"
        assert args.yaml_file == "stack.yml"
        assert args.parallel == 4
        assert args.no_cache is True
        assert args.build_arg == ["A=1", "B=2"]

    def test_deploy_replace_defaults_to_none(self):
        args = create_parser().parse_args(["deploy", "--image", "i", "--name", "fn"])

        assert args.replace is None
        assert args.update is False
        assert args.fprocess == ""

    def test_deploy_no_replace(self):
        args = create_parser().parse_args(["deploy", "-f", "stack.yml", "--no-replace", "-g", "http://gw"])

        assert args.replace is False
        assert args.gateway == "http://gw"

    def test_up_options(self):
        args = create_parser().parse_args(["up", "-f", "stack.yml", "--skip-push", "--secret", "s"])

        assert args.skip_push is True
        assert args.skip_deploy is False
        assert args.secret == ["s"]

    @pytest.mark.parametrize("command", ["remove", "rm"])
    def test_remove_alias(self, command):
        args = create_parser().parse_args([command, "fn-a", "fn-b"])

        assert args.command == command
        assert args.names == ["fn-a", "fn-b"]

    def test_secret_remove(self):
        args = create_parser().parse_args(["secret", "rm", "api-key"])

        assert args.secret_subcommand == "rm"
        assert args.secret_name == "api-key"

    def test_version(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            create_parser().parse_args(["--version"])

        assert exc_info.value.code == 0
        assert __version__ in capsys.readouterr().out


class TestMain:
    """Test main() routing and exit codes."""

    def test_no_command(self, capsys):
        assert main([]) == 1
        assert "Usage:" in capsys.readouterr().out

    def test_invalid_config(self, tmp_path, capsys):
        config_file = tmp_path / "config.yaml"
        config_file.write_text("gateway: [unclosed\n")

        assert main(["--config", str(config_file), "list"]) == 2
        assert "Failed to load configuration" in capsys.readouterr().err

    @patch("faasctl.commands.list_cmd.handle", return_value=0)
    def test_routes_alias(self, mock_handle):
        assert main(["ls", "--images"]) == 0

        ctx = mock_handle.call_args.args[0]
        assert ctx["args"].images is True
        assert ctx["config"]["gateway"]["url"] == "http://localhost:8080"

    @patch("faasctl.commands.build.handle", return_value=1)
    def test_returns_handler_code(self, mock_handle):
        assert main(["build", "-f", "stack.yml"]) == 1
        mock_handle.assert_called_once()

    @patch("faasctl.commands.deploy.handle", side_effect=KeyboardInterrupt)
    def test_keyboard_interrupt(self, mock_handle):
        assert main(["deploy", "-f", "stack.yml"]) == 130

    @patch("faasctl.commands.push.handle", side_effect=RuntimeError("boom"))
    def test_unexpected_error(self, mock_handle, capsys):
        assert main(["push", "-f", "stack.yml"]) == 1
        assert "Command failed: boom" in capsys.readouterr().err

    def test_project_config(self, tmp_path):
        (tmp_path / "faasctl.yaml").write_text("gateway:\n  url: http://project:8080\n")

        with patch("faasctl.commands.list_cmd.handle", return_value=0) as mock_handle:
            main(["list"])

        assert mock_handle.call_args.args[0]["config"]["gateway"]["url"] == "http://project:8080"
