"""Integration tests for push and up commands."""

from unittest.mock import Mock, patch

from faasctl.builder.dispatcher import BuildResult, DispatchSummary
from faasctl.commands import push, up
from faasctl.exceptions import BuildError


def up_args(**overrides):
    values = {
        "yaml_file": None,
        "regex": None,
        "filter": None,
        "image": None,
        "handler": None,
        "name": None,
        "lang": None,
        "no_cache": False,
        "squash": False,
        "shrinkwrap": False,
        "build_arg": None,
        "parallel": None,
        "gateway": None,
        "network": None,
        "fprocess": "",
        "env": None,
        "label": None,
        "constraint": None,
        "secret": None,
        "replace": None,
        "update": False,
        "skip_push": False,
        "skip_deploy": False,
    }
    values.update(overrides)
    args = Mock()
    args.configure_mock(**values)
    return args


def make_ctx(config, args):
    return {"config": config, "verbose": False, "quiet": False, "args": args}


class TestPushCommand:
    """Test push command."""

    @patch("faasctl.builder.dispatcher.push_image")
    def test_push_stack(self, mock_push, mock_config, stack_file, capsys):
        exit_code = push.handle(make_ctx(mock_config, up_args(yaml_file=str(stack_file), parallel=2)))

        assert exit_code == 0
        pushed = sorted(call.kwargs["image"] for call in mock_push.call_args_list)
        assert pushed == ["alexellis/faas-nodejs-echo", "alexellis/faas-url-ping"]
        assert "Push summary" in capsys.readouterr().out

    @patch("faasctl.commands.push.handlers.push_all")
    def test_push_failure(self, mock_push_all, mock_config, stack_file):
        mock_push_all.return_value = DispatchSummary(
            results=[BuildResult(name="url-ping", ok=False, error="denied")]
        )

        assert push.handle(make_ctx(mock_config, up_args(yaml_file=str(stack_file)))) == 1

    def test_push_requires_stack(self, mock_config, capsys):
        exit_code = push.handle(make_ctx(mock_config, up_args()))

        assert exit_code == 2
        assert "please provide a stack file with -f" in capsys.readouterr().err

    @patch("faasctl.commands.push.handlers.push_image")
    def test_push_single_image(self, mock_push, mock_config):
        exit_code = push.handle(make_ctx(mock_config, up_args(image="example/fn", name="fn")))

        assert exit_code == 0
        mock_push.assert_called_once_with("example/fn", "fn")

    @patch("faasctl.commands.push.handlers.push_image")
    def test_push_single_image_failure(self, mock_push, mock_config):
        mock_push.side_effect = BuildError("Could not execute command")

        assert push.handle(make_ctx(mock_config, up_args(image="example/fn"))) == 1


class TestUpCommand:
    """Test up command."""

    @patch("faasctl.commands.up.handlers.deploy.handle", return_value=0)
    @patch("faasctl.commands.up.handlers.push.handle", return_value=0)
    @patch("faasctl.commands.up.handlers.build.handle", return_value=0)
    def test_all_steps(self, mock_build, mock_push, mock_deploy, mock_config):
        ctx = make_ctx(mock_config, up_args(yaml_file="stack.yml"))

        assert up.handle(ctx) == 0
        mock_build.assert_called_once_with(ctx)
        mock_push.assert_called_once_with(ctx)
        mock_deploy.assert_called_once_with(ctx)

    @patch("faasctl.commands.up.handlers.deploy.handle", return_value=0)
    @patch("faasctl.commands.up.handlers.push.handle", return_value=0)
    @patch("faasctl.commands.up.handlers.build.handle", return_value=0)
    def test_skip_push(self, mock_build, mock_push, mock_deploy, mock_config):
        ctx = make_ctx(mock_config, up_args(skip_push=True))

        assert up.handle(ctx) == 0
        mock_push.assert_not_called()
        mock_deploy.assert_called_once_with(ctx)

    @patch("faasctl.commands.up.handlers.deploy.handle", return_value=0)
    @patch("faasctl.commands.up.handlers.push.handle", return_value=0)
    @patch("faasctl.commands.up.handlers.build.handle", return_value=0)
    def test_skip_deploy(self, mock_build, mock_push, mock_deploy, mock_config):
        ctx = make_ctx(mock_config, up_args(skip_deploy=True))

        assert up.handle(ctx) == 0
        mock_push.assert_called_once_with(ctx)
        mock_deploy.assert_not_called()

    @patch("faasctl.commands.up.handlers.deploy.handle", return_value=0)
    @patch("faasctl.commands.up.handlers.push.handle", return_value=0)
    @patch("faasctl.commands.up.handlers.build.handle", return_value=1)
    def test_build_failure_stops(self, mock_build, mock_push, mock_deploy, mock_config):
        assert up.handle(make_ctx(mock_config, up_args())) == 1
        mock_push.assert_not_called()
        mock_deploy.assert_not_called()

    @patch("faasctl.commands.up.handlers.deploy.handle", return_value=0)
    @patch("faasctl.commands.up.handlers.push.handle", return_value=1)
    @patch("faasctl.commands.up.handlers.build.handle", return_value=0)
    def test_push_failure_stops(self, mock_build, mock_push, mock_deploy, mock_config):
        assert up.handle(make_ctx(mock_config, up_args())) == 1
        mock_deploy.assert_not_called()
