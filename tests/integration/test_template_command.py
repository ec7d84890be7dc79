"""Integration tests for template command."""

from unittest.mock import Mock, patch

from faasctl.commands import template
from faasctl.templates import TemplateError


def make_args(**values):
    args = Mock()
    args.configure_mock(**values)
    return args


def make_ctx(config, args):
    return {"config": config, "verbose": False, "quiet": False, "args": args}


class TestTemplatePull:
    """Test template pull subcommand."""

    @patch("faasctl.commands.template.handlers.fetch_templates")
    def test_pull_default_repository(self, mock_fetch, mock_config, capsys):
        mock_fetch.return_value = ([], ["node", "python"])
        args = make_args(template_subcommand="pull", repository=None, overwrite=False)

        exit_code = template.handle(make_ctx(mock_config, args))

        assert exit_code == 0
        mock_fetch.assert_called_once_with("https://github.com/openfaas/faas-cli", overwrite=False)
        out = capsys.readouterr().out
        assert "Fetched 2 template(s): ['node', 'python']" in out
        assert "Cannot overwrite" not in out

    @patch("faasctl.commands.template.handlers.fetch_templates")
    def test_pull_existing_languages(self, mock_fetch, mock_config, capsys):
        mock_fetch.return_value = (["python"], ["go"])
        args = make_args(
            template_subcommand="pull",
            repository="https://github.com/example/templates",
            overwrite=False,
        )

        assert template.handle(make_ctx(mock_config, args)) == 0
        mock_fetch.assert_called_once_with("https://github.com/example/templates", overwrite=False)
        assert "Cannot overwrite the following 1 directories: ['python']" in capsys.readouterr().out

    @patch("faasctl.commands.template.handlers.fetch_templates")
    def test_pull_overwrite(self, mock_fetch, mock_config):
        mock_fetch.return_value = ([], ["python"])
        args = make_args(template_subcommand="pull", repository=None, overwrite=True)

        assert template.handle(make_ctx(mock_config, args)) == 0
        assert mock_fetch.call_args.kwargs["overwrite"] is True

    @patch("faasctl.commands.template.handlers.fetch_templates")
    def test_pull_failure(self, mock_fetch, mock_config, capsys):
        mock_fetch.side_effect = TemplateError("unable to download templates: status code 404")
        args = make_args(template_subcommand="pull", repository=None, overwrite=False)

        assert template.handle(make_ctx(mock_config, args)) == 1
        assert "status code 404" in capsys.readouterr().err

    def test_no_subcommand(self, mock_config):
        parser = Mock()
        args = make_args(template_subcommand=None, _template_parser=parser)

        assert template.handle(make_ctx(mock_config, args)) == 1
        parser.print_help.assert_called_once()
