import logging
import pytest
from click.testing import CliRunner
from unittest.mock import patch

from kctx.cli import cli
from kctx.exceptions import ExternalCommandError, StartupError
from kctx.models import Context


@pytest.fixture
def runner():
    """Create a CLI runner for testing"""
    return CliRunner()


@pytest.fixture
def contexts():
    return [
        Context(name="ctx-a", namespace="ns-a", selected=True),
        Context(name="ctx-b"),
    ]


def press(*keys):
    """Stand-in for the terminal UI: feed keys straight to the picker"""
    def fake_run_picker(picker):
        for key in keys:
            picker.handle_key(key)
        return picker
    return fake_run_picker


def test_cli_version(runner):
    """Test version option"""
    result = runner.invoke(cli, ['--version'])
    assert result.exit_code == 0
    assert 'version 0.3.0' in result.output


def test_help(runner):
    """Test help option"""
    result = runner.invoke(cli, ['--help'])
    assert result.exit_code == 0
    assert 'Pick a kubectl context' in result.output


def test_confirm_prints_activated_context(runner, contexts):
    """Picking a context activates it and says so"""
    with patch('kctx.cli.list_contexts', return_value=contexts), \
         patch('kctx.cli.run_picker', side_effect=press("down", "enter")), \
         patch('kctx.ui.picker.use_context') as mock_use:
        result = runner.invoke(cli, [])

    assert result.exit_code == 0
    mock_use.assert_called_once_with("ctx-b")
    assert 'Activating Context: ctx-b' in result.output


def test_activation_failure_prints_error_and_exits_zero(runner, contexts):
    failure = ExternalCommandError('error: cannot write config')
    with patch('kctx.cli.list_contexts', return_value=contexts), \
         patch('kctx.cli.run_picker', side_effect=press("enter")), \
         patch('kctx.ui.picker.use_context', side_effect=failure):
        result = runner.invoke(cli, [])

    assert result.exit_code == 0
    assert 'error: cannot write config' in result.output
    assert 'Activating Context' not in result.output


def test_cancel_says_good_bye(runner, contexts):
    with patch('kctx.cli.list_contexts', return_value=contexts), \
         patch('kctx.cli.run_picker', side_effect=press("ctrl+c")), \
         patch('kctx.ui.picker.use_context') as mock_use:
        result = runner.invoke(cli, [])

    assert result.exit_code == 0
    mock_use.assert_not_called()
    assert 'Good bye' in result.output


def test_listing_failure_is_shown_instead_of_list(runner):
    failure = ExternalCommandError('The connection to the server was refused')
    with patch('kctx.cli.list_contexts', side_effect=failure), \
         patch('kctx.cli.run_picker') as mock_run:
        result = runner.invoke(cli, [])

    assert result.exit_code == 0
    mock_run.assert_not_called()
    assert 'The connection to the server was refused' in result.output


def test_startup_failure_exits_one(runner, contexts):
    with patch('kctx.cli.list_contexts', return_value=contexts), \
         patch('kctx.cli.run_picker', side_effect=StartupError('no tty')):
        result = runner.invoke(cli, [])

    assert result.exit_code == 1
    assert 'Error running program: no tty' in result.output


def test_picker_receives_listed_contexts(runner, contexts):
    with patch('kctx.cli.list_contexts', return_value=contexts), \
         patch('kctx.cli.run_picker', side_effect=press("ctrl+c")) as mock_run:
        runner.invoke(cli, [])

    picker = mock_run.call_args[0][0]
    assert picker.contexts == tuple(contexts)


def test_debug_routes_logging_through_textual(runner, contexts):
    """--debug installs the textual log handler and still runs normally"""
    from textual.logging import TextualHandler

    with patch('kctx.cli.list_contexts', return_value=contexts), \
         patch('kctx.cli.run_picker', side_effect=press("ctrl+c")), \
         patch('kctx.cli.logging.basicConfig') as mock_config:
        result = runner.invoke(cli, ['--debug'])

    assert result.exit_code == 0
    assert 'Good bye' in result.output
    kwargs = mock_config.call_args[1]
    assert kwargs['level'] == logging.DEBUG
    assert any(isinstance(h, TextualHandler) for h in kwargs['handlers'])


def test_logging_left_alone_without_debug(runner, contexts):
    with patch('kctx.cli.list_contexts', return_value=contexts), \
         patch('kctx.cli.run_picker', side_effect=press("ctrl+c")), \
         patch('kctx.cli.logging.basicConfig') as mock_config:
        result = runner.invoke(cli, [])

    assert result.exit_code == 0
    mock_config.assert_not_called()
