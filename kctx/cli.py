import logging
import sys

import click
from rich.console import Console
from textual.logging import TextualHandler

from kctx import __version__
from kctx.exceptions import ExternalCommandError, StartupError
from kctx.kubectl import list_contexts
from kctx.ui.app import run_picker
from kctx.ui.picker import ContextPicker
from kctx.ui.theme import DEFAULT_THEME

console = Console()
logger = logging.getLogger(__name__)


@click.command()
@click.version_option(version=__version__, prog_name="kctx")
@click.option('--debug', is_flag=True, help='Log kubectl calls and picker events')
def cli(debug):
    """KCTX - Pick a kubectl context and make it the active one"""
    if debug:
        logging.basicConfig(level=logging.DEBUG, handlers=[TextualHandler()])

    try:
        contexts = list_contexts()
    except ExternalCommandError as e:
        logger.debug("Listing contexts failed: %s", e.message)
        console.print(DEFAULT_THEME.quit_text(e.message, style=DEFAULT_THEME.error_style))
        return

    picker = ContextPicker(contexts)
    try:
        run_picker(picker)
    except StartupError as e:
        click.echo(f"Error running program: {e}")
        sys.exit(1)

    console.print(picker.view())


if __name__ == '__main__':
    cli()
