"""
Main Typer application for promptduel CLI.

This module defines the root CLI application and registers all command groups.
"""

import logging
from typing import Annotated

import typer
from rich.console import Console
from rich.logging import RichHandler

from promptduel import __version__
from promptduel.cli.commands import compare, config, prompt, settings, tools
from promptduel.cli.output import print_info
from promptduel.config import ConfigurationError, get_config

# Create the main Typer app
app = typer.Typer(
    name="promptduel",
    help="Compare two system prompts side by side against a chat model with tools.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    pretty_exceptions_enable=True,
    pretty_exceptions_show_locals=False,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        print_info(f"promptduel version [green]{__version__}[/green]")
        raise typer.Exit()


def setup_logging(verbose: bool = False) -> None:
    """
    Route log records to stderr through rich.

    The level comes from the ``logging`` config section; ``verbose`` forces
    DEBUG. An invalid config leaves the default level in place, the command
    itself reports the error.
    """
    level = "WARNING"
    show_path = False
    try:
        logging_config = get_config().logging
        level = logging_config.level
        show_path = logging_config.show_path
    except ConfigurationError:
        pass

    if verbose:
        level = "DEBUG"

    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=show_path)],
        force=True,
    )
    # LiteLLM is chatty at INFO
    logging.getLogger("LiteLLM").setLevel(max(logging.getLevelName(level), logging.WARNING))


@app.callback()
def main_callback(
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit.",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Enable debug logging.",
        ),
    ] = False,
) -> None:
    """
    [bold blue]promptduel[/bold blue] - System prompt comparison

    Sends the same message to two system prompts in parallel, lets the model
    call tools, and shows both answers with the request and tool-call feed.

    Configure the endpoint with [bold]promptduel settings set api_key ...[/bold]
    """
    setup_logging(verbose)


# Register commands and command groups
app.command("compare")(compare.compare)
app.add_typer(settings.app, name="settings")
app.add_typer(prompt.app, name="prompt")
app.add_typer(tools.app, name="tools")
app.add_typer(config.app, name="config")


if __name__ == "__main__":
    app()
