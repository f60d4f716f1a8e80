"""
promptduel config - Configuration management commands.

Usage:
    promptduel config show
    promptduel config show orchestrator
    promptduel config set orchestrator.max_iterations 3
    promptduel config validate
"""

import json
from typing import Annotated, Any

import typer
import yaml
from pydantic import ValidationError
from rich.console import Console
from rich.panel import Panel
from rich.syntax import Syntax

from promptduel.config import (
    Config,
    ConfigurationError,
    load_config,
    load_yaml_file,
    save_yaml_file,
    set_nested_value,
)
from promptduel.storage import get_config_path

app = typer.Typer(
    name="config",
    help="Configuration management.",
)

console = Console()


def _parse_value(value: str) -> Any:
    """
    Parse a string value to the appropriate Python type.

    Args:
        value: String value to parse.

    Returns:
        Parsed value (bool, int, float, or string).
    """
    if value.lower() in ("true", "yes", "on"):
        return True
    if value.lower() in ("false", "no", "off"):
        return False

    try:
        return int(value)
    except ValueError:
        pass

    try:
        return float(value)
    except ValueError:
        pass

    return value


@app.command()
def show(
    section: Annotated[
        str | None,
        typer.Argument(
            help="Config section to show (orchestrator, events or logging).",
        ),
    ] = None,
    json_output: Annotated[
        bool,
        typer.Option(
            "--json",
            help="Output as JSON.",
        ),
    ] = False,
) -> None:
    """Show the effective configuration."""
    try:
        config_dict = load_config().model_dump()
    except ConfigurationError as e:
        console.print(f"[red]Configuration error: {e}[/red]")
        raise typer.Exit(1)

    if section:
        if section not in config_dict:
            console.print(f"[red]Section '{section}' not found in configuration.[/red]")
            raise typer.Exit(1)
        config_dict = config_dict[section]

    if json_output:
        console.print(Syntax(json.dumps(config_dict, indent=2), "json", theme="monokai"))
        return

    output = yaml.dump(config_dict, default_flow_style=False, sort_keys=False, allow_unicode=True)
    if section:
        console.print(Panel(Syntax(output, "yaml", theme="monokai"), title=f"[cyan]{section}[/cyan]"))
    else:
        console.print(Syntax(output, "yaml", theme="monokai"))


@app.command("set")
def set_value(
    key: Annotated[
        str,
        typer.Argument(
            help="Configuration key (e.g., 'orchestrator.max_iterations').",
        ),
    ],
    value: Annotated[
        str,
        typer.Argument(
            help="Value to set.",
        ),
    ],
) -> None:
    """Set a value in the config file."""
    config_path = get_config_path()

    try:
        config_dict = load_yaml_file(config_path)
    except ConfigurationError as e:
        console.print(f"[red]Cannot update configuration: {e}[/red]")
        console.print("[dim]Fix or remove the file, then try again.[/dim]")
        raise typer.Exit(1)

    parsed_value = _parse_value(value)
    config_dict = set_nested_value(config_dict, key, parsed_value)

    try:
        Config.model_validate(config_dict)
    except ValidationError as e:
        console.print(f"[red]Invalid value for {key}:[/red] {e.errors()[0]['msg']}")
        raise typer.Exit(1)

    try:
        save_yaml_file(config_path, config_dict)
    except ConfigurationError as e:
        console.print(f"[red]Failed to save configuration: {e}[/red]")
        raise typer.Exit(1)

    console.print(f"[green]Set {key} = {parsed_value!r}[/green]")
    console.print(f"[dim]File: {config_path}[/dim]")


@app.command()
def validate() -> None:
    """Validate the config file and environment overrides."""
    try:
        load_config()
    except ConfigurationError as e:
        console.print(f"[red]Configuration is invalid: {e}[/red]")
        raise typer.Exit(1)

    console.print("[green]Configuration is valid.[/green]")
