"""
promptduel settings - View and update model settings.

Usage:
    promptduel settings show
    promptduel settings set api_key sk-...
    promptduel settings set temperature 0.3
    promptduel settings reset
"""

from typing import Annotated

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

from promptduel.settings import MODEL_SETTINGS_KEY, ModelSettings, SettingsProvider

app = typer.Typer(
    name="settings",
    help="Model settings (endpoint, API key, model, sampling).",
)

console = Console()


def _settable_keys() -> list[str]:
    keys = []
    for name, field in ModelSettings.model_fields.items():
        keys.append(name)
        if field.alias and field.alias != name:
            keys.append(field.alias)
    return keys


@app.command()
def show() -> None:
    """Show the current model settings."""
    settings = SettingsProvider.default().get_model_settings()

    table = Table(title="Model Settings")
    table.add_column("Key", style="cyan", no_wrap=True)
    table.add_column("Value")

    table.add_row("api_url", settings.api_url)
    table.add_row(
        "api_key",
        settings.masked_api_key() if settings.has_api_key else "[red]not set[/red]",
    )
    table.add_row("model_name", settings.model_name)
    table.add_row("temperature", str(settings.temperature))
    table.add_row("top_p", str(settings.top_p))

    console.print(table)


@app.command("set")
def set_value(
    key: Annotated[
        str,
        typer.Argument(help="Setting name (e.g., 'api_key', 'temperature')."),
    ],
    value: Annotated[
        str,
        typer.Argument(help="New value."),
    ],
) -> None:
    """Update one model setting."""
    if key not in _settable_keys():
        console.print(f"[red]Unknown setting: {key}[/red]")
        console.print(f"[dim]Available: {', '.join(ModelSettings.model_fields)}[/dim]")
        raise typer.Exit(1)

    try:
        SettingsProvider.default().update_model_settings(**{key: value})
    except ValidationError as e:
        console.print(f"[red]Invalid value for {key}:[/red] {e.errors()[0]['msg']}")
        raise typer.Exit(1)

    shown = "****" if key in ("api_key", "apiKey") else value
    console.print(f"[green]Set {key} = {shown}[/green]")


@app.command()
def reset(
    force: Annotated[
        bool,
        typer.Option(
            "--force",
            "-f",
            help="Skip confirmation.",
        ),
    ] = False,
) -> None:
    """Restore the default model settings (clears the API key)."""
    if not force and not typer.confirm("Reset model settings to defaults?"):
        raise typer.Exit(0)

    SettingsProvider.default().store.remove_item(MODEL_SETTINGS_KEY)
    console.print("[green]Model settings reset to defaults.[/green]")
