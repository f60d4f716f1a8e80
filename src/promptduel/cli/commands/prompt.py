"""
promptduel prompt - View and edit the two system prompts.

Usage:
    promptduel prompt show
    promptduel prompt show A
    promptduel prompt set B "You are ..."
    promptduel prompt set B --file prompt.txt
    promptduel prompt reset A
"""

from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.panel import Panel

from promptduel.settings import DEFAULT_SYSTEM_PROMPT, PromptSlot, SettingsProvider

app = typer.Typer(
    name="prompt",
    help="System prompts A and B.",
)

console = Console()


@app.command()
def show(
    slot: Annotated[
        PromptSlot | None,
        typer.Argument(help="Prompt to show (A or B). Shows both when omitted."),
    ] = None,
) -> None:
    """Show system prompts."""
    provider = SettingsProvider.default()
    slots = [slot] if slot else list(PromptSlot)

    for current in slots:
        prompt = provider.get_prompt(current)
        title = f"[cyan]Prompt {current.value}[/cyan]"
        if prompt == DEFAULT_SYSTEM_PROMPT:
            title += " [dim](default)[/dim]"
        console.print(Panel(prompt, title=title))


@app.command("set")
def set_prompt(
    slot: Annotated[
        PromptSlot,
        typer.Argument(help="Prompt to set (A or B)."),
    ],
    text: Annotated[
        str | None,
        typer.Argument(help="Prompt text."),
    ] = None,
    file: Annotated[
        Path | None,
        typer.Option(
            "--file",
            "-f",
            help="Read the prompt from a file.",
            exists=True,
            dir_okay=False,
        ),
    ] = None,
) -> None:
    """Save a system prompt."""
    if file is not None:
        text = file.read_text(encoding="utf-8")

    if not text or not text.strip():
        console.print("[red]Provide the prompt text or --file.[/red]")
        raise typer.Exit(1)

    SettingsProvider.default().save_prompt(slot, text)
    console.print(f"[green]Prompt {slot.value} saved ({len(text)} characters).[/green]")


@app.command()
def reset(
    slot: Annotated[
        PromptSlot,
        typer.Argument(help="Prompt to reset (A or B)."),
    ],
) -> None:
    """Restore the built-in system prompt."""
    SettingsProvider.default().reset_prompt(slot)
    console.print(f"[green]Prompt {slot.value} reset to the built-in prompt.[/green]")
