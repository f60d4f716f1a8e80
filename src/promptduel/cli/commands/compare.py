"""
promptduel compare - Send one message to both system prompts.

Usage:
    promptduel compare "张三"
    promptduel compare "张三" --no-events
    promptduel compare "张三" --json
"""

import asyncio
import json
from typing import Annotated

import typer
from rich.console import Console
from rich.columns import Columns
from rich.markdown import Markdown
from rich.panel import Panel

from promptduel.agent import ComparisonSession, ConversationOrchestrator
from promptduel.cli.output import print_event_feed, print_stats
from promptduel.config import Config, ConfigurationError, get_config
from promptduel.events import StatusEventBus
from promptduel.providers import (
    AuthenticationError,
    CompletionClient,
    MissingCredentialError,
    ProviderError,
)
from promptduel.settings import PromptSlot, SettingsProvider
from promptduel.tools import ExecutionContext, ToolRegistry
from promptduel.tools.builtin import register_builtin_tools

console = Console()


def build_session(
    config: Config,
    provider: SettingsProvider,
    bus: StatusEventBus,
) -> ComparisonSession:
    """
    Wire up a comparison session from configuration.

    Args:
        config: Loaded configuration.
        provider: Settings provider holding model settings and prompts.
        bus: Event bus receiving telemetry.

    Returns:
        ComparisonSession reading both prompts from the provider.
    """
    registry = ToolRegistry()
    register_builtin_tools(registry)

    orchestrator = ConversationOrchestrator(
        client=CompletionClient(timeout=config.orchestrator.request_timeout),
        registry=registry,
        bus=bus,
        settings_provider=provider,
        context=ExecutionContext.with_builtin_resources(),
        config=config.orchestrator,
    )
    return ComparisonSession(orchestrator)


def compare(
    message: Annotated[
        str,
        typer.Argument(help="Message sent to both prompts."),
    ],
    show_events: Annotated[
        bool,
        typer.Option(
            "--events/--no-events",
            help="Show the status event feed after the answers.",
        ),
    ] = True,
    json_output: Annotated[
        bool,
        typer.Option(
            "--json",
            help="Output results as JSON.",
        ),
    ] = False,
) -> None:
    """Run both system prompts on MESSAGE in parallel."""
    if not message.strip():
        console.print("[red]Message is empty.[/red]")
        raise typer.Exit(1)

    try:
        config = get_config()
    except ConfigurationError as e:
        console.print(f"[red]Configuration error: {e}[/red]")
        raise typer.Exit(1)

    provider = SettingsProvider.default()
    if not provider.is_api_configured():
        console.print(f"[red]{MissingCredentialError()}[/red]")
        console.print("[dim]  - promptduel settings set api_key <key>[/dim]")
        raise typer.Exit(2)

    bus = StatusEventBus(max_events=config.events.max_events)
    session = build_session(config, provider, bus)

    try:
        results = asyncio.run(session.send(message))

    except AuthenticationError as e:
        console.print(f"[red]Authentication failed: {e}[/red]")
        raise typer.Exit(3)

    except ProviderError as e:
        console.print(f"[red]Request failed: {e}[/red]")
        if show_events:
            print_event_feed(bus.get_recent_events())
        raise typer.Exit(4)

    if json_output:
        payload = {
            slot.value: {
                "content": result.content,
                "iterations": result.iterations,
                "stopped_reason": result.stopped_reason.value,
                "tool_calls": [call.name for call in result.tool_calls],
                "duration_ms": round(result.duration_ms, 1),
            }
            for slot, result in results.items()
        }
        console.print_json(json.dumps(payload, ensure_ascii=False))
        return

    panels = []
    for slot in PromptSlot:
        result = results[slot]
        body = Markdown(result.content) if result.content else "[dim](no answer)[/dim]"
        subtitle = f"{result.iterations} iteration(s), {len(result.tool_calls)} tool call(s)"
        if result.hit_iteration_cap:
            subtitle += ", iteration cap reached"
        panels.append(
            Panel(body, title=f"[cyan]Prompt {slot.value}[/cyan]", subtitle=f"[dim]{subtitle}[/dim]")
        )
    console.print(Columns(panels, equal=True, expand=True))

    if show_events:
        print_event_feed(bus.get_recent_events())
        print_stats(bus.get_stats())
