"""
promptduel tools - Inspect the tools offered to the model.

Usage:
    promptduel tools list
    promptduel tools info get_character_info
    promptduel tools test get_character_info --params '{"name": "张三"}'
"""

import asyncio
import json
from typing import Annotated

import typer
from rich.console import Console
from rich.table import Table

from promptduel.tools import ExecutionContext, ToolRegistry
from promptduel.tools.builtin import register_builtin_tools

app = typer.Typer(
    name="tools",
    help="Inspect and test tools.",
)

console = Console()


def _build_registry() -> ToolRegistry:
    registry = ToolRegistry()
    register_builtin_tools(registry)
    return registry


@app.command("list")
def list_tools() -> None:
    """List all registered tools."""
    registry = _build_registry()
    tools = registry.get_all()

    if not tools:
        console.print("[yellow]No tools registered.[/yellow]")
        return

    table = Table(title="Available Tools")
    table.add_column("Name", style="cyan", no_wrap=True)
    table.add_column("Category", style="magenta")
    table.add_column("Version")
    table.add_column("Description")

    for tool in tools:
        desc = tool.metadata.description
        desc = desc[:80] + "..." if len(desc) > 80 else desc
        table.add_row(tool.name, tool.metadata.category, tool.metadata.version, desc)

    console.print(table)
    console.print(f"\n[dim]Total: {len(tools)} tool(s)[/dim]")


@app.command("info")
def tool_info(
    tool_name: Annotated[
        str,
        typer.Argument(help="Tool name to get info about"),
    ],
) -> None:
    """Show the definition advertised to the model."""
    registry = _build_registry()
    tool = registry.get(tool_name)

    if not tool:
        console.print(f"[red]Error:[/red] Tool not found: {tool_name}")
        console.print(f"\n[dim]Available tools: {', '.join(registry.list_tool_names())}[/dim]")
        raise typer.Exit(1)

    console.print(f"\n[bold cyan]{tool.name}[/bold cyan]")
    console.print(f"\n[bold]Description:[/bold]\n{tool.definition.description}")

    console.print("\n[bold]Parameters:[/bold]")
    for name, param in tool.definition.parameters.items():
        required = "[red]*[/red]" if name in tool.definition.required else ""
        console.print(f"  • {name}{required}: {param.type}")
        console.print(f"    {param.description}")

    console.print("\n[bold]Definition:[/bold]")
    console.print_json(json.dumps(tool.get_tool_definition(), ensure_ascii=False))


@app.command("test")
def test_tool(
    tool_name: Annotated[
        str,
        typer.Argument(help="Tool name to test"),
    ],
    params: Annotated[
        str,
        typer.Option(
            "--params",
            "-p",
            help="Tool arguments as JSON",
        ),
    ] = "{}",
) -> None:
    """Run a tool directly against the built-in resources."""
    registry = _build_registry()
    tool = registry.get(tool_name)

    if not tool:
        console.print(f"[red]Error:[/red] Tool not found: {tool_name}")
        raise typer.Exit(1)

    try:
        arguments = json.loads(params)
    except json.JSONDecodeError as e:
        console.print(f"[red]Error:[/red] Invalid JSON parameters: {e}")
        raise typer.Exit(1)

    if not isinstance(arguments, dict):
        console.print("[red]Error:[/red] Parameters must be a JSON object")
        raise typer.Exit(1)

    context = ExecutionContext.with_builtin_resources()
    result = asyncio.run(tool.executor.execute(arguments, context))

    console.print_json(result.to_content())
    if not result.success:
        raise typer.Exit(1)
