"""CLI command modules."""

from promptduel.cli.commands import compare, config, prompt, settings, tools

__all__ = ["compare", "config", "prompt", "settings", "tools"]
