"""
promptduel - System prompt comparison harness

Sends one message to a chat model under two system prompts in parallel,
runs the tool-calling loop for each, and reports the answers side by side
with request and tool-call telemetry.
"""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("promptduel")
except PackageNotFoundError:
    __version__ = "0.3.0"

__all__ = [
    "__version__",
]
