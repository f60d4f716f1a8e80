"""Execution context handed to tool executors."""

import logging
from typing import Any, Mapping, Optional

logger = logging.getLogger(__name__)


class UnknownResourceError(KeyError):
    """Raised when a tool asks for a resource the context does not hold."""

    def __init__(self, key: str):
        super().__init__(key)
        self.key = key

    def __str__(self) -> str:
        return f"Unknown resource: {self.key}"


class ExecutionContext:
    """Capability-scoped resource locator.

    Executors look up their data through the context instead of importing
    module state, so tests can hand them fake resources.
    """

    def __init__(self, resources: Optional[Mapping[str, Any]] = None):
        """Initialize the context.

        Args:
            resources: Mapping of resource key to resource value
        """
        self._resources: dict[str, Any] = dict(resources or {})

    @classmethod
    def with_builtin_resources(cls) -> "ExecutionContext":
        """Create a context holding the packaged data resources."""
        from promptduel.tools.builtin.characters import CHARACTERS_RESOURCE, load_characters

        return cls({CHARACTERS_RESOURCE: load_characters()})

    def get_resource(self, key: str) -> Any:
        """Get a resource by key.

        Args:
            key: Resource key

        Returns:
            The resource value

        Raises:
            UnknownResourceError: If no resource is registered under ``key``
        """
        if key not in self._resources:
            raise UnknownResourceError(key)
        return self._resources[key]

    def has_resource(self, key: str) -> bool:
        """Check whether a resource is available."""
        return key in self._resources

    def __repr__(self) -> str:
        """Representation."""
        keys = ", ".join(self._resources)
        return f"<ExecutionContext resources=[{keys}]>"
