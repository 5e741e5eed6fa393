"""
Auto-discovery & registry for MCP tool handlers.

Any module inside ``tools/handlers`` that defines::

    from agent_bridge.tools import register_tool, Tool, ToolSpec

    @register_tool(ToolSpec(...))
    class MyTool(Tool):
        async def run(self, *, service, **kwargs): ...

is picked up automatically at import-time. The MCP server uses this registry
to advertise tools to the host and execute tool calls on demand.

Adding a new tool:

1. Create or extend a handler module under ``tools/handlers`` and register the
   class with :func:`register_tool`.
2. Return JSON text the agent can read back (update tests in ``tests/agent_bridge/tools``).
"""

from __future__ import annotations

from dataclasses import dataclass
from importlib import import_module
from pathlib import Path
from pkgutil import iter_modules
from typing import Any, Dict, List, Type

from mcp import types

from agent_bridge.airtable import AirtableService

__all__ = [
    "Tool",
    "ToolResult",
    "ToolSpec",
    "ToolExecutionError",
    "get_registered_tool_specs",
    "get_tool_entry",
    "register_tool",
]


@dataclass(slots=True)
class ToolSpec:
    """Static description of a tool exposed to the host."""

    name: str
    description: str
    parameters: Dict[str, Any]

    def to_mcp(self) -> types.Tool:
        """Return this spec as an MCP tool definition."""

        return types.Tool(
            name=self.name,
            description=self.description,
            inputSchema=self.parameters,
        )


@dataclass(slots=True)
class ToolResult:
    """Normalized tool output returned to the host."""

    content: str


class ToolExecutionError(RuntimeError):
    """Raised when a tool call cannot be carried out as requested."""

    pass


class Tool:
    """Base class for concrete tool handlers."""

    spec: ToolSpec

    async def run(self, *, service: AirtableService, **kwargs: Any) -> ToolResult:
        """Execute the tool and return a :class:`ToolResult`."""

        raise NotImplementedError


_registry: dict[str, Type[Tool]] = {}
_HANDLERS_IMPORTED = False


def register_tool(spec: ToolSpec):
    """Class decorator that binds ``spec`` to the decorated :class:`Tool`."""

    def decorator(cls: Type[Tool]) -> Type[Tool]:
        if not issubclass(cls, Tool):
            raise TypeError("register_tool expects a Tool subclass")
        if spec.name in _registry:
            raise ValueError(f"Tool with name '{spec.name}' already registered")
        cls.spec = spec
        _registry[spec.name] = cls
        return cls

    return decorator


def get_registered_tool_specs() -> List[ToolSpec]:
    """Return all registered specs in registration order."""

    return [entry.spec for entry in _registry.values()]


def get_tool_entry(name: str) -> Type[Tool] | None:
    """Return the registered :class:`Tool` subclass for ``name``."""

    return _registry.get(name)


def _import_handlers() -> None:
    """Import every handler module exactly once."""

    global _HANDLERS_IMPORTED
    if _HANDLERS_IMPORTED:
        return

    pkg_path = Path(__file__).resolve().parent / "handlers"
    for _, modname, _ in iter_modules([str(pkg_path)]):
        if modname.startswith("_"):
            continue
        import_module(f"{__name__}.handlers.{modname}")

    _HANDLERS_IMPORTED = True


_import_handlers()
