"""Tool execution helpers."""

from __future__ import annotations

import json
from typing import Any

from agent_bridge.airtable import AirtableService

from . import ToolExecutionError, ToolResult, get_tool_entry


async def execute_tool(
    name: str,
    arguments: str | dict[str, Any] | None,
    *,
    service: AirtableService,
) -> ToolResult:
    """
    Execute the registered tool ``name`` with ``arguments``.

    ``arguments`` may be a JSON string or an already parsed mapping. Argument
    problems surface as :class:`ToolExecutionError`; anything raised by the
    Airtable client propagates unchanged.
    """

    entry = get_tool_entry(name)
    if entry is None:
        raise ToolExecutionError(f"Unknown tool '{name}'")

    if arguments is None:
        parsed_args: dict[str, Any] = {}
    elif isinstance(arguments, str):
        try:
            parsed_args = json.loads(arguments) if arguments.strip() else {}
        except json.JSONDecodeError as exc:
            raise ToolExecutionError(f"Invalid JSON arguments for tool '{name}': {exc}") from exc
    else:
        parsed_args = dict(arguments)

    if not isinstance(parsed_args, dict):
        raise ToolExecutionError(f"Arguments for tool '{name}' must be an object")

    if "service" in parsed_args:
        raise ToolExecutionError(f"'service' is not a valid argument for tool '{name}'")

    tool = entry()
    try:
        return await tool.run(service=service, **parsed_args)
    except TypeError as exc:
        raise ToolExecutionError(str(exc)) from exc
