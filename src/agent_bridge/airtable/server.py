"""MCP server exposing the registered Airtable tools to an agent host."""

from __future__ import annotations

import logging
from typing import Any

from mcp import types
from mcp.server.lowlevel import Server

from agent_bridge.config import airtable as airtable_cfg
from agent_bridge.tools import get_registered_tool_specs
from agent_bridge.tools.executor import execute_tool

from .service import AirtableService
from .traffic import traffic_logged

logger = logging.getLogger(__name__)


class AirtableMCPServer:
    """Bind an :class:`AirtableService` to an MCP ``Server``."""

    def __init__(self, service: AirtableService, name: str | None = None) -> None:
        self.service = service
        self.server = Server(name or airtable_cfg.SERVER_NAME)
        self.server.list_tools()(self.list_tools)
        self.server.call_tool()(self.call_tool)

    async def list_tools(self) -> list[types.Tool]:
        return [spec.to_mcp() for spec in get_registered_tool_specs()]

    async def call_tool(self, name: str, arguments: dict[str, Any] | None) -> list[types.TextContent]:
        """Run tool ``name``; exceptions are reported to the host by the SDK."""

        logger.info("Tool call: %s", name)
        result = await execute_tool(name, arguments, service=self.service)
        return [types.TextContent(type="text", text=result.content)]

    async def connect(self, read_stream, write_stream, *, log_traffic: bool = False) -> None:
        """Serve one session over the given streams until the host closes input."""

        if log_traffic:
            async with traffic_logged(read_stream, write_stream) as (read, write):
                await self._run(read, write)
        else:
            await self._run(read_stream, write_stream)

    async def _run(self, read_stream, write_stream) -> None:
        await self.server.run(
            read_stream,
            write_stream,
            self.server.create_initialization_options(),
        )
