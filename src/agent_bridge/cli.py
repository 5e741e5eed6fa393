"""Process entry point: serve Airtable tools to the agent host over stdio."""

from __future__ import annotations

import argparse
import asyncio
import logging
from typing import Sequence

from mcp.server.stdio import stdio_server

from agent_bridge.airtable import AirtableService
from agent_bridge.airtable.server import AirtableMCPServer
from agent_bridge.config import airtable as airtable_cfg

logger = logging.getLogger(__name__)

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="agent-bridge-airtable",
        description="Expose an Airtable account to an agent host as MCP tools over stdio.",
    )
    parser.add_argument(
        "api_key",
        nargs="?",
        default=None,
        help="Airtable API key (deprecated; set AIRTABLE_API_KEY instead).",
    )
    parser.add_argument(
        "--log-traffic",
        action="store_true",
        default=None,
        help="Log every message exchanged with the host to stderr (implies --log-level DEBUG).",
    )
    parser.add_argument(
        "--log-level",
        choices=_LOG_LEVELS,
        default=None,
        help="Root log level (default INFO).",
    )
    return parser


def resolve_api_key(cli_key: str | None) -> str | None:
    """Pick the credential: deprecated CLI argument first, then config/env."""

    if cli_key:
        logger.warning(
            "Passing the API key as a command-line argument is deprecated; "
            "set AIRTABLE_API_KEY instead."
        )
        return cli_key
    if airtable_cfg.API_KEY:
        return airtable_cfg.API_KEY
    logger.warning("No Airtable API key configured; tool calls will fail until AIRTABLE_API_KEY is set.")
    return None


async def serve(api_key: str | None, *, log_traffic: bool = False) -> None:
    """Build the service and server, then run one stdio session to completion."""

    service = AirtableService(api_key)
    server = AirtableMCPServer(service)
    async with stdio_server() as (read_stream, write_stream):
        logger.info("Serving %s over stdio", server.server.name)
        await server.connect(read_stream, write_stream, log_traffic=log_traffic)
    logger.info("Host closed the connection; shutting down")


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    log_traffic = airtable_cfg.LOG_TRAFFIC if args.log_traffic is None else args.log_traffic
    level = args.log_level or ("DEBUG" if log_traffic else None)
    if level:
        logging.getLogger().setLevel(level)

    try:
        api_key = resolve_api_key(args.api_key)
        asyncio.run(serve(api_key, log_traffic=log_traffic))
    except KeyboardInterrupt:
        logger.info("Interrupted")
        return 130
    except Exception:
        logger.exception("Airtable MCP server failed")
        return 1
    return 0
