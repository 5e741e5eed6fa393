"""Helpers for interacting with the Anthropic Messages API"""
from __future__ import annotations

from anthropic import AsyncAnthropic

from agent_bridge.config import claude

import logging
logger = logging.getLogger(__name__)

# One process-wide async client, built on first use
_client: AsyncAnthropic | None = None


def get_client() -> AsyncAnthropic:
    """Return the shared Anthropic client, creating it from config if needed."""
    global _client
    if _client is None:
        if not claude.API_KEY:
            logger.warning("CLAUDE_API_KEY is not set; requests will be rejected upstream")
        # Failures propagate as-is, so the SDK's own retry loop is disabled.
        _client = AsyncAnthropic(
            api_key=claude.API_KEY,
            base_url=claude.BASE_URL,
            max_retries=0,
        )
    return _client


def reset_client() -> None:
    """Drop the shared client so the next call rebuilds it from config."""
    global _client
    _client = None


async def ask_claude(prompt: str) -> str:
    """
    Send ``prompt`` as a single user message and return the reply text.

    Only the first content block of the reply is returned. Network and API
    errors are raised unchanged by the SDK.
    """
    resp = await get_client().messages.create(
        model=claude.MODEL_ID,
        max_tokens=claude.MAX_TOKENS,
        messages=[{"role": "user", "content": prompt}],
    )
    return resp.content[0].text
