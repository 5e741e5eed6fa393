"""Airtable integration served to the agent host over MCP."""

from .service import AirtableService, AirtableServiceError

__all__ = ["AirtableService", "AirtableServiceError"]
