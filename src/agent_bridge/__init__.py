"""Agent-host integrations for Airtable, Claude and a local Chroma memory."""

__version__ = "0.1.0"
