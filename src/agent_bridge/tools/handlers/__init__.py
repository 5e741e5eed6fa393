"""
Import side-effects for tool handlers.

Every module imported here should register itself with the tool registry using
the :func:`agent_bridge.tools.register_tool` decorator.
"""

from __future__ import annotations

# Import concrete tools so module-level decorators execute on import.
from . import airtable  # noqa: F401
