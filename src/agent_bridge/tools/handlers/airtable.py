"""Tools exposing :class:`~agent_bridge.airtable.AirtableService` to the host."""

from __future__ import annotations

import asyncio
import json
from typing import Any

from agent_bridge.airtable import AirtableService
from agent_bridge.config import airtable as airtable_cfg

from .. import Tool, ToolExecutionError, ToolResult, ToolSpec, register_tool

_BASE_ID = {"type": "string", "description": "ID of the base (starts with 'app')."}
_TABLE_ID = {"type": "string", "description": "ID or name of the table."}
_MAX_RECORDS = {
    "type": "integer",
    "description": f"Maximum number of records to return (defaults to {airtable_cfg.MAX_RECORDS}).",
    "minimum": 1,
}
_VIEW = {"type": "string", "description": "Optional view ID or name to read through."}
_TYPECAST = {
    "type": "boolean",
    "description": "Let Airtable convert string values to the field's type.",
    "default": False,
}


def _require(kwargs: dict[str, Any], key: str, kind: type, label: str) -> Any:
    value = kwargs.get(key)
    if value is None or value == "":
        raise ToolExecutionError(f"'{key}' is required")
    if not isinstance(value, kind):
        raise ToolExecutionError(f"'{key}' must be {label}")
    return value


def _optional(kwargs: dict[str, Any], key: str, kind: type, label: str) -> Any:
    value = kwargs.get(key)
    if value is None:
        return None
    if not isinstance(value, kind) or (kind is int and isinstance(value, bool)):
        raise ToolExecutionError(f"'{key}' must be {label}")
    return value


def _max_records(kwargs: dict[str, Any]) -> int:
    value = _optional(kwargs, "max_records", int, "an integer")
    if value is None:
        return airtable_cfg.MAX_RECORDS
    if value < 1:
        raise ToolExecutionError("'max_records' must be at least 1")
    return value


async def _call(func, *args: Any, **kwargs: Any) -> ToolResult:
    """Run a blocking service call off the event loop and render it as JSON."""

    result = await asyncio.to_thread(func, *args, **kwargs)
    return ToolResult(content=json.dumps(result, indent=2, ensure_ascii=False))


@register_tool(
    ToolSpec(
        name="list_bases",
        description="List all Airtable bases the API key can access, with their permission level.",
        parameters={"type": "object", "properties": {}},
    )
)
class ListBasesTool(Tool):
    async def run(self, *, service: AirtableService, **kwargs: Any) -> ToolResult:
        return await _call(service.list_bases)


@register_tool(
    ToolSpec(
        name="list_tables",
        description="List the tables in a base, including each table's fields and views.",
        parameters={
            "type": "object",
            "properties": {"base_id": _BASE_ID},
            "required": ["base_id"],
        },
    )
)
class ListTablesTool(Tool):
    async def run(self, *, service: AirtableService, **kwargs: Any) -> ToolResult:
        base_id = _require(kwargs, "base_id", str, "a string")
        return await _call(service.get_base_schema, base_id)


@register_tool(
    ToolSpec(
        name="describe_table",
        description="Describe one table: its fields, their types and its views.",
        parameters={
            "type": "object",
            "properties": {"base_id": _BASE_ID, "table_id": _TABLE_ID},
            "required": ["base_id", "table_id"],
        },
    )
)
class DescribeTableTool(Tool):
    async def run(self, *, service: AirtableService, **kwargs: Any) -> ToolResult:
        base_id = _require(kwargs, "base_id", str, "a string")
        table_id = _require(kwargs, "table_id", str, "a string")
        return await _call(service.describe_table, base_id, table_id)


@register_tool(
    ToolSpec(
        name="list_records",
        description="List records from a table, optionally filtered by an Airtable formula.",
        parameters={
            "type": "object",
            "properties": {
                "base_id": _BASE_ID,
                "table_id": _TABLE_ID,
                "max_records": _MAX_RECORDS,
                "view": _VIEW,
                "filter_by_formula": {
                    "type": "string",
                    "description": "Airtable formula; only records where it is truthy are returned.",
                },
                "fields": {
                    "type": "array",
                    "items": {"type": "string"},
                    "description": "Only return these fields.",
                },
            },
            "required": ["base_id", "table_id"],
        },
    )
)
class ListRecordsTool(Tool):
    async def run(self, *, service: AirtableService, **kwargs: Any) -> ToolResult:
        base_id = _require(kwargs, "base_id", str, "a string")
        table_id = _require(kwargs, "table_id", str, "a string")
        return await _call(
            service.list_records,
            base_id,
            table_id,
            max_records=_max_records(kwargs),
            view=_optional(kwargs, "view", str, "a string"),
            formula=_optional(kwargs, "filter_by_formula", str, "a string"),
            fields=_optional(kwargs, "fields", list, "a list of field names"),
        )


@register_tool(
    ToolSpec(
        name="search_records",
        description="Find records whose text fields contain a search term (case-insensitive).",
        parameters={
            "type": "object",
            "properties": {
                "base_id": _BASE_ID,
                "table_id": _TABLE_ID,
                "search_term": {"type": "string", "description": "Text to look for."},
                "field_ids": {
                    "type": "array",
                    "items": {"type": "string"},
                    "description": "Fields to search; defaults to every text field.",
                },
                "max_records": _MAX_RECORDS,
                "view": _VIEW,
            },
            "required": ["base_id", "table_id", "search_term"],
        },
    )
)
class SearchRecordsTool(Tool):
    async def run(self, *, service: AirtableService, **kwargs: Any) -> ToolResult:
        base_id = _require(kwargs, "base_id", str, "a string")
        table_id = _require(kwargs, "table_id", str, "a string")
        search_term = _require(kwargs, "search_term", str, "a string")
        return await _call(
            service.search_records,
            base_id,
            table_id,
            search_term,
            field_ids=_optional(kwargs, "field_ids", list, "a list of field ids"),
            max_records=_max_records(kwargs),
            view=_optional(kwargs, "view", str, "a string"),
        )


@register_tool(
    ToolSpec(
        name="get_record",
        description="Fetch a single record by its ID.",
        parameters={
            "type": "object",
            "properties": {
                "base_id": _BASE_ID,
                "table_id": _TABLE_ID,
                "record_id": {"type": "string", "description": "Record ID (starts with 'rec')."},
            },
            "required": ["base_id", "table_id", "record_id"],
        },
    )
)
class GetRecordTool(Tool):
    async def run(self, *, service: AirtableService, **kwargs: Any) -> ToolResult:
        base_id = _require(kwargs, "base_id", str, "a string")
        table_id = _require(kwargs, "table_id", str, "a string")
        record_id = _require(kwargs, "record_id", str, "a string")
        return await _call(service.get_record, base_id, table_id, record_id)


@register_tool(
    ToolSpec(
        name="create_record",
        description="Create one record in a table.",
        parameters={
            "type": "object",
            "properties": {
                "base_id": _BASE_ID,
                "table_id": _TABLE_ID,
                "fields": {"type": "object", "description": "Cell values keyed by field name or ID."},
                "typecast": _TYPECAST,
            },
            "required": ["base_id", "table_id", "fields"],
        },
    )
)
class CreateRecordTool(Tool):
    async def run(self, *, service: AirtableService, **kwargs: Any) -> ToolResult:
        base_id = _require(kwargs, "base_id", str, "a string")
        table_id = _require(kwargs, "table_id", str, "a string")
        fields = _require(kwargs, "fields", dict, "an object")
        typecast = bool(_optional(kwargs, "typecast", bool, "a boolean"))
        return await _call(service.create_record, base_id, table_id, fields, typecast=typecast)


@register_tool(
    ToolSpec(
        name="update_records",
        description="Update fields on up to many records; untouched fields keep their values.",
        parameters={
            "type": "object",
            "properties": {
                "base_id": _BASE_ID,
                "table_id": _TABLE_ID,
                "records": {
                    "type": "array",
                    "items": {
                        "type": "object",
                        "properties": {
                            "id": {"type": "string"},
                            "fields": {"type": "object"},
                        },
                        "required": ["id", "fields"],
                    },
                },
                "typecast": _TYPECAST,
            },
            "required": ["base_id", "table_id", "records"],
        },
    )
)
class UpdateRecordsTool(Tool):
    async def run(self, *, service: AirtableService, **kwargs: Any) -> ToolResult:
        base_id = _require(kwargs, "base_id", str, "a string")
        table_id = _require(kwargs, "table_id", str, "a string")
        records = _require(kwargs, "records", list, "a list of {id, fields} objects")
        for record in records:
            if not isinstance(record, dict) or "id" not in record or not isinstance(record.get("fields"), dict):
                raise ToolExecutionError("each record must be an object with 'id' and 'fields'")
        typecast = bool(_optional(kwargs, "typecast", bool, "a boolean"))
        return await _call(service.update_records, base_id, table_id, records, typecast=typecast)


@register_tool(
    ToolSpec(
        name="delete_records",
        description="Delete records by ID.",
        parameters={
            "type": "object",
            "properties": {
                "base_id": _BASE_ID,
                "table_id": _TABLE_ID,
                "record_ids": {"type": "array", "items": {"type": "string"}},
            },
            "required": ["base_id", "table_id", "record_ids"],
        },
    )
)
class DeleteRecordsTool(Tool):
    async def run(self, *, service: AirtableService, **kwargs: Any) -> ToolResult:
        base_id = _require(kwargs, "base_id", str, "a string")
        table_id = _require(kwargs, "table_id", str, "a string")
        record_ids = _require(kwargs, "record_ids", list, "a list of record ids")
        return await _call(service.delete_records, base_id, table_id, record_ids)


@register_tool(
    ToolSpec(
        name="create_table",
        description="Create a table in a base. The first field becomes the primary field.",
        parameters={
            "type": "object",
            "properties": {
                "base_id": _BASE_ID,
                "name": {"type": "string"},
                "description": {"type": "string"},
                "fields": {
                    "type": "array",
                    "items": {"type": "object"},
                    "description": "Field definitions: {name, type, description?, options?}.",
                },
            },
            "required": ["base_id", "name", "fields"],
        },
    )
)
class CreateTableTool(Tool):
    async def run(self, *, service: AirtableService, **kwargs: Any) -> ToolResult:
        base_id = _require(kwargs, "base_id", str, "a string")
        name = _require(kwargs, "name", str, "a string")
        fields = _require(kwargs, "fields", list, "a list of field definitions")
        description = _optional(kwargs, "description", str, "a string")
        return await _call(service.create_table, base_id, name, fields, description=description)


@register_tool(
    ToolSpec(
        name="create_field",
        description="Add a field to an existing table.",
        parameters={
            "type": "object",
            "properties": {
                "base_id": _BASE_ID,
                "table_id": _TABLE_ID,
                "name": {"type": "string"},
                "type": {"type": "string", "description": "Airtable field type, e.g. singleLineText."},
                "description": {"type": "string"},
                "options": {"type": "object", "description": "Type-specific field options."},
            },
            "required": ["base_id", "table_id", "name", "type"],
        },
    )
)
class CreateFieldTool(Tool):
    async def run(self, *, service: AirtableService, **kwargs: Any) -> ToolResult:
        base_id = _require(kwargs, "base_id", str, "a string")
        table_id = _require(kwargs, "table_id", str, "a string")
        name = _require(kwargs, "name", str, "a string")
        field_type = _require(kwargs, "type", str, "a string")
        return await _call(
            service.create_field,
            base_id,
            table_id,
            name,
            field_type,
            description=_optional(kwargs, "description", str, "a string"),
            options=_optional(kwargs, "options", dict, "an object"),
        )
