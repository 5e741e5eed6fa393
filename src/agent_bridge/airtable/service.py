"""
Thin synchronous wrapper around :mod:`pyairtable`.

Each method performs one Airtable API call and returns plain,
JSON-serialisable data so the tool layer can hand it straight to the host.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List

from pyairtable import Api
from pyairtable.formulas import field_name, quoted

logger = logging.getLogger(__name__)

# Field types whose cell values are plain text and can be matched with FIND().
SEARCHABLE_FIELD_TYPES = frozenset(
    {
        "singleLineText",
        "multilineText",
        "richText",
        "email",
        "url",
        "phoneNumber",
    }
)


class AirtableServiceError(RuntimeError):
    """Raised when the service cannot issue a request at all."""

    pass


def _dump(model: Any) -> Dict[str, Any]:
    """Serialise a pyairtable schema model to a JSON-friendly dict."""

    return model.model_dump(mode="json", by_alias=True, exclude_none=True)


def build_search_formula(search_term: str, field_names: Iterable[str]) -> str:
    """Return a case-insensitive ``OR(FIND(...))`` formula over ``field_names``."""

    needle = f"LOWER({quoted(search_term)})"
    clauses = [f"FIND({needle}, LOWER({field_name(name)} & ''))" for name in field_names]
    if not clauses:
        raise AirtableServiceError("No fields to search")
    return "OR(" + ", ".join(clauses) + ")"


class AirtableService:
    """Pass-through client for the Airtable Web API."""

    def __init__(self, api_key: str | None = None) -> None:
        self._api: Api | None = Api(api_key) if api_key else None

    @property
    def api(self) -> Api:
        if self._api is None:
            raise AirtableServiceError(
                "No Airtable API key configured; set AIRTABLE_API_KEY and restart the server"
            )
        return self._api

    # -------------------------------------------------------------- schema

    def list_bases(self) -> List[Dict[str, Any]]:
        return [
            {
                "id": base.id,
                "name": base.name,
                "permissionLevel": base.permission_level,
            }
            for base in self.api.bases()
        ]

    def get_base_schema(self, base_id: str) -> Dict[str, Any]:
        schema = self.api.base(base_id).schema()
        return {"tables": [_dump(table) for table in schema.tables]}

    def describe_table(self, base_id: str, table_id: str) -> Dict[str, Any]:
        return _dump(self.api.table(base_id, table_id).schema())

    def create_table(
        self,
        base_id: str,
        name: str,
        fields: List[Dict[str, Any]],
        description: str | None = None,
    ) -> Dict[str, Any]:
        table = self.api.base(base_id).create_table(name, fields, description=description)
        logger.info("Created table %s in base %s", name, base_id)
        return _dump(table.schema())

    def create_field(
        self,
        base_id: str,
        table_id: str,
        name: str,
        field_type: str,
        description: str | None = None,
        options: Dict[str, Any] | None = None,
    ) -> Dict[str, Any]:
        field = self.api.table(base_id, table_id).create_field(
            name, field_type, description=description, options=options
        )
        logger.info("Created field %s on %s/%s", name, base_id, table_id)
        return _dump(field)

    # ------------------------------------------------------------- records

    def list_records(
        self,
        base_id: str,
        table_id: str,
        max_records: int | None = None,
        view: str | None = None,
        formula: str | None = None,
        fields: List[str] | None = None,
    ) -> List[Dict[str, Any]]:
        options: Dict[str, Any] = {}
        if max_records is not None:
            options["max_records"] = max_records
        if view:
            options["view"] = view
        if formula:
            options["formula"] = formula
        if fields:
            options["fields"] = fields
        return self.api.table(base_id, table_id).all(**options)

    def search_records(
        self,
        base_id: str,
        table_id: str,
        search_term: str,
        field_ids: List[str] | None = None,
        max_records: int | None = None,
        view: str | None = None,
    ) -> List[Dict[str, Any]]:
        """Return records where any of the chosen fields contains ``search_term``.

        ``field_ids`` may hold field ids or names. When omitted every text-like
        field of the table is searched.
        """

        table = self.api.table(base_id, table_id)
        schema_fields = table.schema().fields
        if field_ids:
            by_id = {f.id: f.name for f in schema_fields}
            names = [by_id.get(fid, fid) for fid in field_ids]
        else:
            names = [f.name for f in schema_fields if f.type in SEARCHABLE_FIELD_TYPES]
        if not names:
            raise AirtableServiceError(
                f"Table {table_id} has no text fields to search; pass field_ids explicitly"
            )

        formula = build_search_formula(search_term, names)
        logger.debug("Searching %s/%s with %s", base_id, table_id, formula)
        return self.list_records(
            base_id, table_id, max_records=max_records, view=view, formula=formula
        )

    def get_record(self, base_id: str, table_id: str, record_id: str) -> Dict[str, Any]:
        return self.api.table(base_id, table_id).get(record_id)

    def create_record(
        self,
        base_id: str,
        table_id: str,
        fields: Dict[str, Any],
        typecast: bool = False,
    ) -> Dict[str, Any]:
        return self.api.table(base_id, table_id).create(fields, typecast=typecast)

    def update_records(
        self,
        base_id: str,
        table_id: str,
        records: List[Dict[str, Any]],
        typecast: bool = False,
    ) -> List[Dict[str, Any]]:
        return self.api.table(base_id, table_id).batch_update(records, typecast=typecast)

    def delete_records(self, base_id: str, table_id: str, record_ids: List[str]) -> List[Dict[str, Any]]:
        return self.api.table(base_id, table_id).batch_delete(record_ids)
