"""Fake pyairtable objects and fixtures shared by the Airtable tests."""

from types import SimpleNamespace

import pytest

from agent_bridge.airtable import AirtableService


class FakeModel:
    def __init__(self, data):
        self.data = data
        for key, value in data.items():
            setattr(self, key, value)

    def model_dump(self, **kwargs):
        return {key: _plain(value) for key, value in self.data.items()}


def _plain(value):
    if isinstance(value, FakeModel):
        return value.model_dump()
    if isinstance(value, list):
        return [_plain(v) for v in value]
    return value


def field(fid, name, ftype):
    return FakeModel({"id": fid, "name": name, "type": ftype})


class FakeTable:
    def __init__(self, base_id, table_id, fields=None):
        self.base_id = base_id
        self.table_id = table_id
        self.fields = fields or [
            field("fld1", "Name", "singleLineText"),
            field("fld2", "Notes", "multilineText"),
            field("fld3", "Count", "number"),
        ]
        self.calls = []

    def schema(self):
        return FakeModel({"id": self.table_id, "name": "Tasks", "fields": self.fields})

    def all(self, **options):
        self.calls.append(("all", options))
        return [{"id": "rec1", "createdTime": "2024-01-01T00:00:00.000Z", "fields": {"Name": "Ship"}}]

    def get(self, record_id):
        self.calls.append(("get", record_id))
        return {"id": record_id, "fields": {"Name": "Ship"}}

    def create(self, fields, typecast=False):
        self.calls.append(("create", fields, typecast))
        return {"id": "recNew", "fields": fields}

    def batch_update(self, records, typecast=False):
        self.calls.append(("batch_update", records, typecast))
        return [{"id": r["id"], "fields": r["fields"]} for r in records]

    def batch_delete(self, record_ids):
        self.calls.append(("batch_delete", record_ids))
        return [{"id": rid, "deleted": True} for rid in record_ids]

    def create_field(self, name, field_type, description=None, options=None):
        self.calls.append(("create_field", name, field_type, description, options))
        return FakeModel({"id": "fldNew", "name": name, "type": field_type})


class FakeBase:
    def __init__(self, api, base_id):
        self.api = api
        self.base_id = base_id

    def schema(self):
        return SimpleNamespace(tables=[self.api.table(self.base_id, "tbl1").schema()])

    def create_table(self, name, fields, description=None):
        self.api.created_tables.append((self.base_id, name, fields, description))
        return FakeTable(self.base_id, "tblNew")


class FakeApi:
    def __init__(self):
        self.tables = {}
        self.created_tables = []

    def bases(self):
        return [SimpleNamespace(id="app1", name="Projects", permission_level="create")]

    def base(self, base_id):
        return FakeBase(self, base_id)

    def table(self, base_id, table_id):
        key = (base_id, table_id)
        if key not in self.tables:
            self.tables[key] = FakeTable(base_id, table_id)
        return self.tables[key]


@pytest.fixture
def fake_api():
    return FakeApi()


@pytest.fixture
def service(fake_api):
    svc = AirtableService("test-key")
    svc._api = fake_api
    return svc
