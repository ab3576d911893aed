"""Pytest configuration and fixtures."""

import itertools
import uuid

import pytest
from fastapi.testclient import TestClient

from core.errors import StoreError
from main import create_app


class MemoryRecordStore:
    """In-process RecordStore used in place of PostgreSQL."""

    def __init__(self, available: bool = True):
        self.available = available
        self.opened_with: list[str] = []
        self.collections: dict[str, dict[str, dict]] = {}
        self._order = itertools.count()

    @property
    def is_available(self) -> bool:
        return self.available

    async def open(self, collections):
        self.opened_with = list(collections)
        for name in self.opened_with:
            self.collections.setdefault(name, {})

    async def close(self):
        return None

    def _check(self, record_id=None):
        if not self.available:
            raise StoreError("Store is not connected.")
        if record_id is not None:
            try:
                uuid.UUID(record_id)
            except ValueError as exc:
                raise StoreError(f"invalid input for query argument $1: {record_id!r}") from exc

    def _table(self, collection):
        return self.collections.setdefault(collection, {})

    async def insert(self, collection, document):
        self._check()
        record_id = str(uuid.uuid4())
        self._table(collection)[record_id] = {"seq": next(self._order), "data": dict(document)}
        return {**document, "id": record_id}

    async def find_all(self, collection):
        self._check()
        rows = sorted(self._table(collection).items(), key=lambda item: item[1]["seq"])
        return [{**row["data"], "id": record_id} for record_id, row in rows]

    async def find_by_id(self, collection, record_id):
        self._check(record_id)
        row = self._table(collection).get(record_id)
        return {**row["data"], "id": record_id} if row else None

    async def update_by_id(self, collection, record_id, changes):
        self._check(record_id)
        row = self._table(collection).get(record_id)
        if row is None:
            return None
        row["data"].update(changes)
        return {**row["data"], "id": record_id}

    async def delete_by_id(self, collection, record_id):
        self._check(record_id)
        return self._table(collection).pop(record_id, None) is not None


@pytest.fixture
def store():
    return MemoryRecordStore()


@pytest.fixture
def app(store):
    return create_app(store=store)


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def api_key(monkeypatch):
    monkeypatch.setenv("API_KEY", "s3cr3t")
    return "s3cr3t"
