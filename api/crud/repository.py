"""
Record persistence.

`RecordStore` is the boundary the CRUD service talks to. Documents are plain
dicts of field values; the store assigns the `id` and returns records as
`{"id": "<uuid>", **document}`.

`PostgresRecordStore` keeps one table per collection:

    id          uuid primary key (gen_random_uuid())
    data        jsonb            (the document)
    created_at  timestamptz
    updated_at  timestamptz

Every driver fault, including an identifier that is not a valid UUID and a
pool that never connected, surfaces as `StoreError`.
"""

from __future__ import annotations

import asyncio
import json
import logging
from contextlib import contextmanager
from typing import Any, Iterable, Iterator, Protocol

import asyncpg

from core import db
from core.errors import StoreError

logger = logging.getLogger(__name__)

_DRIVER_ERRORS = (
    asyncpg.PostgresError,
    asyncpg.InterfaceError,
    db.DatabaseUnavailableError,
    OSError,
    asyncio.TimeoutError,
)


class RecordStore(Protocol):
    @property
    def is_available(self) -> bool: ...

    async def open(self, collections: Iterable[str]) -> None: ...

    async def close(self) -> None: ...

    async def insert(self, collection: str, document: dict[str, Any]) -> dict[str, Any]: ...

    async def find_all(self, collection: str) -> list[dict[str, Any]]: ...

    async def find_by_id(self, collection: str, record_id: str) -> dict[str, Any] | None: ...

    async def update_by_id(
        self, collection: str, record_id: str, changes: dict[str, Any]
    ) -> dict[str, Any] | None: ...

    async def delete_by_id(self, collection: str, record_id: str) -> bool: ...


def _json_arg(value: dict[str, Any]) -> str:
    """
    asyncpg does not automatically encode Python dicts for json/jsonb parameters.
    We pass JSON as a string and cast to jsonb in SQL.
    """
    return json.dumps(value, ensure_ascii=True)


def _row_to_record(row: dict[str, Any]) -> dict[str, Any]:
    data = row.get("data")
    if isinstance(data, str):
        data = json.loads(data)
    if not isinstance(data, dict):
        data = {}
    return {**data, "id": str(row["id"])}


def _table(collection: str) -> str:
    # Collection names are validated identifiers (see ResourceSchema).
    return f'"{collection}"'


@contextmanager
def _store_errors(operation: str, collection: str, record_id: str | None = None) -> Iterator[None]:
    try:
        yield
    except _DRIVER_ERRORS as exc:
        logger.warning(
            "store_error operation=%s collection=%s id=%s error=%s",
            operation,
            collection,
            record_id,
            exc,
        )
        raise StoreError(str(exc) or exc.__class__.__name__) from exc


class PostgresRecordStore:
    def __init__(self, database: db.Database) -> None:
        self._database = database

    @property
    def is_available(self) -> bool:
        return self._database.is_connected

    async def open(self, collections: Iterable[str]) -> None:
        """
        Connect the pool and make sure every collection table exists.

        A failed connection is logged and swallowed: the API keeps serving
        and data operations answer with `StoreError` until restart.
        """
        try:
            await self._database.init_pool()
            for collection in collections:
                await self.ensure_collection(collection)
        except _DRIVER_ERRORS as exc:
            logger.error("store_unavailable error=%s", exc)
            await self._database.close_pool()
            return None
        logger.info("store_connected")

    async def close(self) -> None:
        await self._database.close_pool()

    async def ensure_collection(self, collection: str) -> None:
        await self._database.execute(
            f"""
            CREATE TABLE IF NOT EXISTS {_table(collection)} (
              id uuid PRIMARY KEY DEFAULT gen_random_uuid(),
              data jsonb NOT NULL,
              created_at timestamptz NOT NULL DEFAULT now(),
              updated_at timestamptz NOT NULL DEFAULT now()
            )
            """
        )

    async def insert(self, collection: str, document: dict[str, Any]) -> dict[str, Any]:
        with _store_errors("insert", collection):
            row = await self._database.fetch_one(
                f"""
                INSERT INTO {_table(collection)} (data)
                VALUES ($1::jsonb)
                RETURNING id, data
                """,
                _json_arg(document),
            )
        if row is None:
            raise StoreError(f"Failed to insert into {collection}.")
        return _row_to_record(row)

    async def find_all(self, collection: str) -> list[dict[str, Any]]:
        with _store_errors("find_all", collection):
            rows = await self._database.fetch_all(
                f"""
                SELECT id, data
                FROM {_table(collection)}
                ORDER BY created_at ASC, id ASC
                """
            )
        return [_row_to_record(r) for r in rows]

    async def find_by_id(self, collection: str, record_id: str) -> dict[str, Any] | None:
        with _store_errors("find_by_id", collection, record_id):
            row = await self._database.fetch_one(
                f"""
                SELECT id, data
                FROM {_table(collection)}
                WHERE id = $1::uuid
                """,
                record_id,
            )
        return _row_to_record(row) if row is not None else None

    async def update_by_id(
        self, collection: str, record_id: str, changes: dict[str, Any]
    ) -> dict[str, Any] | None:
        # `||` merges top-level keys, so fields not in `changes` are kept.
        with _store_errors("update_by_id", collection, record_id):
            row = await self._database.fetch_one(
                f"""
                UPDATE {_table(collection)}
                SET data = data || $2::jsonb,
                    updated_at = now()
                WHERE id = $1::uuid
                RETURNING id, data
                """,
                record_id,
                _json_arg(changes),
            )
        return _row_to_record(row) if row is not None else None

    async def delete_by_id(self, collection: str, record_id: str) -> bool:
        with _store_errors("delete_by_id", collection, record_id):
            row = await self._database.fetch_one(
                f"""
                DELETE FROM {_table(collection)}
                WHERE id = $1::uuid
                RETURNING id
                """,
                record_id,
            )
        return row is not None
