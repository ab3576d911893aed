"""
Generic CRUD business logic.

One `RecordService` serves one resource type: it validates bodies against the
resource schema, calls the store for that schema's collection only, and turns
a missing row into `NotFoundError`. Store faults pass through as `StoreError`.
"""

from __future__ import annotations

import logging
from typing import Any

from core.errors import NotFoundError

from .repository import RecordStore
from .schemas import ResourceSchema

logger = logging.getLogger(__name__)


class RecordService:
    def __init__(self, schema: ResourceSchema, store: RecordStore) -> None:
        self.schema = schema
        self.store = store

    @property
    def collection(self) -> str:
        return self.schema.collection

    def _to_record(self, raw: dict[str, Any]) -> dict[str, Any]:
        return self.schema.to_record(raw["id"], raw)

    async def create(self, body: Any) -> dict[str, Any]:
        document = self.schema.validate_create(body)
        raw = await self.store.insert(self.collection, document)
        record = self._to_record(raw)
        logger.info("record_created collection=%s id=%s", self.collection, record["id"])
        return record

    async def list(self) -> list[dict[str, Any]]:
        rows = await self.store.find_all(self.collection)
        return [self._to_record(r) for r in rows]

    async def get_by_id(self, record_id: str) -> dict[str, Any]:
        raw = await self.store.find_by_id(self.collection, record_id)
        if raw is None:
            raise NotFoundError(self.schema.not_found_message)
        return self._to_record(raw)

    async def update_by_id(self, record_id: str, partial_body: Any) -> dict[str, Any]:
        """
        Apply the fields present in `partial_body` and return the record as it
        is after the update.
        """
        changes = self.schema.validate_update(partial_body)
        if not changes:
            return await self.get_by_id(record_id)

        raw = await self.store.update_by_id(self.collection, record_id, changes)
        if raw is None:
            raise NotFoundError(self.schema.not_found_message)
        logger.info(
            "record_updated collection=%s id=%s fields=%s",
            self.collection,
            record_id,
            ",".join(sorted(changes)),
        )
        return self._to_record(raw)

    async def delete_by_id(self, record_id: str) -> None:
        deleted = await self.store.delete_by_id(self.collection, record_id)
        if not deleted:
            raise NotFoundError(self.schema.not_found_message)
        logger.info("record_deleted collection=%s id=%s", self.collection, record_id)
