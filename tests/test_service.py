"""Tests for the generic record service."""

import uuid

import pytest

from core.errors import NotFoundError, StoreError, ValidationError
from crud.service import RecordService
from departments import admin, engineering


@pytest.fixture
def service(store):
    return RecordService(admin.SCHEMA, store)


class TestRecordService:
    @pytest.mark.asyncio
    async def test_create_then_get(self, service):
        created = await service.create({"name": "Grace", "role": "Director"})
        fetched = await service.get_by_id(created["id"])
        assert fetched == created
        assert uuid.UUID(created["id"])

    @pytest.mark.asyncio
    async def test_repeated_reads_are_identical(self, service):
        created = await service.create({"name": "Grace", "role": "Director"})
        first = await service.get_by_id(created["id"])
        second = await service.get_by_id(created["id"])
        assert first == second

    @pytest.mark.asyncio
    async def test_invalid_create_persists_nothing(self, service, store):
        with pytest.raises(ValidationError):
            await service.create({"name": "Grace"})
        assert await service.list() == []
        assert store.collections.get("admins", {}) == {}

    @pytest.mark.asyncio
    async def test_list_in_insertion_order(self, service):
        a = await service.create({"name": "A", "role": "r"})
        b = await service.create({"name": "B", "role": "r"})
        assert [r["id"] for r in await service.list()] == [a["id"], b["id"]]

    @pytest.mark.asyncio
    async def test_update_returns_new_state(self, service):
        created = await service.create({"name": "Grace", "role": "Director"})
        updated = await service.update_by_id(created["id"], {"role": "Advisor"})
        assert updated == {"id": created["id"], "name": "Grace", "role": "Advisor"}

    @pytest.mark.asyncio
    async def test_empty_update_returns_current(self, service):
        created = await service.create({"name": "Grace", "role": "Director"})
        assert await service.update_by_id(created["id"], {}) == created

    @pytest.mark.asyncio
    async def test_update_missing_record(self, service):
        with pytest.raises(NotFoundError) as exc_info:
            await service.update_by_id(str(uuid.uuid4()), {"role": "x"})
        assert exc_info.value.message == "Admin not found"

    @pytest.mark.asyncio
    async def test_update_validation_before_lookup(self, service):
        with pytest.raises(ValidationError):
            await service.update_by_id(str(uuid.uuid4()), {"role": ""})

    @pytest.mark.asyncio
    async def test_delete_is_final(self, service):
        created = await service.create({"name": "Grace", "role": "Director"})
        await service.delete_by_id(created["id"])
        with pytest.raises(NotFoundError):
            await service.get_by_id(created["id"])
        with pytest.raises(NotFoundError):
            await service.delete_by_id(created["id"])

    @pytest.mark.asyncio
    async def test_malformed_id_is_store_error(self, service):
        with pytest.raises(StoreError):
            await service.get_by_id("not-a-uuid")

    @pytest.mark.asyncio
    async def test_unavailable_store(self, service, store):
        store.available = False
        with pytest.raises(StoreError):
            await service.list()
        with pytest.raises(StoreError):
            await service.create({"name": "Grace", "role": "Director"})

    @pytest.mark.asyncio
    async def test_collections_are_isolated(self, store):
        admins = RecordService(admin.SCHEMA, store)
        projects = RecordService(engineering.SCHEMA, store)
        created = await admins.create({"name": "Grace", "role": "Director"})
        assert await projects.list() == []
        with pytest.raises(NotFoundError):
            await projects.get_by_id(created["id"])
