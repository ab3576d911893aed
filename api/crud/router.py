"""
FastAPI router factory for one resource type.

`build_router(schema, store)` mounts the five CRUD endpoints under
`/api/<schema.path>`. Request and response models come from the schema, so
the published OpenAPI document describes each resource's real shape.
"""

# No `from __future__ import annotations` here: FastAPI resolves endpoint
# annotations against module globals, and the body models are local.

from typing import Any

from fastapi import APIRouter, Response, status

from .repository import RecordStore
from .schemas import ResourceSchema
from .service import RecordService

MESSAGE_RESPONSE = {
    "content": {
        "application/json": {
            "schema": {
                "type": "object",
                "properties": {"message": {"type": "string"}},
            }
        }
    }
}


def _plain_text_response(description: str) -> dict[str, Any]:
    return {"description": description, "content": {"text/plain": {"schema": {"type": "string"}}}}


def _with_article(noun: str) -> str:
    return f"an {noun}" if noun[:1].lower() in "aeiou" else f"a {noun}"


def build_router(schema: ResourceSchema, store: RecordStore) -> APIRouter:
    service = RecordService(schema, store)
    CreateModel = schema.create_model
    UpdateModel = schema.update_model
    RecordModel = schema.record_model

    singular = schema.singular_name
    plural = schema.plural_name
    not_found = _plain_text_response(schema.not_found_message)
    bad_request = {"description": "Bad request", **MESSAGE_RESPONSE}
    store_failure = {"description": "Store failure", **MESSAGE_RESPONSE}

    router = APIRouter(prefix=f"/api/{schema.path}", tags=[schema.label])

    @router.post(
        "",
        status_code=status.HTTP_201_CREATED,
        response_model=RecordModel,
        response_model_exclude_none=True,
        summary=f"Create {_with_article('new ' + singular)}",
        response_description=f"The created {singular}",
        responses={400: bad_request, 500: store_failure},
    )
    async def create_record(payload: CreateModel) -> dict:
        return await service.create(payload)

    @router.get(
        "",
        response_model=list[RecordModel],
        response_model_exclude_none=True,
        summary=f"Retrieve a list of {plural}",
        response_description=f"A list of {plural}",
        responses={500: store_failure},
    )
    async def list_records() -> list[dict]:
        return await service.list()

    @router.get(
        "/{record_id}",
        response_model=RecordModel,
        response_model_exclude_none=True,
        summary=f"Retrieve a single {singular} by ID",
        response_description=f"A single {singular}",
        responses={404: not_found, 500: store_failure},
    )
    async def get_record(record_id: str) -> dict:
        return await service.get_by_id(record_id)

    @router.put(
        "/{record_id}",
        response_model=RecordModel,
        response_model_exclude_none=True,
        summary=f"Update {_with_article(singular)} by ID",
        response_description=f"The updated {singular}",
        responses={400: bad_request, 404: not_found, 500: store_failure},
    )
    async def update_record(record_id: str, payload: UpdateModel) -> dict:
        return await service.update_by_id(record_id, payload)

    @router.delete(
        "/{record_id}",
        status_code=status.HTTP_204_NO_CONTENT,
        response_class=Response,
        summary=f"Delete {_with_article(singular)} by ID",
        response_description="No content",
        responses={404: not_found, 500: store_failure},
    )
    async def delete_record(record_id: str) -> Response:
        await service.delete_by_id(record_id)
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    return router
