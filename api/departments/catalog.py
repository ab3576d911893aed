"""
The department resources served by the API, in mount order.
"""

from __future__ import annotations

from fastapi import FastAPI

from crud.repository import RecordStore
from crud.router import build_router
from crud.schemas import ResourceSchema

from . import admin, engineering, operations, security

RESOURCES: tuple[ResourceSchema, ...] = (
    admin.SCHEMA,
    engineering.SCHEMA,
    operations.SCHEMA,
    security.SCHEMA,
)


def collections() -> list[str]:
    return [schema.collection for schema in RESOURCES]


def openapi_tags() -> list[dict]:
    return [{"name": schema.label, "description": schema.description} for schema in RESOURCES]


def mount(app: FastAPI, store: RecordStore) -> None:
    for schema in RESOURCES:
        app.include_router(build_router(schema, store))
