"""
Declarative resource schemas and the pydantic models derived from them.

A `ResourceSchema` lists the fields of one resource type. Every field is
text; required fields must be present and non-empty on create and may not
be cleared on update. Three models are derived per schema:

- `<Label>Create`  request body of POST (required fields enforced)
- `<Label>Update`  request body of PUT (every field optional, none clearable
                   unless it is optional in the schema)
- `<Label>Record`  response shape, the stored fields plus `id`
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from functools import cached_property
from typing import Any, Mapping

import pydantic
from pydantic import BaseModel, ConfigDict, Field

from core.errors import ValidationError

_COLLECTION_RE = re.compile(r"^[a-z_][a-z0-9_]*$")


@dataclass(frozen=True)
class FieldSpec:
    name: str
    description: str = ""
    required: bool = True
    type: str = "text"


@dataclass(frozen=True)
class ResourceSchema:
    # `label` names the resource in messages and models (e.g. "Admin"),
    # `path` is the URL segment and `collection` the backing table.
    label: str
    path: str
    collection: str
    fields: tuple[FieldSpec, ...]
    singular: str = ""
    plural: str = ""
    description: str = ""
    not_found: str = ""

    def __post_init__(self) -> None:
        if not _COLLECTION_RE.match(self.collection):
            raise ValueError(f"Invalid collection name: {self.collection!r}")
        if not self.fields:
            raise ValueError(f"{self.label} schema declares no fields.")
        names = [f.name for f in self.fields]
        if "id" in names:
            raise ValueError("`id` is assigned by the store and cannot be declared.")
        if len(set(names)) != len(names):
            raise ValueError(f"{self.label} schema declares duplicate fields.")
        for spec in self.fields:
            if spec.type != "text":
                raise ValueError(f"Unsupported field type: {spec.type!r}")

    @property
    def field_names(self) -> tuple[str, ...]:
        return tuple(f.name for f in self.fields)

    @property
    def required_fields(self) -> tuple[str, ...]:
        return tuple(f.name for f in self.fields if f.required)

    @property
    def singular_name(self) -> str:
        return self.singular or self.label.lower()

    @property
    def plural_name(self) -> str:
        return self.plural or f"{self.singular_name}s"

    @property
    def not_found_message(self) -> str:
        return self.not_found or f"{self.label} not found"

    @cached_property
    def create_model(self) -> type[BaseModel]:
        definitions: dict[str, Any] = {}
        for spec in self.fields:
            if spec.required:
                definitions[spec.name] = (str, Field(..., min_length=1, description=spec.description))
            else:
                definitions[spec.name] = (str | None, Field(default=None, description=spec.description))
        return _build_model(f"{self.label}Create", definitions)

    @cached_property
    def update_model(self) -> type[BaseModel]:
        definitions: dict[str, Any] = {}
        for spec in self.fields:
            if spec.required:
                # Default is not validated, so an omitted field stays unset
                # while an explicit null still fails the `str` check.
                definitions[spec.name] = (str, Field(default=None, min_length=1, description=spec.description))
            else:
                definitions[spec.name] = (str | None, Field(default=None, description=spec.description))
        return _build_model(f"{self.label}Update", definitions)

    @cached_property
    def record_model(self) -> type[BaseModel]:
        definitions: dict[str, Any] = {
            "id": (str, Field(..., description=f"The {self.singular_name} ID")),
        }
        for spec in self.fields:
            if spec.required:
                definitions[spec.name] = (str, Field(..., description=spec.description))
            else:
                definitions[spec.name] = (str | None, Field(default=None, description=spec.description))
        return pydantic.create_model(f"{self.label}Record", **definitions)

    def validate_create(self, body: Any) -> dict[str, Any]:
        """
        Check a create body and return the document to store.

        Unknown keys are dropped; optional fields that were not sent are
        left out of the document.
        """
        model = self._validate(self.create_model, body)
        return model.model_dump(exclude_unset=True)

    def validate_update(self, body: Any) -> dict[str, Any]:
        """
        Check a partial update body and return only the fields it sets.
        """
        model = self._validate(self.update_model, body)
        return model.model_dump(exclude_unset=True)

    def to_record(self, record_id: Any, document: Mapping[str, Any]) -> dict[str, Any]:
        record: dict[str, Any] = {"id": str(record_id)}
        for name in self.field_names:
            if name in document:
                record[name] = document[name]
        return record

    def _validate(self, model_cls: type[BaseModel], body: Any) -> BaseModel:
        if isinstance(body, BaseModel):
            body = body.model_dump(exclude_unset=True)
        try:
            return model_cls.model_validate(body)
        except pydantic.ValidationError as exc:
            raise ValidationError(format_validation_message(self.label, exc.errors())) from exc


class _TextBody(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True, extra="ignore")


def _build_model(name: str, definitions: dict[str, Any]) -> type[BaseModel]:
    return pydantic.create_model(name, __base__=_TextBody, **definitions)


def format_validation_message(label: str, errors: list[Mapping[str, Any]]) -> str:
    """
    Render pydantic errors as one line, e.g.
    "Admin validation failed: role: Field required".
    """
    parts: list[str] = []
    for err in errors:
        loc = list(err.get("loc", ()))
        if loc and loc[0] == "body":
            loc = loc[1:]
            # JSON decode errors carry the character offset, not a field.
            if loc and isinstance(loc[0], int):
                loc = loc[1:]
        where = ".".join(str(p) for p in loc)
        msg = str(err.get("msg") or "invalid value")
        parts.append(f"{where}: {msg}" if where else msg)
    return f"{label} validation failed: " + "; ".join(parts)
