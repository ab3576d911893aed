"""
Engineering department projects.
"""

from __future__ import annotations

from crud.schemas import FieldSpec, ResourceSchema

SCHEMA = ResourceSchema(
    label="Engineering",
    path="engineering",
    collection="engineering",
    singular="engineering project",
    description="Engineering department management",
    not_found="Project not found",
    fields=(
        FieldSpec("name", "The project name"),
        FieldSpec("project", "The project description"),
    ),
)
