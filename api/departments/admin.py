"""
Admin department staff.
"""

from __future__ import annotations

from crud.schemas import FieldSpec, ResourceSchema

SCHEMA = ResourceSchema(
    label="Admin",
    path="admin",
    collection="admins",
    description="Admin department management",
    fields=(
        FieldSpec("name", "The admin name"),
        FieldSpec("role", "The admin role"),
    ),
)
