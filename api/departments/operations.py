"""
Operations department staff.
"""

from __future__ import annotations

from crud.schemas import FieldSpec, ResourceSchema

SCHEMA = ResourceSchema(
    label="Operations",
    path="operations",
    collection="operations",
    singular="operations staff member",
    plural="operations staff",
    description="Operations department management",
    not_found="Staff not found",
    fields=(
        FieldSpec("name", "The staff name"),
        FieldSpec("shift", "The staff shift"),
    ),
)
