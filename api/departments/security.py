"""
Security department staff.
"""

from __future__ import annotations

from crud.schemas import FieldSpec, ResourceSchema

SCHEMA = ResourceSchema(
    label="Security",
    path="security",
    # `security` alone reads like a keyword in most SQL tooling.
    collection="security_staff",
    singular="security staff member",
    plural="security staff",
    description="Security department management",
    not_found="Staff not found",
    fields=(
        FieldSpec("name", "The staff name"),
        FieldSpec("clearanceLevel", "The staff clearance level"),
    ),
)
