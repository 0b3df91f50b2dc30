"""Common schemas for the Libris API."""

from typing import Any, Dict, Optional, Type

from pydantic import BaseModel, ConfigDict, Field, create_model

from libris.core.records import RecordSchema


class ErrorResponse(BaseModel):
    """Standard error response."""
    error: str
    detail: Optional[str] = None
    details: Dict[str, Any] = Field(default_factory=dict)


def build_record_model(schema: RecordSchema) -> Type[BaseModel]:
    """
    Build the request/response model for a record type.

    JSON keys are the wire field names (``"AuthorId"``); attributes are the
    record's attribute names (``author_id``), so the model can be read by the
    merge engine exactly like a stored record. The identity is optional so
    the same model serves creates.
    """
    definitions = {}
    for spec in schema.fields:
        if spec.required and spec.name != schema.identity:
            definitions[spec.attribute] = (spec.python_type, Field(..., alias=spec.name))
        else:
            definitions[spec.attribute] = (Optional[spec.python_type], Field(None, alias=spec.name))

    return create_model(
        f"{schema.name}Record",
        __config__=ConfigDict(populate_by_name=True, from_attributes=True),
        **definitions,
    )
