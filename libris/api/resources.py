"""Registry of the resources served by the API."""

from dataclasses import dataclass
from typing import Tuple, Type

from pydantic import BaseModel

from libris.api.schemas import build_record_model
from libris.core.rbac import RESOURCE_NAMES
from libris.core.records import RecordSchema
from libris.db.models import (
    AUTHOR_SCHEMA,
    BOOKS_SCHEMA,
    ROLE_SCHEMA,
    ROLE_ENTITLEMENT_SCHEMA,
    USER_SCHEMA,
    USER_IN_ROLE_SCHEMA,
)


@dataclass(frozen=True)
class ResourceSpec:
    """Everything the dispatcher needs to serve one resource."""

    schema: RecordSchema
    route: str
    label: str
    record_model: Type[BaseModel]

    @property
    def name(self) -> str:
        return self.schema.name


def register(schema: RecordSchema, route: str, label: str) -> ResourceSpec:
    if schema.name not in RESOURCE_NAMES:
        raise ValueError(f"Unknown resource name: {schema.name}")
    return ResourceSpec(
        schema=schema,
        route=route,
        label=label,
        record_model=build_record_model(schema),
    )


RESOURCES: Tuple[ResourceSpec, ...] = (
    register(AUTHOR_SCHEMA, "author", "author"),
    register(BOOKS_SCHEMA, "books", "book"),
    register(ROLE_SCHEMA, "role", "role"),
    register(ROLE_ENTITLEMENT_SCHEMA, "roleentitlement", "role entitlement"),
    register(USER_SCHEMA, "user", "user"),
    register(USER_IN_ROLE_SCHEMA, "userinrole", "user role assignment"),
)

