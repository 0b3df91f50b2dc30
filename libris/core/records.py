"""Record schema descriptors.

Each record type declares an explicit, ordered list of fields. The filter
engine uses it to resolve and coerce filter properties, the merge engine to
copy fields, and the API layer to build request/response models.

Field ``name`` is the public (wire) name, e.g. ``"AuthorId"``; ``attribute``
is the Python attribute on the record object, e.g. ``"author_id"``.
"""

import uuid
from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, Optional, Tuple, Type


class FieldType(str, Enum):
    """Storage-independent field types understood by the engines."""

    STRING = "string"
    INTEGER = "integer"
    DECIMAL = "decimal"
    BOOLEAN = "boolean"
    DATE = "date"
    DATETIME = "datetime"
    UUID = "uuid"
    ENUM = "enum"


PYTHON_TYPES: Dict[FieldType, type] = {
    FieldType.STRING: str,
    FieldType.INTEGER: int,
    FieldType.DECIMAL: Decimal,
    FieldType.BOOLEAN: bool,
    FieldType.DATE: date,
    FieldType.DATETIME: datetime,
    FieldType.UUID: uuid.UUID,
}

# Operators that only make sense on text
TEXT_TYPES = frozenset([FieldType.STRING])


@dataclass(frozen=True)
class FieldSpec:
    """One named, typed field of a record type."""

    name: str
    attribute: str
    type: FieldType
    required: bool = False
    enum: Optional[Type[Enum]] = None

    def __post_init__(self):
        if self.type is FieldType.ENUM and self.enum is None:
            raise ValueError(f"Enum field {self.name} needs an enum class")

    @property
    def python_type(self) -> type:
        if self.type is FieldType.ENUM:
            return self.enum
        return PYTHON_TYPES[self.type]

    def read(self, record: Any) -> Any:
        return getattr(record, self.attribute)

    def write(self, record: Any, value: Any) -> None:
        setattr(record, self.attribute, value)


@dataclass(frozen=True)
class RecordSchema:
    """Ordered field list for one record type.

    Args:
        name: Record type name, also used as the resource name for
            entitlement checks (e.g. ``"Books"``)
        model: Class of the stored records
        fields: Every field of the record, identity included
        identity: Wire name of the identity field
    """

    name: str
    model: type
    fields: Tuple[FieldSpec, ...]
    identity: str = "Id"
    _by_name: Dict[str, FieldSpec] = field(
        init=False, repr=False, compare=False, default_factory=dict
    )

    def __post_init__(self):
        by_name = {}
        for spec in self.fields:
            if spec.name in by_name:
                raise ValueError(f"Duplicate field {spec.name} on {self.name}")
            by_name[spec.name] = spec
        if self.identity not in by_name:
            raise ValueError(f"{self.name} has no identity field {self.identity}")
        object.__setattr__(self, "_by_name", by_name)

    def field_named(self, name: str) -> Optional[FieldSpec]:
        """Look up a field by its exact (case-sensitive) wire name."""
        return self._by_name.get(name)

    @property
    def identity_field(self) -> FieldSpec:
        return self._by_name[self.identity]

    @property
    def mutable_fields(self) -> Tuple[FieldSpec, ...]:
        return tuple(f for f in self.fields if f.name != self.identity)

    def identity_of(self, record: Any) -> Any:
        return self.identity_field.read(record)

    def new_record(self, source: Any) -> Any:
        """Build a new stored record from any object exposing the same attributes.

        Fields left as ``None`` are not passed, so storage defaults
        (generated identity, column defaults) apply.
        """
        values = {}
        for spec in self.fields:
            value = spec.read(source)
            if value is not None:
                values[spec.attribute] = value
        return self.model(**values)
