"""Coercion of textual filter values to a field's declared type."""

import uuid
from datetime import date, datetime, timezone
from decimal import Decimal
from typing import Any

from libris.core.errors import InvalidFilterValue
from libris.core.records import FieldSpec, FieldType

from .criteria import Operator, TEXT_OPERATORS

_TRUE_VALUES = frozenset(["true", "1"])
_FALSE_VALUES = frozenset(["false", "0"])


def _to_bool(raw: str) -> bool:
    text = raw.strip().lower()
    if text in _TRUE_VALUES:
        return True
    if text in _FALSE_VALUES:
        return False
    raise ValueError("expected true or false")


def _to_decimal(raw: str) -> Decimal:
    value = Decimal(raw.strip())
    if not value.is_finite():
        raise ValueError("expected a finite number")
    return value


def as_naive_utc(value: datetime) -> datetime:
    """Express ``value`` as a naive UTC datetime, the form timestamps are stored in."""
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def _to_datetime(raw: str) -> datetime:
    text = raw.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    return as_naive_utc(datetime.fromisoformat(text))


def _to_enum(spec: FieldSpec, raw: str):
    try:
        return spec.enum(raw)
    except ValueError:
        allowed = ", ".join(member.value for member in spec.enum)
        raise ValueError(f"expected one of {allowed}") from None


_CONVERTERS = {
    FieldType.STRING: lambda raw: raw,
    FieldType.INTEGER: lambda raw: int(raw.strip()),
    FieldType.DECIMAL: _to_decimal,
    FieldType.BOOLEAN: _to_bool,
    FieldType.DATE: lambda raw: date.fromisoformat(raw.strip()),
    FieldType.DATETIME: _to_datetime,
    FieldType.UUID: lambda raw: uuid.UUID(raw.strip()),
}


def coerce_value(spec: FieldSpec, operator: Operator, raw: str) -> Any:
    """Convert ``raw`` to the Python type of ``spec``.

    Raises:
        InvalidFilterValue: the text does not parse as the field's type, or
            the operator does not apply to the field's type
    """
    if operator in TEXT_OPERATORS and spec.type is not FieldType.STRING:
        raise InvalidFilterValue(
            spec.name, operator.value, raw,
            f"{operator.value} only applies to text fields",
        )

    try:
        if spec.type is FieldType.ENUM:
            return _to_enum(spec, raw)
        return _CONVERTERS[spec.type](raw)
    except (ValueError, ArithmeticError) as exc:
        raise InvalidFilterValue(spec.name, operator.value, raw, str(exc)) from exc
