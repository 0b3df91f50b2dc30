"""Filter conditions and their JSON wire format.

Wire format (``filters`` query parameter)::

    [{"Property": "Name", "Operator": "Equal", "Value": "Orwell"}]

Conditions are always combined with AND. Nested arrays or grouping keys
are rejected rather than interpreted.
"""

import json
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError, field_validator

from libris.core.errors import MalformedFilter, UnsupportedFilter


class Operator(str, Enum):
    """Comparison operators accepted in a filter condition."""

    EQUAL = "Equal"
    NOT_EQUAL = "NotEqual"
    GREATER_THAN = "GreaterThan"
    GREATER_THAN_OR_EQUAL = "GreaterThanOrEqual"
    LESS_THAN = "LessThan"
    LESS_THAN_OR_EQUAL = "LessThanOrEqual"
    CONTAINS = "Contains"
    STARTS_WITH = "StartsWith"
    ENDS_WITH = "EndsWith"


TEXT_OPERATORS = frozenset([Operator.CONTAINS, Operator.STARTS_WITH, Operator.ENDS_WITH])


class FilterCondition(BaseModel):
    """One ``(property, operator, value)`` clause."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    property: str = Field(..., alias="Property", min_length=1)
    operator: Operator = Field(..., alias="Operator")
    value: str = Field(..., alias="Value")

    @field_validator("value", mode="before")
    @classmethod
    def _stringify_scalars(cls, value):
        # Clients often send numbers and booleans unquoted
        if isinstance(value, bool):
            return "true" if value else "false"
        if isinstance(value, (int, float)):
            return str(value)
        return value


_CONDITION_LIST = TypeAdapter(List[FilterCondition])

# Keys that would imply OR / grouping semantics
GROUPING_KEYS = frozenset(["Or", "And", "Logic", "Conditions", "Group"])


def parse_filters(raw: Optional[str]) -> List[FilterCondition]:
    """Parse the JSON filter text sent by a client.

    Returns an empty list for absent or blank input.

    Raises:
        MalformedFilter: text is not a JSON array of condition objects
        UnsupportedFilter: input asks for OR or grouped conditions
    """
    if raw is None or not raw.strip():
        return []

    try:
        data = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise MalformedFilter(f"Filters are not valid JSON: {exc.msg}") from exc

    if not isinstance(data, list):
        raise MalformedFilter("Filters must be a JSON array of conditions")

    for index, item in enumerate(data):
        if isinstance(item, list):
            raise UnsupportedFilter(
                "Nested condition groups are not supported; conditions are combined with AND",
                {"index": index},
            )
        if isinstance(item, dict):
            grouping = GROUPING_KEYS.intersection(item.keys())
            if grouping:
                raise UnsupportedFilter(
                    "Only AND-combined conditions are supported",
                    {"index": index, "keys": sorted(grouping)},
                )

    try:
        return _CONDITION_LIST.validate_python(data)
    except ValidationError as exc:
        errors = [
            {"loc": [str(part) for part in err["loc"]], "msg": err["msg"]}
            for err in exc.errors()
        ]
        raise MalformedFilter("Invalid filter condition", {"errors": errors}) from exc
