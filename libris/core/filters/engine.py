"""Filter criteria engine.

Compiles a sequence of :class:`FilterCondition` into a predicate for one
record type and applies it to a collection. SQLAlchemy queries get the
predicate pushed down as a ``WHERE`` clause; any other iterable is filtered
in memory, preserving order.
"""

from typing import Any, Optional, Sequence

from sqlalchemy import Select
from sqlalchemy.orm import Query

from libris.core.errors import InvalidFilterField
from libris.core.logger import get_logger
from libris.core.records import RecordSchema

from .coercion import coerce_value
from .criteria import FilterCondition
from .predicates import AndCombination, FieldComparison, Predicate

logger = get_logger(__name__)


def compile_filter(
    conditions: Optional[Sequence[FilterCondition]],
    schema: RecordSchema,
) -> Optional[Predicate]:
    """Resolve conditions against ``schema`` and build the predicate tree.

    Returns ``None`` when there is nothing to filter on.

    Raises:
        InvalidFilterField: a condition names a field the record type lacks
        InvalidFilterValue: a value cannot be coerced to the field's type
    """
    if not conditions:
        return None

    comparisons = []
    for condition in conditions:
        spec = schema.field_named(condition.property)
        if spec is None:
            raise InvalidFilterField(condition.property, schema.name)
        value = coerce_value(spec, condition.operator, condition.value)
        comparisons.append(FieldComparison(spec, condition.operator, value))

    if len(comparisons) == 1:
        return comparisons[0]
    return AndCombination(tuple(comparisons))


def apply_filter(
    collection: Any,
    conditions: Optional[Sequence[FilterCondition]],
    schema: RecordSchema,
) -> Any:
    """Narrow ``collection`` to the records matching every condition.

    Args:
        collection: A SQLAlchemy ``Query``/``Select`` over ``schema.model``,
            or any iterable of records
        conditions: Conditions to AND together; ``None`` or empty means no filter
        schema: Descriptor of the record type being filtered

    Returns:
        ``collection`` itself when there are no conditions; a narrowed
        ``Query``/``Select`` for SQL sources; otherwise a list of matching
        records in their original order.
    """
    predicate = compile_filter(conditions, schema)
    if predicate is None:
        return collection

    logger.debug("Filtering %s on %d condition(s)", schema.name, len(conditions))

    if isinstance(collection, Query):
        return collection.filter(predicate.to_clause(schema.model))
    if isinstance(collection, Select):
        return collection.where(predicate.to_clause(schema.model))
    return [record for record in collection if predicate.matches(record)]
