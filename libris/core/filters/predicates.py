"""Predicate expression tree.

A compiled filter is either a single :class:`FieldComparison` or an
:class:`AndCombination` of them. Every node can be evaluated against a
record in memory (``matches``) or translated into a SQLAlchemy clause for a
given model (``to_clause``); both paths give the same answer, including for
``None`` field values, which never match.
"""

import operator as op
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable, Dict, Tuple, Union

from sqlalchemy import and_, func
from sqlalchemy.sql.elements import ColumnElement

from libris.core.records import FieldSpec

from .coercion import as_naive_utc
from .criteria import Operator


def _contains(actual: str, expected: str) -> bool:
    return expected.lower() in actual.lower()


def _starts_with(actual: str, expected: str) -> bool:
    return actual.startswith(expected)


def _ends_with(actual: str, expected: str) -> bool:
    return actual.endswith(expected)


EVALUATORS: Dict[Operator, Callable[[Any, Any], bool]] = {
    Operator.EQUAL: op.eq,
    Operator.NOT_EQUAL: op.ne,
    Operator.GREATER_THAN: op.gt,
    Operator.GREATER_THAN_OR_EQUAL: op.ge,
    Operator.LESS_THAN: op.lt,
    Operator.LESS_THAN_OR_EQUAL: op.le,
    Operator.CONTAINS: _contains,
    Operator.STARTS_WITH: _starts_with,
    Operator.ENDS_WITH: _ends_with,
}


def _sql_contains(column, expected: str) -> ColumnElement:
    return func.lower(column).contains(expected.lower(), autoescape=True)


def _sql_starts_with(column, expected: str) -> ColumnElement:
    # Case-sensitive on every backend
    return func.substr(column, 1, len(expected)) == expected


def _sql_ends_with(column, expected: str) -> ColumnElement:
    length = func.length(column)
    return and_(
        length >= len(expected),
        func.substr(column, length - len(expected) + 1) == expected,
    )


CLAUSES: Dict[Operator, Callable[[Any, Any], ColumnElement]] = {
    Operator.EQUAL: op.eq,
    Operator.NOT_EQUAL: op.ne,
    Operator.GREATER_THAN: op.gt,
    Operator.GREATER_THAN_OR_EQUAL: op.ge,
    Operator.LESS_THAN: op.lt,
    Operator.LESS_THAN_OR_EQUAL: op.le,
    Operator.CONTAINS: _sql_contains,
    Operator.STARTS_WITH: _sql_starts_with,
    Operator.ENDS_WITH: _sql_ends_with,
}


@dataclass(frozen=True)
class FieldComparison:
    """Compare one field of a record against a coerced value."""

    field: FieldSpec
    operator: Operator
    value: Any

    def matches(self, record: Any) -> bool:
        actual = self.field.read(record)
        if actual is None:
            return False
        if isinstance(actual, datetime):
            actual = as_naive_utc(actual)
        return EVALUATORS[self.operator](actual, self.value)

    def to_clause(self, model: type) -> ColumnElement:
        column = getattr(model, self.field.attribute)
        return CLAUSES[self.operator](column, self.value)


@dataclass(frozen=True)
class AndCombination:
    """Conjunction of predicates."""

    terms: Tuple["Predicate", ...]

    def matches(self, record: Any) -> bool:
        return all(term.matches(record) for term in self.terms)

    def to_clause(self, model: type) -> ColumnElement:
        return and_(*(term.to_clause(model) for term in self.terms))


Predicate = Union[FieldComparison, AndCombination]
