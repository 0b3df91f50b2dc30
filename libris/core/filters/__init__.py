"""Declarative filtering of record collections."""

from .criteria import FilterCondition, Operator, parse_filters
from .engine import apply_filter, compile_filter
from .predicates import AndCombination, FieldComparison

__all__ = [
    "FilterCondition",
    "Operator",
    "parse_filters",
    "apply_filter",
    "compile_filter",
    "AndCombination",
    "FieldComparison",
]
