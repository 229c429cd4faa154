"""
Standard comparison operators: ==, !=, >, <, >=, <=.

A ``None`` field value never satisfies a value comparison, negated or not,
matching SQL's three-valued logic so both backends agree.  Ordering
comparisons between values of unrelated types (possible for untyped
sources) do not match either.  Naive and aware datetimes are compared
with the naive side read as UTC.
"""

from __future__ import annotations

import operator as op_module
from collections.abc import Callable
from typing import Any

from ..backend import MatchOptions
from ..evaluator import MemoryOperator, align_datetimes, fold_case
from ..operators import FilterOperator


def _compare(
    compare: Callable[[Any, Any], Any],
    field_value: Any,
    condition_value: Any,
    options: MatchOptions,
) -> bool:
    if field_value is None:
        return False
    field_value, condition_value = align_datetimes(field_value, condition_value)
    try:
        return bool(compare(fold_case(field_value, options), fold_case(condition_value, options)))
    except TypeError:
        return False


class EqualsOperator(MemoryOperator):
    @property
    def name(self) -> FilterOperator:
        return FilterOperator.EQUALS

    def evaluate(self, field_value: Any, condition_value: Any, options: MatchOptions) -> bool:
        return _compare(op_module.eq, field_value, condition_value, options)


class NotEqualsOperator(MemoryOperator):
    @property
    def name(self) -> FilterOperator:
        return FilterOperator.NOT_EQUALS

    def evaluate(self, field_value: Any, condition_value: Any, options: MatchOptions) -> bool:
        return _compare(op_module.ne, field_value, condition_value, options)


class GreaterThanOperator(MemoryOperator):
    @property
    def name(self) -> FilterOperator:
        return FilterOperator.GREATER_THAN

    def evaluate(self, field_value: Any, condition_value: Any, options: MatchOptions) -> bool:
        return _compare(op_module.gt, field_value, condition_value, options)


class LessThanOperator(MemoryOperator):
    @property
    def name(self) -> FilterOperator:
        return FilterOperator.LESS_THAN

    def evaluate(self, field_value: Any, condition_value: Any, options: MatchOptions) -> bool:
        return _compare(op_module.lt, field_value, condition_value, options)


class GreaterThanOrEqualsOperator(MemoryOperator):
    @property
    def name(self) -> FilterOperator:
        return FilterOperator.GREATER_THAN_OR_EQUALS

    def evaluate(self, field_value: Any, condition_value: Any, options: MatchOptions) -> bool:
        return _compare(op_module.ge, field_value, condition_value, options)


class LessThanOrEqualsOperator(MemoryOperator):
    @property
    def name(self) -> FilterOperator:
        return FilterOperator.LESS_THAN_OR_EQUALS

    def evaluate(self, field_value: Any, condition_value: Any, options: MatchOptions) -> bool:
        return _compare(op_module.le, field_value, condition_value, options)
