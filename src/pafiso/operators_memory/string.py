"""Substring and membership operators: contains, not contains."""

from __future__ import annotations

from typing import Any

from ..backend import MatchOptions
from ..evaluator import MemoryOperator, fold_case
from ..operators import FilterOperator

_COLLECTIONS = (list, tuple, set, frozenset)


def _contains(field_value: Any, condition_value: Any, options: MatchOptions) -> bool:
    if options.collection or isinstance(field_value, _COLLECTIONS):
        needle = fold_case(condition_value, options)
        return any(fold_case(item, options) == needle for item in field_value)
    haystack = fold_case(str(field_value), options)
    return fold_case(str(condition_value), options) in haystack


class ContainsOperator(MemoryOperator):
    @property
    def name(self) -> FilterOperator:
        return FilterOperator.CONTAINS

    def evaluate(self, field_value: Any, condition_value: Any, options: MatchOptions) -> bool:
        if field_value is None:
            return False
        return _contains(field_value, condition_value, options)


class NotContainsOperator(MemoryOperator):
    @property
    def name(self) -> FilterOperator:
        return FilterOperator.NOT_CONTAINS

    def evaluate(self, field_value: Any, condition_value: Any, options: MatchOptions) -> bool:
        if field_value is None:
            return False
        return not _contains(field_value, condition_value, options)
