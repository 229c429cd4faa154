"""Null check operators: is null, is not null."""

from __future__ import annotations

from typing import Any

from ..backend import MatchOptions
from ..evaluator import MemoryOperator
from ..operators import FilterOperator


class NullOperator(MemoryOperator):
    @property
    def name(self) -> FilterOperator:
        return FilterOperator.NULL

    def evaluate(self, field_value: Any, condition_value: Any, options: MatchOptions) -> bool:
        return field_value is None


class NotNullOperator(MemoryOperator):
    @property
    def name(self) -> FilterOperator:
        return FilterOperator.NOT_NULL

    def evaluate(self, field_value: Any, condition_value: Any, options: MatchOptions) -> bool:
        return field_value is not None
