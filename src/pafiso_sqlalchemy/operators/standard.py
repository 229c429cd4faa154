"""
Standard comparison operators for SQLAlchemy.

Case-insensitive comparisons lower both sides with ``lower()``; equality
goes through the native match hook when one is supplied.
"""

from __future__ import annotations

import operator as op_module
from collections.abc import Callable
from typing import TYPE_CHECKING, Any, cast

from sqlalchemy import func, not_

from pafiso.coercion import escape_like_pattern
from pafiso.operators import FilterOperator

from ..strategy import SQLAlchemyOperator

if TYPE_CHECKING:
    from sqlalchemy.sql.elements import ColumnElement

    from pafiso.backend import MatchOptions


def fold_case(column: Any, value: Any, options: MatchOptions) -> tuple[Any, Any]:
    """Lower both sides when the comparison ignores case."""
    if options.ignore_case and isinstance(value, str):
        return func.lower(column), value.lower()
    return column, value


def _compare(
    compare: Callable[[Any, Any], Any],
    column: Any,
    value: Any,
    options: MatchOptions,
) -> ColumnElement[bool]:
    column, value = fold_case(column, value, options)
    return cast("ColumnElement[bool]", compare(column, value))


def _equals(column: Any, value: Any, options: MatchOptions) -> ColumnElement[bool]:
    if options.ignore_case and options.native_match is not None and isinstance(value, str):
        return cast("ColumnElement[bool]", options.native_match(column, escape_like_pattern(value)))
    return _compare(op_module.eq, column, value, options)


class EqualsOperator(SQLAlchemyOperator):
    @property
    def name(self) -> FilterOperator:
        return FilterOperator.EQUALS

    def apply(self, column: Any, value: Any, options: MatchOptions) -> ColumnElement[bool]:
        return _equals(column, value, options)


class NotEqualsOperator(SQLAlchemyOperator):
    @property
    def name(self) -> FilterOperator:
        return FilterOperator.NOT_EQUALS

    def apply(self, column: Any, value: Any, options: MatchOptions) -> ColumnElement[bool]:
        if options.ignore_case and options.native_match is not None and isinstance(value, str):
            return cast("ColumnElement[bool]", not_(_equals(column, value, options)))
        return _compare(op_module.ne, column, value, options)


class GreaterThanOperator(SQLAlchemyOperator):
    @property
    def name(self) -> FilterOperator:
        return FilterOperator.GREATER_THAN

    def apply(self, column: Any, value: Any, options: MatchOptions) -> ColumnElement[bool]:
        return _compare(op_module.gt, column, value, options)


class LessThanOperator(SQLAlchemyOperator):
    @property
    def name(self) -> FilterOperator:
        return FilterOperator.LESS_THAN

    def apply(self, column: Any, value: Any, options: MatchOptions) -> ColumnElement[bool]:
        return _compare(op_module.lt, column, value, options)


class GreaterThanOrEqualsOperator(SQLAlchemyOperator):
    @property
    def name(self) -> FilterOperator:
        return FilterOperator.GREATER_THAN_OR_EQUALS

    def apply(self, column: Any, value: Any, options: MatchOptions) -> ColumnElement[bool]:
        return _compare(op_module.ge, column, value, options)


class LessThanOrEqualsOperator(SQLAlchemyOperator):
    @property
    def name(self) -> FilterOperator:
        return FilterOperator.LESS_THAN_OR_EQUALS

    def apply(self, column: Any, value: Any, options: MatchOptions) -> ColumnElement[bool]:
        return _compare(op_module.le, column, value, options)
