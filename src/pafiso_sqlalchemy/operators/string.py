"""
Substring and membership operators for SQLAlchemy.

Case-insensitive tests use ``LIKE`` (or the native match hook) on lowered
operands; case-sensitive tests use :class:`~pafiso_sqlalchemy.functions.substring_position`.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, cast

from sqlalchemy import func, not_

from pafiso.coercion import escape_like_pattern
from pafiso.operators import FilterOperator

from ..functions import substring_position
from ..strategy import SQLAlchemyOperator

if TYPE_CHECKING:
    from sqlalchemy.sql.elements import ColumnElement

    from pafiso.backend import MatchOptions


def _contains(column: Any, value: Any, options: MatchOptions) -> ColumnElement[bool]:
    if options.collection:
        # ARRAY columns: membership of a single element.
        return cast("ColumnElement[bool]", column.contains([value]))
    text = str(value)
    if options.ignore_case:
        if options.native_match is not None:
            pattern = f"%{escape_like_pattern(text)}%"
            return cast("ColumnElement[bool]", options.native_match(column, pattern))
        return cast("ColumnElement[bool]", func.lower(column).contains(text.lower(), autoescape=True))
    # Case-sensitive: LIKE may ignore case depending on the collation.
    return cast("ColumnElement[bool]", substring_position(column, text) > 0)


class ContainsOperator(SQLAlchemyOperator):
    @property
    def name(self) -> FilterOperator:
        return FilterOperator.CONTAINS

    def apply(self, column: Any, value: Any, options: MatchOptions) -> ColumnElement[bool]:
        return _contains(column, value, options)


class NotContainsOperator(SQLAlchemyOperator):
    @property
    def name(self) -> FilterOperator:
        return FilterOperator.NOT_CONTAINS

    def apply(self, column: Any, value: Any, options: MatchOptions) -> ColumnElement[bool]:
        return cast("ColumnElement[bool]", not_(_contains(column, value, options)))
