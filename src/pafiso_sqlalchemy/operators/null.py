"""Null check operators for SQLAlchemy."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, cast

from pafiso.operators import FilterOperator

from ..strategy import SQLAlchemyOperator

if TYPE_CHECKING:
    from sqlalchemy.sql.elements import ColumnElement

    from pafiso.backend import MatchOptions


class NullOperator(SQLAlchemyOperator):
    @property
    def name(self) -> FilterOperator:
        return FilterOperator.NULL

    def apply(self, column: Any, _value: Any, options: MatchOptions) -> ColumnElement[bool]:
        return cast("ColumnElement[bool]", column.is_(None))


class NotNullOperator(SQLAlchemyOperator):
    @property
    def name(self) -> FilterOperator:
        return FilterOperator.NOT_NULL

    def apply(self, column: Any, _value: Any, options: MatchOptions) -> ColumnElement[bool]:
        return cast("ColumnElement[bool]", column.is_not(None))
