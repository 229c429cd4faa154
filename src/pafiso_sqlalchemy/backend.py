"""
SQLAlchemy ``Select`` backend.

Filters compile to ``WHERE`` clauses.  Paths through relationships are
wrapped in ``has()`` (many-to-one) or ``any()`` (one-to-many), so filtering
never multiplies rows.  Orderings through many-to-one relationships add an
aliased ``LEFT OUTER JOIN`` per traversed relationship; only the entries
plan carries those joins.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING, Any, ClassVar, cast

from sqlalchemy import Select, not_, or_
from sqlalchemy.orm import aliased

from pafiso.backend import MatchOptions, QueryBackend
from pafiso.exceptions import MalformedExpressionError
from pafiso.operators import FilterOperator, SortOrder

from .operators import build_default_sqla_registry

if TYPE_CHECKING:
    from sqlalchemy import ColumnElement

    from pafiso.introspection import MemberInfo
    from pafiso.resolver import FieldPath

    from .strategy import SQLAlchemyOperatorRegistry


class SQLAlchemyBackend(QueryBackend[Select[Any]]):
    """Composes filters, orderings and windows onto ``Select`` statements."""

    supports_native_match: ClassVar[bool] = True

    def __init__(self, registry: SQLAlchemyOperatorRegistry | None = None) -> None:
        self.registry = registry or build_default_sqla_registry()

    def accepts(self, source: Any) -> bool:
        return isinstance(source, Select)

    def wrap(self, source: Any, element_type: Any = None) -> Select[Any]:
        return cast("Select[Any]", source)

    def element_type(self, source: Select[Any]) -> Any:
        """
        The mapped class of the statement's first column.

        Raises:
            MalformedExpressionError: If the statement does not select a
                mapped entity.
        """
        descriptions = source.column_descriptions
        entity = descriptions[0].get("entity") if descriptions else None
        if entity is None:
            raise MalformedExpressionError(
                "SQLAlchemy sources must select a mapped entity"
            )
        return entity

    # -- predicates ----------------------------------------------------------

    def predicate(
        self,
        path: FieldPath,
        operator: FilterOperator,
        value: Any,
        options: MatchOptions,
    ) -> ColumnElement[bool]:
        return self._predicate(path.entity_type, path.segments, operator, value, options)

    def _predicate(
        self,
        owner: Any,
        segments: Sequence[MemberInfo],
        operator: FilterOperator,
        value: Any,
        options: MatchOptions,
    ) -> ColumnElement[bool]:
        member, rest = segments[0], segments[1:]
        attribute = _attribute(owner, member)

        if rest:
            if not member.relationship:
                raise MalformedExpressionError(
                    f"Cannot traverse '{member.name}': not a relationship"
                )
            inner = self._predicate(member.type, rest, operator, value, options)
            return _exists(attribute, member, inner)

        if member.relationship:
            # Null checks on a related entity test its existence.
            present = _exists(attribute, member)
            if operator is FilterOperator.NULL:
                return cast("ColumnElement[bool]", not_(present))
            if operator is FilterOperator.NOT_NULL:
                return present
            raise MalformedExpressionError(
                f"Relationship '{member.name}' only supports null checks"
            )
        return self.registry.apply(operator, attribute, value, options)

    def any_of(self, predicates: Sequence[Any]) -> ColumnElement[bool]:
        if not predicates:
            raise MalformedExpressionError("Cannot combine an empty set of predicates")
        if len(predicates) == 1:
            return cast("ColumnElement[bool]", predicates[0])
        return cast("ColumnElement[bool]", or_(*predicates))

    def where(self, source: Select[Any], predicate: Any) -> Select[Any]:
        return source.where(predicate)

    # -- ordering and windowing ----------------------------------------------

    def order_by(self, source: Select[Any], path: FieldPath, order: SortOrder) -> Select[Any]:
        source, clause = _order_clause(source, path, order)
        return source.order_by(None).order_by(clause)

    def then_by(self, source: Select[Any], path: FieldPath, order: SortOrder) -> Select[Any]:
        source, clause = _order_clause(source, path, order)
        return source.order_by(clause)

    def window(self, source: Select[Any], skip: int, take: int) -> Select[Any]:
        return source.offset(skip).limit(take)


def _attribute(owner: Any, member: MemberInfo) -> Any:
    attribute = getattr(owner, member.name, None)
    if attribute is None:
        raise MalformedExpressionError(
            f"'{getattr(owner, '__name__', owner)}' has no mapped attribute '{member.name}'"
        )
    return attribute


def _exists(
    attribute: Any, member: MemberInfo, criterion: Any = None
) -> ColumnElement[bool]:
    if member.collection:
        return cast("ColumnElement[bool]", attribute.any(criterion))
    return cast("ColumnElement[bool]", attribute.has(criterion))


def _order_clause(
    source: Select[Any], path: FieldPath, order: SortOrder
) -> tuple[Select[Any], Any]:
    owner: Any = path.entity_type
    for member in path.segments[:-1]:
        if not member.relationship:
            raise MalformedExpressionError(
                f"Cannot order through '{member.name}': not a relationship"
            )
        target = aliased(member.type)
        source = source.outerjoin(_attribute(owner, member).of_type(target))
        owner = target
    column = _attribute(owner, path.leaf)
    # Nulls sort first ascending and last descending on every backend.
    if order is SortOrder.DESCENDING:
        return source, column.desc().nulls_last()
    return source, column.asc().nulls_first()
