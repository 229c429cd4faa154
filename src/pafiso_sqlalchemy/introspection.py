"""
Member inspector for SQLAlchemy mapped classes.

Column attributes become scalar members typed by the column's
``python_type``; ``ARRAY`` columns become collections of their item type.
Relationships become entity members (collections when ``uselist``).  An
external name override is read from ``info["alias"]`` on the column or
relationship::

    name: Mapped[str] = mapped_column(info={"alias": "title"})
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from sqlalchemy import ARRAY
from sqlalchemy import inspect as sa_inspect
from sqlalchemy.orm import ColumnProperty, Mapper, RelationshipProperty

from pafiso.introspection import MemberInfo

logger = logging.getLogger(__name__)


def _python_type(sql_type: Any) -> Any:
    try:
        return sql_type.python_type
    except NotImplementedError:
        return None


def _column_member(prop: ColumnProperty[Any]) -> MemberInfo:
    column = prop.columns[0]
    alias = prop.info.get("alias") or getattr(column, "info", {}).get("alias")
    nullable = bool(getattr(column, "nullable", True))
    if isinstance(column.type, ARRAY):
        return MemberInfo(
            prop.key,
            _python_type(column.type.item_type),
            alias,
            collection=True,
            nullable=nullable,
        )
    return MemberInfo(prop.key, _python_type(column.type), alias, nullable=nullable)


def _relationship_member(prop: RelationshipProperty[Any]) -> MemberInfo:
    return MemberInfo(
        prop.key,
        prop.mapper.class_,
        prop.info.get("alias"),
        collection=bool(prop.uselist),
        nullable=True,
        relationship=True,
    )


def inspect_mapped_class(entity_type: type) -> Mapping[str, MemberInfo] | None:
    """List the column and relationship members of a mapped class."""
    mapper = sa_inspect(entity_type, raiseerr=False)
    if not isinstance(mapper, Mapper):
        return None
    members: dict[str, MemberInfo] = {}
    for column_prop in mapper.column_attrs:
        members[column_prop.key] = _column_member(column_prop)
    for relationship in mapper.relationships:
        members[relationship.key] = _relationship_member(relationship)
    logger.debug("Inspected mapped class %s: %d member(s)", entity_type.__name__, len(members))
    return members
