"""
Member introspection for entity types.

An *inspector* lists the members an entity type declares.  Inspectors are
tried newest-first; the first one returning a mapping wins.  Built in:

- pydantic models (``model_fields`` and computed fields)
- dataclasses (``metadata["alias"]`` overrides)
- any other class with type annotations, including typed ``@property`` getters

Adapters register their own inspectors, e.g. ``pafiso_sqlalchemy`` adds one
for mapped classes.
"""

from __future__ import annotations

import collections.abc
import dataclasses
import datetime
import inspect
import logging
import types
from collections.abc import Callable, Mapping
from dataclasses import dataclass, replace
from decimal import Decimal
from enum import Enum
from functools import lru_cache
from typing import (
    Annotated,
    Any,
    ClassVar,
    Literal,
    Union,
    get_args,
    get_origin,
    get_type_hints,
)
from uuid import UUID

from pydantic import BaseModel

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FieldAlias:
    """
    ``Annotated`` marker declaring the external name of an attribute.

    Usage::

        @dataclass
        class Order:
            order_id: Annotated[int, FieldAlias("id")]
    """

    name: str


@dataclass(frozen=True)
class MemberInfo:
    """
    One declared member of an entity type.

    Attributes:
        name: Declared attribute name.
        type: Scalar or entity type of the value, the item type for
            collections; ``None`` when unknown.
        alias: External name override.
        collection: The value is a collection of ``type``.
        nullable: The value may be ``None``.
        relationship: Set by ORM inspectors for relationship attributes.
    """

    name: str
    type: Any = None
    alias: str | None = None
    collection: bool = False
    nullable: bool = False
    relationship: bool = False


Inspector = Callable[[type], "Mapping[str, MemberInfo] | None"]

_COLLECTION_ORIGINS = frozenset(
    {
        list,
        tuple,
        set,
        frozenset,
        collections.abc.Sequence,
        collections.abc.MutableSequence,
        collections.abc.Set,
        collections.abc.MutableSet,
        collections.abc.Collection,
        collections.abc.Iterable,
    }
)

_SCALAR_TYPES = frozenset({str, bytes, int, float, bool, complex, object, type(None)})


# ---------------------------------------------------------------------------
# Annotation analysis
# ---------------------------------------------------------------------------


def member_from_annotation(name: str, annotation: Any) -> MemberInfo:
    """Describe a member from its type annotation."""
    alias: str | None = None
    nullable = False

    if get_origin(annotation) is Annotated:
        annotation, *extras = get_args(annotation)
        alias = next((e.name for e in extras if isinstance(e, FieldAlias)), None)

    origin = get_origin(annotation)
    if origin is Union or origin is types.UnionType:
        args = get_args(annotation)
        non_null = [a for a in args if a is not type(None)]
        nullable = len(non_null) != len(args)
        if len(non_null) != 1:
            return MemberInfo(name, None, alias, nullable=nullable)
        inner = member_from_annotation(name, non_null[0])
        return replace(inner, alias=inner.alias or alias, nullable=True)

    if origin is Literal:
        literals = get_args(annotation)
        return MemberInfo(name, type(literals[0]) if literals else None, alias)

    if origin in _COLLECTION_ORIGINS:
        args = [a for a in get_args(annotation) if a is not Ellipsis]
        item = member_from_annotation(name, args[0]) if args else None
        item_type = item.type if item is not None and not item.collection else None
        return MemberInfo(name, item_type, alias, collection=True, nullable=nullable)

    if annotation in (list, tuple, set, frozenset):
        return MemberInfo(name, None, alias, collection=True, nullable=nullable)
    if annotation is Any or not isinstance(annotation, type) or origin is not None:
        return MemberInfo(name, None, alias, nullable=nullable)
    return MemberInfo(name, annotation, alias, nullable=nullable)


def _type_hints(entity_type: type) -> dict[str, Any]:
    try:
        return get_type_hints(entity_type, include_extras=True)
    except (NameError, TypeError):
        # Unresolvable forward references: keep the names, drop the types.
        logger.debug("Could not evaluate annotations of %r", entity_type)
        return dict.fromkeys(inspect.get_annotations(entity_type))


def _property_members(entity_type: type) -> dict[str, MemberInfo]:
    members: dict[str, MemberInfo] = {}
    for name, prop in inspect.getmembers(entity_type, lambda m: isinstance(m, property)):
        if name.startswith("_") or prop.fget is None:
            continue
        try:
            returns = get_type_hints(prop.fget, include_extras=True).get("return")
        except (NameError, TypeError):
            returns = None
        members[name] = member_from_annotation(name, returns)
    return members


def _public_hints(entity_type: type) -> dict[str, Any]:
    return {
        name: hint
        for name, hint in _type_hints(entity_type).items()
        if not name.startswith("_") and get_origin(hint) is not ClassVar
    }


# ---------------------------------------------------------------------------
# Built-in inspectors
# ---------------------------------------------------------------------------


def inspect_pydantic_model(entity_type: type) -> Mapping[str, MemberInfo] | None:
    if not issubclass(entity_type, BaseModel):
        return None
    members: dict[str, MemberInfo] = {}
    for name, info in entity_type.model_fields.items():
        member = member_from_annotation(name, info.annotation)
        alias = info.serialization_alias or info.alias
        if alias is None and isinstance(info.validation_alias, str):
            alias = info.validation_alias
        if alias and alias != name:
            member = replace(member, alias=alias)
        members[name] = member
    for name, computed in entity_type.model_computed_fields.items():
        member = member_from_annotation(name, computed.return_type)
        if computed.alias and computed.alias != name:
            member = replace(member, alias=computed.alias)
        members[name] = member
    return members


def inspect_dataclass(entity_type: type) -> Mapping[str, MemberInfo] | None:
    if not dataclasses.is_dataclass(entity_type):
        return None
    hints = _type_hints(entity_type)
    members = _property_members(entity_type)
    for f in dataclasses.fields(entity_type):
        member = member_from_annotation(f.name, hints.get(f.name, f.type))
        alias = f.metadata.get("alias")
        if alias:
            member = replace(member, alias=alias)
        members[f.name] = member
    return members


def inspect_annotated_class(entity_type: type) -> Mapping[str, MemberInfo] | None:
    members = _property_members(entity_type)
    for name, hint in _public_hints(entity_type).items():
        members[name] = member_from_annotation(name, hint)
    return members or None


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------

_inspectors: list[Inspector] = [
    inspect_pydantic_model,
    inspect_dataclass,
    inspect_annotated_class,
]
_generation = 0


def register_inspector(inspector: Inspector) -> None:
    """Register *inspector* ahead of the existing ones (idempotent)."""
    global _generation
    if inspector in _inspectors:
        _inspectors.remove(inspector)
    _inspectors.insert(0, inspector)
    _generation += 1
    get_members.cache_clear()
    logger.debug("Registered member inspector %r", inspector)


def unregister_inspector(inspector: Inspector) -> None:
    global _generation
    if inspector in _inspectors:
        _inspectors.remove(inspector)
        _generation += 1
        get_members.cache_clear()


def generation() -> int:
    """Counter bumped whenever the inspector chain changes."""
    return _generation


@lru_cache(maxsize=512)
def get_members(entity_type: Any) -> Mapping[str, MemberInfo] | None:
    """
    Return the members declared by *entity_type*.

    ``None`` means the type is opaque (scalars, enums, mappings, or classes
    without annotations) and paths through it are resolved untyped.
    """
    if not isinstance(entity_type, type) or is_scalar_type(entity_type):
        return None
    if issubclass(entity_type, Mapping):
        return None
    for inspector in _inspectors:
        members = inspector(entity_type)
        if members is not None:
            return types.MappingProxyType(dict(members))
    return None


def is_entity_type(value_type: Any) -> bool:
    return get_members(value_type) is not None


def is_scalar_type(value_type: Any) -> bool:
    """True for leaf value types that cannot be traversed into."""
    if not isinstance(value_type, type):
        return False
    return value_type in _SCALAR_TYPES or issubclass(
        value_type,
        (str, int, float, Decimal, datetime.date, datetime.time, datetime.timedelta, UUID, Enum),
    )
