"""
Field-path resolution.

Turns a dotted, client-supplied field path into a :class:`FieldPath`, the
handle every expression builder consumes.  Each segment is matched against
the members the current type declares:

1. the member's alias, when ``use_field_name_overrides`` is on
2. the settings' naming policy applied to the declared name
3. the declared name itself, then case-insensitively

Typed resolutions are memoized per ``(entity_type, field_path, settings)``.
Paths over opaque types (``None``, mappings, unannotated classes) resolve
*untyped*: segments are kept verbatim and the leaf type is unknown.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from functools import lru_cache
from typing import Any

from . import introspection
from .exceptions import UnknownFieldError
from .introspection import MemberInfo, get_members, is_entity_type, is_scalar_type
from .settings import PafisoSettings, resolve_settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FieldPath:
    """
    A resolved field path.

    Attributes:
        field: The path as the client supplied it.
        entity_type: Root entity type, ``None`` for untyped sources.
        segments: One :class:`MemberInfo` per path segment, root first.
    """

    field: str
    entity_type: Any
    segments: tuple[MemberInfo, ...]

    @property
    def parts(self) -> tuple[str, ...]:
        """Declared attribute names, root first."""
        return tuple(m.name for m in self.segments)

    @property
    def dotted(self) -> str:
        return ".".join(self.parts)

    @property
    def leaf(self) -> MemberInfo:
        return self.segments[-1]

    @property
    def value_type(self) -> Any:
        """Type raw values are coerced to (the item type for collections)."""
        return self.leaf.type

    @property
    def is_typed(self) -> bool:
        return self.leaf.type is not None

    @property
    def leaf_is_entity(self) -> bool:
        return is_entity_type(self.leaf.type)

    @property
    def traverses_collection(self) -> bool:
        return any(m.collection for m in self.segments[:-1])

    # -- capabilities --------------------------------------------------------

    @property
    def supports_null_check(self) -> bool:
        return True

    @property
    def supports_comparison(self) -> bool:
        return not self.leaf.collection and not self.leaf_is_entity

    @property
    def supports_substring_match(self) -> bool:
        if self.leaf_is_entity:
            return False
        if self.leaf.collection or self.leaf.type is None:
            return True
        leaf_type = self.leaf.type
        return isinstance(leaf_type, type) and issubclass(leaf_type, str)

    @property
    def supports_ordering(self) -> bool:
        return self.supports_comparison and not self.traverses_collection


def resolve_field_path(
    entity_type: Any,
    field_path: str,
    settings: PafisoSettings | None = None,
) -> FieldPath:
    """
    Resolve *field_path* against *entity_type*.

    Raises:
        UnknownFieldError: If a segment does not name a member.
    """
    settings = resolve_settings(settings)
    if entity_type is None or not is_entity_type(entity_type):
        return _untyped_path(entity_type, field_path)
    return _resolve_typed(entity_type, field_path, settings, introspection.generation())


def clear_cache() -> None:
    _resolve_typed.cache_clear()


def _untyped_path(entity_type: Any, field_path: str) -> FieldPath:
    parts = field_path.split(".")
    for part in parts:
        if not part:
            raise UnknownFieldError(part, _type_name(entity_type), [], full_path=field_path)
    return FieldPath(field_path, None, tuple(MemberInfo(p) for p in parts))


@lru_cache(maxsize=1024)
def _resolve_typed(
    entity_type: type,
    field_path: str,
    settings: PafisoSettings,
    _generation: int,
) -> FieldPath:
    segments: list[MemberInfo] = []
    current: Any = entity_type
    for part in field_path.split("."):
        members = get_members(current) if current is not None else None
        if members is None:
            if current is not None and (is_scalar_type(current) or not part):
                raise UnknownFieldError(part, _type_name(current), [], full_path=field_path)
            # Opaque value (mapping, Any, unannotated object): continue untyped.
            segments.append(MemberInfo(part))
            current = None
            continue

        member = match_member(members, part, settings)
        if member is None:
            logger.debug("Field %r does not resolve on %r", field_path, entity_type)
            raise UnknownFieldError(
                part,
                _type_name(current),
                external_names(members, settings),
                full_path=field_path,
            )
        segments.append(member)
        current = member.type
    return FieldPath(field_path, entity_type, tuple(segments))


def match_member(
    members: Mapping[str, MemberInfo],
    incoming: str,
    settings: PafisoSettings,
) -> MemberInfo | None:
    """Find the member an incoming name refers to, or ``None``."""
    if not incoming:
        return None
    lowered = incoming.lower()

    if settings.use_field_name_overrides:
        for member in members.values():
            if member.alias and member.alias.lower() == lowered:
                return member

    policy = settings.naming_policy
    if policy is not None:
        for member in members.values():
            if policy.convert_name(member.name).lower() == lowered:
                return member

    exact = members.get(incoming)
    if exact is not None:
        return exact
    for member in members.values():
        if member.name.lower() == lowered:
            return member
    return None


def external_names(
    members: Mapping[str, MemberInfo], settings: PafisoSettings
) -> list[str]:
    """Names a client is expected to use for *members*."""
    names: list[str] = []
    for member in members.values():
        if settings.use_field_name_overrides and member.alias:
            names.append(member.alias)
        elif settings.naming_policy is not None:
            names.append(settings.naming_policy.convert_name(member.name))
        else:
            names.append(member.name)
    return names


def _type_name(value_type: Any) -> str:
    if value_type is None:
        return "<untyped>"
    return getattr(value_type, "__name__", str(value_type))
