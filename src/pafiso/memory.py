"""
In-memory backend.

``MemoryQuery`` is a deferred, immutable query over a snapshot of an
iterable: ``where``/``order_by``/``then_by``/``window`` return new queries
and nothing runs until the query is iterated or counted.

Usage::

    plan = params.apply(products)          # lists are wrapped automatically
    total = plan.count_source.count()
    page = plan.entries_source.to_list()
"""

from __future__ import annotations

import datetime
import logging
from collections.abc import Callable, Iterable, Iterator, Mapping, Sequence
from dataclasses import dataclass
from decimal import Decimal
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from .backend import MatchOptions, QueryBackend, register_backend
from .exceptions import MalformedExpressionError
from .introspection import MemberInfo
from .operators import FilterOperator, SortOrder
from .operators_memory import build_default_registry
from .paged_list import PagedList

if TYPE_CHECKING:
    from .evaluator import MemoryOperatorRegistry
    from .paging import Paging
    from .resolver import FieldPath
    from .search import SearchPlan

logger = logging.getLogger(__name__)

T = TypeVar("T")

Predicate = Callable[[Any], bool]
KeyFunc = Callable[[Any], Any]

_SEQUENCE_VALUES = (list, tuple, set, frozenset)


# ---------------------------------------------------------------------------
# Path walking
# ---------------------------------------------------------------------------


def read_member(obj: Any, name: str) -> Any:
    if isinstance(obj, Mapping):
        return obj.get(name)
    return getattr(obj, name, None)


def read_path(obj: Any, parts: Sequence[str]) -> Any:
    """Walk *parts*; a missing parent yields ``None``."""
    current = obj
    for part in parts:
        if current is None:
            return None
        current = read_member(current, part)
    return current


def match_path(
    obj: Any,
    segments: Sequence[MemberInfo],
    leaf_test: Callable[[Any], bool],
) -> bool:
    """
    Apply *leaf_test* at the end of *segments*.

    Collection segments match when any element matches.  A ``None`` parent
    never matches.
    """
    current = obj
    last = len(segments) - 1
    for index, member in enumerate(segments):
        value = read_member(current, member.name)
        if index == last:
            return leaf_test(value)
        if value is None:
            return False
        if member.collection or (member.type is None and isinstance(value, _SEQUENCE_VALUES)):
            rest = segments[index + 1 :]
            return any(
                item is not None and match_path(item, rest, leaf_test) for item in value
            )
        current = value
    return False


# ---------------------------------------------------------------------------
# Deferred steps
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class _FilterStep:
    predicate: Predicate

    def apply(self, items: list[Any]) -> list[Any]:
        return [item for item in items if self.predicate(item)]


def _sort_rank(value: Any) -> tuple[bool, str, Any]:
    """
    Sort rank of a key value: nulls, then numbers, then other values grouped
    by type name, so untyped rows with mixed types still sort.  Aware
    datetimes rank as naive UTC.
    """
    if value is None:
        return (False, "", 0)
    if isinstance(value, (int, float, Decimal)):
        return (True, "", value)
    if isinstance(value, datetime.datetime) and value.utcoffset() is not None:
        value = value.astimezone(datetime.timezone.utc).replace(tzinfo=None)
    return (True, type(value).__name__, value)


def _null_first(key: KeyFunc) -> KeyFunc:
    def wrapped(item: Any) -> tuple[bool, str, Any]:
        return _sort_rank(key(item))

    return wrapped


@dataclass(frozen=True)
class _OrderStep:
    keys: tuple[tuple[KeyFunc, bool], ...]

    def apply(self, items: list[Any]) -> list[Any]:
        # One stable pass per key, least significant first.
        ordered = list(items)
        for key, descending in reversed(self.keys):
            ordered.sort(key=_null_first(key), reverse=descending)
        return ordered


@dataclass(frozen=True)
class _WindowStep:
    skip: int
    take: int

    def apply(self, items: list[Any]) -> list[Any]:
        return items[self.skip : self.skip + self.take]


_Step = _FilterStep | _OrderStep | _WindowStep


def _infer_element_type(items: tuple[Any, ...]) -> Any:
    if not items:
        return None
    first = type(items[0])
    if issubclass(first, Mapping):
        return None
    if all(isinstance(item, first) for item in items):
        return first
    return None


class MemoryQuery(Generic[T]):
    """Deferred query over an in-memory snapshot."""

    __slots__ = ("_items", "_element_type", "_steps")

    def __init__(
        self,
        items: Iterable[T] = (),
        element_type: Any = None,
        steps: tuple[_Step, ...] = (),
    ) -> None:
        self._items: tuple[T, ...] = tuple(items)
        self._element_type = (
            element_type if element_type is not None else _infer_element_type(self._items)
        )
        self._steps = steps

    @property
    def element_type(self) -> Any:
        return self._element_type

    @property
    def is_ordered(self) -> bool:
        return bool(self._steps) and isinstance(self._steps[-1], _OrderStep)

    def _derive(self, step: _Step, *, replace_last: bool = False) -> MemoryQuery[T]:
        steps = self._steps[:-1] if replace_last else self._steps
        return MemoryQuery(self._items, self._element_type, (*steps, step))

    # -- composition ---------------------------------------------------------

    def where(self, predicate: Predicate) -> MemoryQuery[T]:
        return self._derive(_FilterStep(predicate))

    def order_by(self, key: KeyFunc, *, descending: bool = False) -> MemoryQuery[T]:
        """Order by *key*; an order applied directly before is replaced."""
        return self._derive(_OrderStep(((key, descending),)), replace_last=self.is_ordered)

    def then_by(self, key: KeyFunc, *, descending: bool = False) -> MemoryQuery[T]:
        if not self.is_ordered:
            raise MalformedExpressionError("then_by requires an ordered source")
        last = self._steps[-1]
        assert isinstance(last, _OrderStep)
        return self._derive(_OrderStep((*last.keys, (key, descending))), replace_last=True)

    def window(self, skip: int, take: int) -> MemoryQuery[T]:
        if skip < 0 or take < 0:
            raise MalformedExpressionError(f"Invalid window skip={skip} take={take}")
        return self._derive(_WindowStep(skip, take))

    # -- execution -----------------------------------------------------------

    def to_list(self) -> list[T]:
        items: list[Any] = list(self._items)
        for step in self._steps:
            items = step.apply(items)
        return items

    def count(self) -> int:
        return len(self.to_list())

    def first(self) -> T | None:
        items = self.to_list()
        return items[0] if items else None

    def __iter__(self) -> Iterator[T]:
        return iter(self.to_list())

    def __repr__(self) -> str:
        return (
            f"MemoryQuery(items={len(self._items)}, "
            f"element_type={getattr(self._element_type, '__name__', None)}, "
            f"steps={len(self._steps)})"
        )


# ---------------------------------------------------------------------------
# Backend
# ---------------------------------------------------------------------------


def _path_key(path: FieldPath) -> KeyFunc:
    parts = path.parts

    def key(item: Any) -> Any:
        return read_path(item, parts)

    return key


class MemoryBackend(QueryBackend[MemoryQuery[Any]]):
    """Evaluates filters and orderings directly against Python objects."""

    def __init__(self, registry: MemoryOperatorRegistry | None = None) -> None:
        self.registry = registry or build_default_registry()

    def accepts(self, source: Any) -> bool:
        if isinstance(source, MemoryQuery):
            return True
        return isinstance(source, Iterable) and not isinstance(source, (str, bytes, Mapping))

    def wrap(self, source: Any, element_type: Any = None) -> MemoryQuery[Any]:
        if isinstance(source, MemoryQuery):
            if element_type is None or element_type is source.element_type:
                return source
            return MemoryQuery(source._items, element_type, source._steps)
        return MemoryQuery(source, element_type)

    def element_type(self, source: MemoryQuery[Any]) -> Any:
        return source.element_type

    def predicate(
        self,
        path: FieldPath,
        operator: FilterOperator,
        value: Any,
        options: MatchOptions,
    ) -> Predicate:
        op = self.registry.require(operator)
        segments = path.segments

        def leaf_test(field_value: Any) -> bool:
            return op.evaluate(field_value, value, options)

        def matches(item: Any) -> bool:
            return match_path(item, segments, leaf_test)

        return matches

    def any_of(self, predicates: Sequence[Predicate]) -> Predicate:
        if not predicates:
            raise MalformedExpressionError("Cannot combine an empty set of predicates")
        if len(predicates) == 1:
            return predicates[0]
        alternatives = tuple(predicates)
        return lambda item: any(p(item) for p in alternatives)

    def where(self, source: MemoryQuery[Any], predicate: Predicate) -> MemoryQuery[Any]:
        return source.where(predicate)

    def order_by(
        self, source: MemoryQuery[Any], path: FieldPath, order: SortOrder
    ) -> MemoryQuery[Any]:
        return source.order_by(_path_key(path), descending=order is SortOrder.DESCENDING)

    def then_by(
        self, source: MemoryQuery[Any], path: FieldPath, order: SortOrder
    ) -> MemoryQuery[Any]:
        return source.then_by(_path_key(path), descending=order is SortOrder.DESCENDING)

    def window(self, source: MemoryQuery[Any], skip: int, take: int) -> MemoryQuery[Any]:
        return source.window(skip, take)


def to_paged_list(plan: SearchPlan, paging: Paging | None = None) -> PagedList[Any]:
    """Execute an in-memory :class:`SearchPlan` into a :class:`PagedList`."""
    count_source, entries_source = plan
    total = count_source.count()
    entries = entries_source.to_list()
    logger.debug("Materialized page: %d of %d entries", len(entries), total)
    return PagedList.create(total, entries, paging)


register_backend(MemoryBackend())
