"""
Query backends.

A backend adapts one kind of source to the engine's expression API.  The
engine never branches on source types itself; it asks
:func:`backend_for` for the backend that accepts a source and drives it
through :class:`QueryBackend`.

``pafiso`` ships the in-memory backend; adapters register their own::

    from pafiso_sqlalchemy import register
    register()  # adds the SQLAlchemy ``Select`` backend
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, ClassVar, Generic, TypeVar

if TYPE_CHECKING:
    from .operators import FilterOperator, SortOrder
    from .resolver import FieldPath

logger = logging.getLogger(__name__)

S = TypeVar("S")


@dataclass(frozen=True)
class MatchOptions:
    """
    How a single leaf comparison treats strings.

    Attributes:
        ignore_case: Compare strings ignoring case.
        native_match: Backend hook lowering case-insensitive equality and
            substring tests; ``None`` folds both sides instead.
        collection: The leaf is a collection of scalars (``Contains`` tests
            membership).
    """

    ignore_case: bool = False
    native_match: Callable[[Any, str], Any] | None = None
    collection: bool = False


class QueryBackend(ABC, Generic[S]):
    """Strategy interface adapting a source type ``S`` to the engine."""

    #: Whether the registered case-insensitive match hook applies.
    supports_native_match: ClassVar[bool] = False

    @abstractmethod
    def accepts(self, source: Any) -> bool:
        """Return True if *source* is handled by this backend."""
        ...

    @abstractmethod
    def wrap(self, source: Any, element_type: Any = None) -> S:
        """Return *source* in the backend's composable form."""
        ...

    @abstractmethod
    def element_type(self, source: S) -> Any:
        """Entity type of the elements, ``None`` when unknown."""
        ...

    # -- predicates ----------------------------------------------------------

    @abstractmethod
    def predicate(
        self,
        path: FieldPath,
        operator: FilterOperator,
        value: Any,
        options: MatchOptions,
    ) -> Any:
        """Build the predicate ``path <operator> value``."""
        ...

    @abstractmethod
    def any_of(self, predicates: Sequence[Any]) -> Any:
        """Disjunction of *predicates*."""
        ...

    @abstractmethod
    def where(self, source: S, predicate: Any) -> S:
        """Restrict *source* to elements satisfying *predicate*."""
        ...

    # -- ordering and windowing ----------------------------------------------

    @abstractmethod
    def order_by(self, source: S, path: FieldPath, order: SortOrder) -> S:
        """Order *source* by *path*, replacing any previous order."""
        ...

    @abstractmethod
    def then_by(self, source: S, path: FieldPath, order: SortOrder) -> S:
        """Append a tie-break key to an ordered *source*."""
        ...

    @abstractmethod
    def window(self, source: S, skip: int, take: int) -> S:
        """Skip *skip* elements, then take at most *take*."""
        ...


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------

_backends: list[QueryBackend[Any]] = []


def register_backend(backend: QueryBackend[Any]) -> None:
    """
    Register *backend*.  Later registrations are consulted first; a backend
    of an already registered class replaces the previous instance.
    """
    _backends[:] = [b for b in _backends if type(b) is not type(backend)]
    _backends.append(backend)
    logger.info("Registered query backend %s", type(backend).__name__)


def unregister_backend(backend_type: type[QueryBackend[Any]]) -> None:
    _backends[:] = [b for b in _backends if type(b) is not backend_type]


def backend_for(source: Any) -> QueryBackend[Any]:
    """
    Return the backend accepting *source*.

    Raises:
        TypeError: If no registered backend accepts the source.
    """
    for backend in reversed(_backends):
        if backend.accepts(source):
            return backend
    raise TypeError(f"No query backend accepts sources of type {type(source).__name__}")
