from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator, Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, TypeVar, overload

if TYPE_CHECKING:
    from .paging import Paging

T = TypeVar("T")
U = TypeVar("U")


@dataclass(frozen=True)
class PagedList(Sequence[T]):
    """
    One materialized page of results.

    Behaves as a read-only sequence of its entries; ``total_entries`` is the
    number of elements matching the filters before windowing.  ``page`` is
    0-based.  Without paging the page holds every entry and ``page_size``
    equals their number.
    """

    total_entries: int
    entries: tuple[T, ...] = ()
    page: int = 0
    page_size: int = 0

    @classmethod
    def create(
        cls,
        total_entries: int,
        entries: Iterable[T],
        paging: Paging | None = None,
    ) -> PagedList[T]:
        items = tuple(entries)
        if paging is None:
            return cls(total_entries, items, page=0, page_size=len(items))
        return cls(total_entries, items, page=paging.page, page_size=paging.page_size)

    @property
    def page_count(self) -> int:
        if self.page_size <= 0:
            return 1 if self.total_entries else 0
        return -(-self.total_entries // self.page_size)

    @property
    def has_next_page(self) -> bool:
        return self.page + 1 < self.page_count

    @property
    def has_previous_page(self) -> bool:
        return self.page > 0

    def map(self, func: Callable[[T], U]) -> PagedList[U]:
        """Return a page with *func* applied to every entry."""
        return PagedList(
            self.total_entries,
            tuple(func(e) for e in self.entries),
            page=self.page,
            page_size=self.page_size,
        )

    @overload
    def __getitem__(self, index: int) -> T: ...

    @overload
    def __getitem__(self, index: slice) -> Sequence[T]: ...

    def __getitem__(self, index: Any) -> Any:
        return self.entries[index]

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[T]:
        return iter(self.entries)
