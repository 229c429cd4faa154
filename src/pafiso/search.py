"""
Search parameters and the two-plan split.

``SearchParameters.apply`` folds every filter into the source (AND), keeps
that filtered source as the *count* plan, then orders and windows it into
the *entries* plan.  Both plans share the same filtered source object, so
the reported total always matches the filters used for the page.

Usage::

    params = (
        SearchParameters()
        .add_filters(Filter(field="price", operator="GreaterThan", value="10"))
        .add_sortings(Sorting(field="name"))
        .with_paging(Paging.from_paging(0, 20))
    )
    count_source, entries_source = params.apply(products)
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, NamedTuple

from pydantic import BaseModel, Field

from .backend import backend_for
from .filter import Filter
from .memory import MemoryQuery, to_paged_list
from .paged_list import PagedList
from .paging import Paging
from .predicates import ComparatorBuilder, PredicateBuilder
from .query_string import merge_indexed, split_indexed
from .sorting import Sorting

if TYPE_CHECKING:
    from .restrictions import FieldRestrictions
    from .settings import PafisoSettings

logger = logging.getLogger(__name__)


class SearchPlan(NamedTuple):
    """Two independently executable plans derived from one set of filters."""

    count_source: Any
    entries_source: Any


class SearchParameters(BaseModel):
    """Filters (AND-ed), ordered sort keys and optional paging."""

    filters: list[Filter] = Field(default_factory=list)
    sortings: list[Sorting] = Field(default_factory=list)
    paging: Paging | None = None

    # -- assembly ------------------------------------------------------------

    def add_filters(self, *filters: Filter) -> SearchParameters:
        for flt in filters:
            if flt not in self.filters:
                self.filters.append(flt)
        return self

    def add_sortings(self, *sortings: Sorting) -> SearchParameters:
        self.sortings.extend(sortings)
        return self

    def with_paging(self, paging: Paging | None) -> SearchParameters:
        self.paging = paging
        return self

    @property
    def distinct_sortings(self) -> list[Sorting]:
        """Sortings with repeated fields dropped, first occurrence wins."""
        seen: set[str] = set()
        result: list[Sorting] = []
        for sorting in self.sortings:
            if sorting.field not in seen:
                seen.add(sorting.field)
                result.append(sorting)
        return result

    def __add__(self, other: SearchParameters) -> SearchParameters:
        merged = SearchParameters(
            paging=self.paging if self.paging is not None else other.paging,
            sortings=[*self.sortings, *other.sortings],
        )
        return merged.add_filters(*self.filters, *other.filters)

    # -- application ---------------------------------------------------------

    def apply(
        self,
        source: Any,
        restrictions: FieldRestrictions | None = None,
        settings: PafisoSettings | None = None,
        *,
        element_type: Any = None,
    ) -> SearchPlan:
        """
        Build the count and entries plans for *source*.

        Raises:
            FieldNotAllowedError: A filter or sort field is restricted.
            UnknownFieldError: A field does not resolve on the element type.
            UnsupportedOperatorError: An operator does not fit its field.
            ValueCoercionError: A filter value cannot be coerced.
        """
        sortings = self.distinct_sortings
        if restrictions is not None:
            for flt in self.filters:
                for field in flt.fields:
                    restrictions.check_filter(field)
            for sorting in sortings:
                restrictions.check_sort(sorting.field)

        backend = backend_for(source)
        query = backend.wrap(source, element_type)
        entity_type = backend.element_type(query)

        predicates = PredicateBuilder(backend, settings)
        filtered = query
        for flt in self.filters:
            filtered = backend.where(filtered, predicates.build_filter(entity_type, flt))

        comparators = ComparatorBuilder(backend, settings)
        entries = filtered
        for index, sorting in enumerate(sortings):
            entries = comparators.build_sorting(entries, sorting, then=index > 0)

        if self.paging is not None:
            entries = backend.window(entries, self.paging.skip, self.paging.take)

        logger.debug(
            "Built search plan on %s: %d filter(s), %d sorting(s), paging=%s",
            type(backend).__name__,
            len(self.filters),
            len(sortings),
            self.paging,
        )
        return SearchPlan(filtered, entries)

    # -- flat encoding -------------------------------------------------------

    def to_dict(self) -> dict[str, str]:
        data = merge_indexed("sortings", (s.to_dict() for s in self.distinct_sortings))
        data.update(merge_indexed("filters", (f.to_dict() for f in self.filters)))
        if self.paging is not None:
            data.update(self.paging.to_dict())
        return data

    @classmethod
    def from_dict(cls, data: Mapping[str, str]) -> SearchParameters:
        """
        Decode ``sortings[i][prop|ord]``, ``filters[i][fields|op|val|case]``
        and ``skip``/``take``.

        Raises:
            InvalidParametersError: If an entry is incomplete or malformed.
        """
        groups = split_indexed(data)
        params = cls(
            paging=Paging.from_dict(data),
            sortings=[Sorting.from_dict(s) for s in groups.get("sortings", [])],
        )
        return params.add_filters(*(Filter.from_dict(f) for f in groups.get("filters", [])))

    def __str__(self) -> str:
        paging = str(self.paging) if self.paging is not None else "---"
        sortings = " -> ".join(str(s) for s in self.sortings)
        filters = " AND ".join(str(f) for f in self.filters)
        return f"Paging: {paging}; Sortings: {sortings}; Filters: {filters}"


def paginate(
    items: Any,
    params: SearchParameters,
    restrictions: FieldRestrictions | None = None,
    settings: PafisoSettings | None = None,
    *,
    element_type: Any = None,
) -> PagedList[Any]:
    """Apply *params* to an in-memory sequence and materialize the page."""
    if not isinstance(items, MemoryQuery):
        items = MemoryQuery(items, element_type)
    plan = params.apply(items, restrictions, settings, element_type=element_type)
    return to_paged_list(plan, params.paging)
