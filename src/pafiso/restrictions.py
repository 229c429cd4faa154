"""FieldRestrictions: allow/block lists for filterable and sortable fields."""

from __future__ import annotations

from dataclasses import dataclass, replace

from .exceptions import FieldNotAllowedError


@dataclass(frozen=True)
class FieldRestrictions:
    """
    Immutable allow/block lists, compared against field paths as supplied.

    No allow-list means every field is allowed; a blocked field is rejected
    even when it is also allowed.

    Usage::

        restrictions = (
            FieldRestrictions()
            .allow_filtering("name", "price")
            .block_sorting("internal_code")
        )
        restrictions.check_filter("name")  # ok
        restrictions.check_filter("cost")  # FieldNotAllowedError
    """

    allowed_filters: frozenset[str] | None = None
    blocked_filters: frozenset[str] = frozenset()
    allowed_sortings: frozenset[str] | None = None
    blocked_sortings: frozenset[str] = frozenset()

    # -- builders ------------------------------------------------------------

    def allow_filtering(self, *fields: str) -> FieldRestrictions:
        return replace(self, allowed_filters=(self.allowed_filters or frozenset()) | set(fields))

    def block_filtering(self, *fields: str) -> FieldRestrictions:
        return replace(self, blocked_filters=self.blocked_filters | set(fields))

    def allow_sorting(self, *fields: str) -> FieldRestrictions:
        return replace(self, allowed_sortings=(self.allowed_sortings or frozenset()) | set(fields))

    def block_sorting(self, *fields: str) -> FieldRestrictions:
        return replace(self, blocked_sortings=self.blocked_sortings | set(fields))

    # -- checks --------------------------------------------------------------

    def is_filter_allowed(self, field: str) -> bool:
        return _is_allowed(field, self.allowed_filters, self.blocked_filters)

    def is_sort_allowed(self, field: str) -> bool:
        return _is_allowed(field, self.allowed_sortings, self.blocked_sortings)

    def check_filter(self, field: str) -> None:
        """Raise FieldNotAllowedError if *field* may not be filtered on."""
        if not self.is_filter_allowed(field):
            raise FieldNotAllowedError(field, "filter")

    def check_sort(self, field: str) -> None:
        """Raise FieldNotAllowedError if *field* may not be sorted on."""
        if not self.is_sort_allowed(field):
            raise FieldNotAllowedError(field, "sort")


def _is_allowed(
    field: str, allowed: frozenset[str] | None, blocked: frozenset[str]
) -> bool:
    if field in blocked:
        return False
    return allowed is None or field in allowed
