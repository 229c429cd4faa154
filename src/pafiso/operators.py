from __future__ import annotations

from enum import Enum

from .exceptions import InvalidParametersError, UnsupportedOperatorError


class FilterOperator(str, Enum):
    """Supported filter operators."""

    # Standard comparison
    EQUALS = "Equals"
    NOT_EQUALS = "NotEquals"
    GREATER_THAN = "GreaterThan"
    LESS_THAN = "LessThan"
    GREATER_THAN_OR_EQUALS = "GreaterThanOrEquals"
    LESS_THAN_OR_EQUALS = "LessThanOrEquals"

    # Substring / membership
    CONTAINS = "Contains"
    NOT_CONTAINS = "NotContains"

    # Null checks
    NULL = "Null"
    NOT_NULL = "NotNull"

    @property
    def symbol(self) -> str:
        """Human readable operator token, e.g. ``>=`` or ``is null``."""
        return _SYMBOLS[self]

    @property
    def is_null_check(self) -> bool:
        return self in (FilterOperator.NULL, FilterOperator.NOT_NULL)

    @property
    def is_comparison(self) -> bool:
        return self in _COMPARISONS

    @property
    def is_substring_match(self) -> bool:
        return self in (FilterOperator.CONTAINS, FilterOperator.NOT_CONTAINS)

    @classmethod
    def parse(cls, text: str | FilterOperator) -> FilterOperator:
        """
        Parse an operator from its label, member name or symbol.

        Raises:
            UnsupportedOperatorError: If *text* names no operator.
        """
        if isinstance(text, FilterOperator):
            return text
        token = str(text).strip()
        for member in cls:
            if token == member.value:
                return member
        lowered = token.lower()
        for member in cls:
            if lowered in (member.name.lower(), member.value.lower(), member.symbol):
                return member
        raise UnsupportedOperatorError(
            str(text), valid_operators=[m.value for m in cls]
        )


class SortOrder(str, Enum):
    ASCENDING = "Ascending"
    DESCENDING = "Descending"

    @classmethod
    def parse(cls, text: str | SortOrder) -> SortOrder:
        if isinstance(text, SortOrder):
            return text
        token = str(text).strip().lower()
        if token in ("ascending", "asc", "+"):
            return cls.ASCENDING
        if token in ("descending", "desc", "-"):
            return cls.DESCENDING
        raise InvalidParametersError(f"Unknown sort order: {text!r}")


_SYMBOLS: dict[FilterOperator, str] = {
    FilterOperator.EQUALS: "==",
    FilterOperator.NOT_EQUALS: "!=",
    FilterOperator.GREATER_THAN: ">",
    FilterOperator.LESS_THAN: "<",
    FilterOperator.GREATER_THAN_OR_EQUALS: ">=",
    FilterOperator.LESS_THAN_OR_EQUALS: "<=",
    FilterOperator.CONTAINS: "contains",
    FilterOperator.NOT_CONTAINS: "not contains",
    FilterOperator.NULL: "is null",
    FilterOperator.NOT_NULL: "is not null",
}

_COMPARISONS = frozenset(
    {
        FilterOperator.EQUALS,
        FilterOperator.NOT_EQUALS,
        FilterOperator.GREATER_THAN,
        FilterOperator.LESS_THAN,
        FilterOperator.GREATER_THAN_OR_EQUALS,
        FilterOperator.LESS_THAN_OR_EQUALS,
    }
)
