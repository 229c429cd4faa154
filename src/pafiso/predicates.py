"""
Predicate and comparator builders.

Both builders are backend-agnostic: they validate a resolved
:class:`~pafiso.resolver.FieldPath` against the requested operation,
coerce the raw value and hand the result to the source's
:class:`~pafiso.backend.QueryBackend`.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from .backend import MatchOptions, QueryBackend
from .coercion import coerce_value
from .exceptions import UnsupportedOperatorError, ValueCoercionError
from .hooks import get_case_insensitive_match_builder
from .operators import FilterOperator, SortOrder
from .resolver import FieldPath, resolve_field_path
from .settings import PafisoSettings, resolve_settings

if TYPE_CHECKING:
    from .filter import Filter
    from .sorting import Sorting

logger = logging.getLogger(__name__)


def normalize_operator(operator: FilterOperator, raw_value: Any) -> FilterOperator:
    """``Equals(None)`` means "is null", ``NotEquals(None)`` means "is not null"."""
    if raw_value is None:
        if operator is FilterOperator.EQUALS:
            return FilterOperator.NULL
        if operator is FilterOperator.NOT_EQUALS:
            return FilterOperator.NOT_NULL
    return operator


class PredicateBuilder:
    """
    Builds backend predicates from ``(path, operator, raw value)`` triples.

    Usage::

        builder = PredicateBuilder(backend, settings)
        path = resolve_field_path(Product, "price")
        predicate = builder.build(path, FilterOperator.GREATER_THAN, "10")
    """

    def __init__(
        self,
        backend: QueryBackend[Any],
        settings: PafisoSettings | None = None,
    ) -> None:
        self.backend = backend
        self.settings = resolve_settings(settings)

    def build(
        self,
        path: FieldPath,
        operator: FilterOperator | str,
        raw_value: Any,
        *,
        case_sensitive: bool = False,
    ) -> Any:
        """
        Build the predicate for one field.

        Raises:
            UnsupportedOperatorError: The operator is unknown or invalid for
                the field's type.
            ValueCoercionError: The value is missing or cannot be coerced.
        """
        operator = normalize_operator(FilterOperator.parse(operator), raw_value)

        if operator.is_null_check:
            value = None
        else:
            if raw_value is None:
                raise ValueCoercionError(
                    None,
                    path.value_type,
                    field=path.field,
                    reason=f"{operator.value} requires a value",
                )
            self._check_capability(path, operator)
            value = coerce_value(raw_value, self._target_type(path, operator), field=path.field)

        return self.backend.predicate(
            path, operator, value, self._options(path, value, case_sensitive)
        )

    def build_filter(self, entity_type: Any, flt: Filter) -> Any:
        """Resolve every field of *flt* and OR the per-field predicates."""
        predicates = [
            self.build(
                resolve_field_path(entity_type, field, self.settings),
                flt.operator,
                flt.value,
                case_sensitive=flt.case_sensitive,
            )
            for field in flt.fields
        ]
        return self.backend.any_of(predicates)

    # -- helpers -------------------------------------------------------------

    @staticmethod
    def _check_capability(path: FieldPath, operator: FilterOperator) -> None:
        if operator.is_substring_match and not path.supports_substring_match:
            raise UnsupportedOperatorError(
                operator.value,
                field=path.field,
                reason="requires a string or collection field",
            )
        if operator.is_comparison and not path.supports_comparison:
            raise UnsupportedOperatorError(
                operator.value,
                field=path.field,
                reason="requires a scalar field",
            )

    @staticmethod
    def _target_type(path: FieldPath, operator: FilterOperator) -> Any:
        # Untyped substring tests match text, never inferred numbers.
        if operator.is_substring_match and path.value_type is None and not path.leaf.collection:
            return str
        return path.value_type

    def _options(self, path: FieldPath, value: Any, case_sensitive: bool) -> MatchOptions:
        ignore_case = (
            isinstance(value, str) and not case_sensitive and self.settings.ignore_case
        )
        native_match = None
        if (
            ignore_case
            and self.settings.use_native_case_insensitive_match
            and self.backend.supports_native_match
        ):
            native_match = get_case_insensitive_match_builder()
        return MatchOptions(
            ignore_case=ignore_case,
            native_match=native_match,
            collection=path.leaf.collection,
        )


class ComparatorBuilder:
    """Builds primary and secondary orderings over resolved paths."""

    def __init__(
        self,
        backend: QueryBackend[Any],
        settings: PafisoSettings | None = None,
    ) -> None:
        self.backend = backend
        self.settings = resolve_settings(settings)

    def build(self, source: Any, path: FieldPath, order: SortOrder) -> Any:
        self._check_orderable(path, order)
        return self.backend.order_by(source, path, order)

    def build_then(self, source: Any, path: FieldPath, order: SortOrder) -> Any:
        self._check_orderable(path, order)
        return self.backend.then_by(source, path, order)

    def build_sorting(self, source: Any, sorting: Sorting, *, then: bool = False) -> Any:
        path = resolve_field_path(
            self.backend.element_type(source), sorting.field, self.settings
        )
        if then:
            return self.build_then(source, path, sorting.order)
        return self.build(source, path, sorting.order)

    @staticmethod
    def _check_orderable(path: FieldPath, order: SortOrder) -> None:
        if not path.supports_ordering:
            raise UnsupportedOperatorError(
                order.value,
                field=path.field,
                reason="cannot order by a collection or entity field",
            )
