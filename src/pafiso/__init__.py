"""Paging, filtering and sorting for in-memory sequences and query builders."""

from .backend import MatchOptions, QueryBackend, backend_for, register_backend, unregister_backend
from .coercion import coerce_value, escape_like_pattern, infer_value, parse_interval
from .evaluator import MemoryOperator, MemoryOperatorRegistry
from .exceptions import (
    FieldNotAllowedError,
    InvalidParametersError,
    MalformedExpressionError,
    PafisoError,
    UnknownFieldError,
    UnsupportedOperatorError,
    ValueCoercionError,
)
from .filter import Filter
from .hooks import (
    clear_case_insensitive_match_builder,
    get_case_insensitive_match_builder,
    register_case_insensitive_match_builder,
)
from .introspection import FieldAlias, MemberInfo, get_members, register_inspector, unregister_inspector
from .mapping import FieldMapper
from .memory import MemoryBackend, MemoryQuery, to_paged_list
from .naming import (
    CAMEL_CASE,
    KEBAB_CASE_LOWER,
    KEBAB_CASE_UPPER,
    PASCAL_CASE,
    SNAKE_CASE_LOWER,
    SNAKE_CASE_UPPER,
    CamelCaseNamingPolicy,
    NamingPolicy,
    PascalCaseNamingPolicy,
    SeparatedNamingPolicy,
)
from .operators import FilterOperator, SortOrder
from .operators_memory import build_default_registry
from .paged_list import PagedList
from .paging import Paging
from .predicates import ComparatorBuilder, PredicateBuilder
from .resolver import FieldPath, resolve_field_path
from .restrictions import FieldRestrictions
from .search import SearchParameters, SearchPlan, paginate
from .settings import (
    PafisoSettings,
    StringComparison,
    get_default_settings,
    set_default_settings,
)
from .sorting import Sorting

__all__ = [
    # Core types
    "FilterOperator",
    "SortOrder",
    "Filter",
    "Sorting",
    "Paging",
    "SearchParameters",
    "SearchPlan",
    "PagedList",
    "FieldRestrictions",
    "FieldMapper",
    # Execution
    "paginate",
    "to_paged_list",
    "MemoryQuery",
    # Settings and naming
    "PafisoSettings",
    "StringComparison",
    "get_default_settings",
    "set_default_settings",
    "NamingPolicy",
    "CamelCaseNamingPolicy",
    "PascalCaseNamingPolicy",
    "SeparatedNamingPolicy",
    "CAMEL_CASE",
    "PASCAL_CASE",
    "SNAKE_CASE_LOWER",
    "SNAKE_CASE_UPPER",
    "KEBAB_CASE_LOWER",
    "KEBAB_CASE_UPPER",
    # Field resolution
    "FieldAlias",
    "FieldPath",
    "MemberInfo",
    "get_members",
    "register_inspector",
    "unregister_inspector",
    "resolve_field_path",
    # Expression building
    "PredicateBuilder",
    "ComparatorBuilder",
    # Backends / strategy
    "QueryBackend",
    "MatchOptions",
    "MemoryBackend",
    "MemoryOperator",
    "MemoryOperatorRegistry",
    "build_default_registry",
    "backend_for",
    "register_backend",
    "unregister_backend",
    # Hooks
    "register_case_insensitive_match_builder",
    "get_case_insensitive_match_builder",
    "clear_case_insensitive_match_builder",
    # Exceptions
    "PafisoError",
    "UnknownFieldError",
    "FieldNotAllowedError",
    "ValueCoercionError",
    "UnsupportedOperatorError",
    "MalformedExpressionError",
    "InvalidParametersError",
    # Utilities
    "coerce_value",
    "infer_value",
    "escape_like_pattern",
    "parse_interval",
]
