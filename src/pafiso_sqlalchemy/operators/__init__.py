"""
SQLAlchemy operator implementations and default registry.

Usage::

    from pafiso_sqlalchemy.operators import build_default_sqla_registry

    registry = build_default_sqla_registry()
    expr = registry.apply(FilterOperator.EQUALS, column, value)
"""

from __future__ import annotations

from ..strategy import SQLAlchemyOperatorRegistry
from .null import NotNullOperator, NullOperator
from .standard import (
    EqualsOperator,
    GreaterThanOperator,
    GreaterThanOrEqualsOperator,
    LessThanOperator,
    LessThanOrEqualsOperator,
    NotEqualsOperator,
)
from .string import ContainsOperator, NotContainsOperator


def build_default_sqla_registry() -> SQLAlchemyOperatorRegistry:
    """Create a registry with all built-in SQLAlchemy operators."""
    registry = SQLAlchemyOperatorRegistry()
    registry.register_all(
        # Standard comparison
        EqualsOperator(),
        NotEqualsOperator(),
        GreaterThanOperator(),
        LessThanOperator(),
        GreaterThanOrEqualsOperator(),
        LessThanOrEqualsOperator(),
        # String / membership
        ContainsOperator(),
        NotContainsOperator(),
        # Null
        NullOperator(),
        NotNullOperator(),
    )
    return registry

__all__ = [
    "build_default_sqla_registry",
    "SQLAlchemyOperatorRegistry",
]
