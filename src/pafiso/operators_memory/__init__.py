"""
In-memory operator implementations.

Provides concrete MemoryOperator subclasses for each FilterOperator
and a factory function to create registries.

Usage::

    from pafiso.operators_memory import build_default_registry

    registry = build_default_registry()
    result = registry.evaluate(FilterOperator.EQUALS, actual, expected)
"""

from __future__ import annotations

from ..evaluator import MemoryOperatorRegistry
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

__all__ = [
    "ContainsOperator",
    "EqualsOperator",
    "GreaterThanOperator",
    "GreaterThanOrEqualsOperator",
    "LessThanOperator",
    "LessThanOrEqualsOperator",
    "NotContainsOperator",
    "NotEqualsOperator",
    "NotNullOperator",
    "NullOperator",
    "build_default_registry",
]


def build_default_registry() -> MemoryOperatorRegistry:
    """Create a registry with every built-in in-memory operator."""
    registry = MemoryOperatorRegistry()
    registry.register_all(
        EqualsOperator(),
        NotEqualsOperator(),
        GreaterThanOperator(),
        LessThanOperator(),
        GreaterThanOrEqualsOperator(),
        LessThanOrEqualsOperator(),
        ContainsOperator(),
        NotContainsOperator(),
        NullOperator(),
        NotNullOperator(),
    )
    return registry
