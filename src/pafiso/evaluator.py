"""
In-memory operator evaluation strategy.

Provides the MemoryOperator protocol and a registry mapping
FilterOperator → evaluation strategy.

New operators are added by subclassing MemoryOperator and
registering via ``register()``.
"""

from __future__ import annotations

import datetime
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

from .backend import MatchOptions
from .exceptions import UnsupportedOperatorError

if TYPE_CHECKING:
    from .operators import FilterOperator


def fold_case(value: Any, options: MatchOptions) -> Any:
    """Case-fold strings when the comparison ignores case."""
    if options.ignore_case and isinstance(value, str):
        return value.casefold()
    return value


def align_datetimes(field_value: Any, condition_value: Any) -> tuple[Any, Any]:
    """
    Bring a condition datetime to the awareness of the field datetime.

    Naive datetimes are read as UTC, which is how coercion normalizes aware
    input.  Other values pass through unchanged.
    """
    if not (
        isinstance(field_value, datetime.datetime)
        and isinstance(condition_value, datetime.datetime)
    ):
        return field_value, condition_value
    field_aware = field_value.utcoffset() is not None
    condition_aware = condition_value.utcoffset() is not None
    if field_aware and not condition_aware:
        condition_value = condition_value.replace(tzinfo=datetime.timezone.utc)
    elif condition_aware and not field_aware:
        condition_value = condition_value.astimezone(datetime.timezone.utc).replace(tzinfo=None)
    return field_value, condition_value


class MemoryOperator(ABC):
    """
    Strategy interface for in-memory operator evaluation.

    Each operator is an isolated class with a single ``evaluate`` method.
    """

    @property
    @abstractmethod
    def name(self) -> FilterOperator:
        """The operator this strategy handles."""
        ...

    @abstractmethod
    def evaluate(
        self,
        field_value: Any,
        condition_value: Any,
        options: MatchOptions,
    ) -> bool:
        """
        Evaluate the operator against concrete values.

        Args:
            field_value: The actual value resolved from the candidate object.
            condition_value: The coerced filter value.
            options: String matching options for this comparison.

        Returns:
            True if the condition is satisfied.
        """
        ...


class MemoryOperatorRegistry:
    """
    Registry of MemoryOperator instances keyed by FilterOperator.

    Usage::

        registry = MemoryOperatorRegistry()
        registry.register(EqualsOperator())

        result = registry.evaluate(FilterOperator.EQUALS, actual, expected)
    """

    def __init__(self) -> None:
        self._operators: dict[FilterOperator, MemoryOperator] = {}

    # -- registration --------------------------------------------------------

    def register(self, operator: MemoryOperator) -> None:
        """Register an operator strategy instance."""
        self._operators[operator.name] = operator

    def register_all(self, *operators: MemoryOperator) -> None:
        """Register multiple operator strategy instances at once."""
        for op in operators:
            self.register(op)

    def unregister(self, name: FilterOperator) -> None:
        """Remove an operator from the registry."""
        self._operators.pop(name, None)

    # -- look-up -------------------------------------------------------------

    def get(self, name: FilterOperator) -> MemoryOperator | None:
        """Return the registered operator or ``None``."""
        return self._operators.get(name)

    def has(self, name: FilterOperator) -> bool:
        return name in self._operators

    @property
    def supported_operators(self) -> set[FilterOperator]:
        return set(self._operators.keys())

    def require(self, name: FilterOperator) -> MemoryOperator:
        """
        Look up the operator.

        Raises:
            UnsupportedOperatorError: If the operator is not registered.
        """
        op = self.get(name)
        if op is None:
            raise UnsupportedOperatorError(
                str(getattr(name, "value", name)),
                reason="not supported for in-memory evaluation",
                valid_operators=[o.value for o in self._operators],
            )
        return op

    # -- evaluation shortcut -------------------------------------------------

    def evaluate(
        self,
        name: FilterOperator,
        field_value: Any,
        condition_value: Any,
        options: MatchOptions | None = None,
    ) -> bool:
        return self.require(name).evaluate(
            field_value, condition_value, options or MatchOptions()
        )
