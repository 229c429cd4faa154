"""
Pafiso exception hierarchy with fuzzy-match suggestions.

All exceptions inherit from ``PafisoError`` and provide ``to_dict()``
for API-friendly error responses.  Everything is raised while building
expressions, never while a query is executing.
"""

from __future__ import annotations

from difflib import get_close_matches
from typing import Any


class PafisoError(Exception):
    """Base exception for all pafiso errors."""

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": self.__class__.__name__,
            "message": str(self),
        }


class UnknownFieldError(PafisoError):
    """
    A field path segment does not resolve on the entity type.

    Uses fuzzy matching to suggest similar valid field names.

    Example error message::

        Unknown field 'nmae' on 'Product'.
        Did you mean one of these?
          • name

        Available fields: id, name, price, ...
    """

    def __init__(
        self,
        field: str,
        entity_name: str,
        available_fields: list[str],
        full_path: str | None = None,
        cutoff: float = 0.6,
    ) -> None:
        self.field = field
        self.entity_name = entity_name
        self.available_fields = available_fields
        self.full_path = full_path or field

        self.suggestions = get_close_matches(
            field, available_fields, n=5, cutoff=cutoff
        )

        super().__init__(self._build_message())

    def _build_message(self) -> str:
        lines = [f"Unknown field '{self.field}' on '{self.entity_name}'."]
        if self.full_path != self.field:
            lines.append(f"Full path: '{self.full_path}'")
        if self.suggestions:
            lines.append("Did you mean one of these?")
            for s in self.suggestions:
                lines.append(f"  • {s}")

        sorted_fields = sorted(self.available_fields)
        preview = ", ".join(sorted_fields[:15])
        if len(sorted_fields) > 15:
            preview += ", ..."
        lines.append(f"Available fields: {preview}")
        return "\n".join(lines)

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "FIELD_NOT_FOUND",
            "field": self.field,
            "entity": self.entity_name,
            "full_path": self.full_path,
            "suggestions": self.suggestions,
            "available_fields": sorted(self.available_fields),
        }


class FieldNotAllowedError(PafisoError):
    """A field was excluded by the active field restrictions."""

    def __init__(self, field: str, operation: str) -> None:
        self.field = field
        self.operation = operation
        super().__init__(f"Field {field!r} is not allowed for {operation}ing")

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "FIELD_NOT_ALLOWED",
            "field": self.field,
            "operation": self.operation,
        }


class ValueCoercionError(PafisoError):
    """A raw string could not be converted to the type a field requires."""

    def __init__(
        self,
        value: Any,
        target_type: Any,
        field: str | None = None,
        reason: str | None = None,
    ) -> None:
        self.value = value
        self.target_type = target_type
        self.field = field
        self.reason = reason

        type_name = getattr(target_type, "__name__", str(target_type))
        message = f"Cannot convert {value!r} to {type_name}"
        if field:
            message += f" for field '{field}'"
        if reason:
            message += f": {reason}"
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "VALUE_COERCION_ERROR",
            "field": self.field,
            "value": self.value,
            "target_type": getattr(
                self.target_type, "__name__", str(self.target_type)
            ),
            "reason": self.reason,
        }


class UnsupportedOperatorError(PafisoError):
    """
    Operator is unknown, unregistered, or invalid for the field's type.

    When the operator cannot be parsed at all, fuzzy-matched suggestions
    for likely intended operators are provided.
    """

    def __init__(
        self,
        operator: str,
        field: str | None = None,
        reason: str | None = None,
        valid_operators: list[str] | None = None,
    ) -> None:
        self.operator = operator
        self.field = field
        self.reason = reason
        self.valid_operators = valid_operators or []
        self.suggestions = get_close_matches(
            operator, self.valid_operators, n=3, cutoff=0.6
        )

        if field:
            message = f"Operator '{operator}' is not supported for field '{field}'"
        else:
            message = f"Unknown operator: '{operator}'"
        if reason:
            message += f": {reason}"
        message += "."
        if self.suggestions:
            message += f" Did you mean: {', '.join(self.suggestions)}?"
        if self.valid_operators:
            message += f" Valid operators: {', '.join(sorted(self.valid_operators))}"
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "UNSUPPORTED_OPERATOR",
            "operator": self.operator,
            "field": self.field,
            "reason": self.reason,
            "suggestions": self.suggestions,
            "valid_operators": sorted(self.valid_operators),
        }


class MalformedExpressionError(PafisoError):
    """An internal invariant was violated while composing an expression."""

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "MALFORMED_EXPRESSION",
            "message": str(self),
        }


class InvalidParametersError(PafisoError):
    """Flat search parameters could not be decoded."""

    def __init__(self, message: str, key: str | None = None) -> None:
        self.message = message
        self.key = key
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "INVALID_PARAMETERS",
            "message": self.message,
            "key": self.key,
        }
