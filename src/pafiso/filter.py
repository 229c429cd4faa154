from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict, field_validator

from .backend import backend_for
from .exceptions import InvalidParametersError, PafisoError
from .operators import FilterOperator
from .predicates import PredicateBuilder, normalize_operator

if TYPE_CHECKING:
    from .restrictions import FieldRestrictions
    from .settings import PafisoSettings


class Filter(BaseModel):
    """
    One filter clause: ``field <operator> value``.

    ``or_fields`` widens the clause to several fields; it matches when any
    of them satisfies the operator.  ``value`` is the raw string sent by the
    client and is coerced to the field's type when the clause is applied.
    """

    model_config = ConfigDict(frozen=True)

    field: str
    operator: FilterOperator
    value: str | None = None
    case_sensitive: bool = False
    or_fields: tuple[str, ...] = ()

    @field_validator("operator", mode="before")
    @classmethod
    def _parse_operator(cls, value: Any) -> FilterOperator:
        return FilterOperator.parse(value)

    @property
    def fields(self) -> tuple[str, ...]:
        return (self.field, *self.or_fields)

    @property
    def effective_operator(self) -> FilterOperator:
        """Operator after the ``Equals(None)`` → ``Null`` reinterpretation."""
        return normalize_operator(self.operator, self.value)

    def with_field(self, *fields: str) -> Filter:
        """Return a copy that also matches on *fields*."""
        return self.model_copy(update={"or_fields": (*self.or_fields, *fields)})

    # -- application ---------------------------------------------------------

    def to_predicate(
        self,
        source: Any,
        settings: PafisoSettings | None = None,
        *,
        element_type: Any = None,
    ) -> Any:
        """Build this clause's predicate for *source*'s backend."""
        backend = backend_for(source)
        query = backend.wrap(source, element_type)
        return PredicateBuilder(backend, settings).build_filter(
            backend.element_type(query), self
        )

    def apply(
        self,
        source: Any,
        restrictions: FieldRestrictions | None = None,
        settings: PafisoSettings | None = None,
        *,
        element_type: Any = None,
    ) -> Any:
        """Restrict *source* to the elements matching this clause."""
        if restrictions is not None:
            for field in self.fields:
                restrictions.check_filter(field)
        backend = backend_for(source)
        query = backend.wrap(source, element_type)
        return backend.where(query, self.to_predicate(query, settings))

    # -- flat encoding -------------------------------------------------------

    def to_dict(self) -> dict[str, str]:
        data = {"fields": ",".join(self.fields), "op": self.operator.value}
        if self.value is not None:
            data["val"] = self.value
        if self.case_sensitive:
            data["case"] = "true"
        return data

    @classmethod
    def from_dict(cls, data: Mapping[str, str]) -> Filter:
        if "fields" not in data or "op" not in data:
            raise InvalidParametersError("A filter needs 'fields' and 'op'", key="fields")
        fields = [f.strip() for f in data["fields"].split(",") if f.strip()]
        if not fields:
            raise InvalidParametersError("A filter needs at least one field", key="fields")
        try:
            operator = FilterOperator.parse(data["op"])
        except PafisoError as err:
            raise InvalidParametersError(str(err), key="op") from err
        return cls(
            field=fields[0],
            or_fields=tuple(fields[1:]),
            operator=operator,
            value=data.get("val"),
            case_sensitive=data.get("case", "").strip().lower() == "true",
        )

    def __str__(self) -> str:
        operator = self.effective_operator
        if operator.is_null_check:
            clauses = " OR ".join(f"{f} {operator.symbol}" for f in self.fields)
        else:
            clauses = " OR ".join(f"{f} {operator.symbol} {self.value}" for f in self.fields)
        return f"({clauses})"
