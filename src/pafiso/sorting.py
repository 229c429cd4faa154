from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict, field_validator

from .backend import backend_for
from .exceptions import InvalidParametersError
from .operators import SortOrder
from .predicates import ComparatorBuilder

if TYPE_CHECKING:
    from .restrictions import FieldRestrictions
    from .settings import PafisoSettings


class Sorting(BaseModel):
    """One sort key: ``field`` ascending or descending."""

    model_config = ConfigDict(frozen=True)

    field: str
    order: SortOrder = SortOrder.ASCENDING

    @field_validator("order", mode="before")
    @classmethod
    def _parse_order(cls, value: Any) -> SortOrder:
        return SortOrder.parse(value)

    @classmethod
    def parse(cls, text: str) -> Sorting:
        """``"name"`` sorts ascending, ``"-name"`` descending."""
        text = text.strip()
        if text.startswith("-"):
            return cls(field=text[1:], order=SortOrder.DESCENDING)
        return cls(field=text.lstrip("+"))

    @property
    def ascending(self) -> bool:
        return self.order is SortOrder.ASCENDING

    @property
    def descending(self) -> bool:
        return self.order is SortOrder.DESCENDING

    def apply(
        self,
        source: Any,
        restrictions: FieldRestrictions | None = None,
        settings: PafisoSettings | None = None,
        *,
        element_type: Any = None,
    ) -> Any:
        """Order *source* by this key, replacing any existing order."""
        return self._apply(source, restrictions, settings, element_type, then=False)

    def then_apply(
        self,
        source: Any,
        restrictions: FieldRestrictions | None = None,
        settings: PafisoSettings | None = None,
    ) -> Any:
        """Append this key as a tie-break to an already ordered *source*."""
        return self._apply(source, restrictions, settings, None, then=True)

    def _apply(
        self,
        source: Any,
        restrictions: FieldRestrictions | None,
        settings: PafisoSettings | None,
        element_type: Any,
        *,
        then: bool,
    ) -> Any:
        if restrictions is not None:
            restrictions.check_sort(self.field)
        backend = backend_for(source)
        query = backend.wrap(source, element_type)
        return ComparatorBuilder(backend, settings).build_sorting(query, self, then=then)

    # -- flat encoding -------------------------------------------------------

    def to_dict(self) -> dict[str, str]:
        return {"prop": self.field, "ord": self.order.value}

    @classmethod
    def from_dict(cls, data: Mapping[str, str]) -> Sorting:
        if "prop" not in data:
            raise InvalidParametersError("A sorting needs 'prop'", key="prop")
        return cls(field=data["prop"], order=SortOrder.parse(data.get("ord", "Ascending")))

    def __str__(self) -> str:
        return f"{self.field} ({self.order.value})"
