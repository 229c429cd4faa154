"""
FieldMapper: map external (API model) field names to entity field paths.

Usage::

    mapper = (
        FieldMapper(OrderEntity, mapping_type=OrderDto)
        .map_field("customerName", "customer.name")
        .map_field("state", "status", transform=lambda raw: raw and raw.upper())
    )
    params = mapper.translate(params)
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from .exceptions import UnknownFieldError, ValueCoercionError
from .filter import Filter
from .introspection import get_members
from .resolver import external_names, resolve_field_path
from .search import SearchParameters
from .settings import PafisoSettings, resolve_settings
from .sorting import Sorting

ValueTransformer = Callable[[str | None], str | None]


class FieldMapper:
    """Translates external field names (and optionally values) before use."""

    def __init__(
        self,
        entity_type: Any,
        mapping_type: Any = None,
        settings: PafisoSettings | None = None,
    ) -> None:
        self.entity_type = entity_type
        self.mapping_type = mapping_type
        self.settings = resolve_settings(settings)
        self._fields: dict[str, str] = {}
        self._labels: dict[str, str] = {}
        self._transformers: dict[str, ValueTransformer] = {}

    # -- registration --------------------------------------------------------

    def map_field(
        self,
        external: str,
        entity_field: str,
        transform: ValueTransformer | None = None,
    ) -> FieldMapper:
        """
        Map *external* to *entity_field*.

        Raises:
            ValueError: If either name is empty.
            UnknownFieldError: If *entity_field* does not exist on the entity.
        """
        if not external:
            raise ValueError("External field name cannot be empty")
        if not entity_field:
            raise ValueError("Entity field name cannot be empty")
        resolve_field_path(self.entity_type, entity_field, self.settings)
        self._fields[external.lower()] = entity_field
        self._labels[external.lower()] = external
        if transform is not None:
            self._transformers[external.lower()] = transform
        return self

    def with_transform(self, external: str, transform: ValueTransformer) -> FieldMapper:
        self._transformers[external.lower()] = transform
        return self

    # -- look-up -------------------------------------------------------------

    def is_mapped(self, external: str) -> bool:
        return self.resolve(external) is not None

    def resolve(self, external: str) -> str | None:
        """Entity field path for *external*, or ``None`` if it maps to nothing."""
        if not external:
            return None
        custom = self._fields.get(external.lower())
        if custom is not None:
            return custom

        candidate = external
        if self.mapping_type is not None:
            try:
                candidate = resolve_field_path(self.mapping_type, external, self.settings).dotted
            except UnknownFieldError:
                return None
            custom = self._fields.get(candidate.lower())
            if custom is not None:
                return custom

        try:
            return resolve_field_path(self.entity_type, candidate, self.settings).dotted
        except UnknownFieldError:
            return None

    def map_value(self, external: str, raw: str | None) -> str | None:
        """
        Apply the value transformer registered for *external*, if any.

        Raises:
            ValueCoercionError: If the transformer rejects the value.
        """
        transform = self._transformers.get(external.lower())
        if transform is None:
            return raw
        try:
            return transform(raw)
        except (TypeError, ValueError) as err:
            raise ValueCoercionError(raw, str, field=external, reason=str(err)) from err

    def mapped_fields(self) -> list[str]:
        """External names this mapper knows about."""
        names = list(self._labels.values())
        members = get_members(self.mapping_type) if self.mapping_type is not None else None
        if members:
            names.extend(external_names(members, self.settings))
        result: list[str] = []
        seen: set[str] = set()
        for name in names:
            if name.lower() not in seen:
                seen.add(name.lower())
                result.append(name)
        return result

    # -- translation ---------------------------------------------------------

    def translate_filter(self, flt: Filter) -> Filter:
        """
        Rewrite *flt*'s fields to entity paths.  Names the mapper does not
        know pass through unchanged and fail later during resolution.
        """
        fields = [self.resolve(f) or f for f in flt.fields]
        return flt.model_copy(
            update={
                "field": fields[0],
                "or_fields": tuple(fields[1:]),
                "value": self.map_value(flt.field, flt.value),
            }
        )

    def translate_sorting(self, sorting: Sorting) -> Sorting:
        return sorting.model_copy(update={"field": self.resolve(sorting.field) or sorting.field})

    def translate(self, params: SearchParameters) -> SearchParameters:
        translated = SearchParameters(
            sortings=[self.translate_sorting(s) for s in params.sortings],
            paging=params.paging,
        )
        return translated.add_filters(*(self.translate_filter(f) for f in params.filters))
