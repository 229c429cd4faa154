"""Tests for settings, the case-insensitive match hook and backend selection."""

from __future__ import annotations

import logging
from typing import Any

import pytest
from entities import Address, Product
from pydantic import ValidationError

from pafiso.backend import MatchOptions, backend_for, register_backend, unregister_backend
from pafiso.hooks import (
    get_case_insensitive_match_builder,
    register_case_insensitive_match_builder,
)
from pafiso.memory import MemoryBackend, MemoryQuery
from pafiso.naming import CAMEL_CASE
from pafiso.operators import FilterOperator
from pafiso.predicates import PredicateBuilder
from pafiso.resolver import resolve_field_path
from pafiso.settings import (
    PafisoSettings,
    StringComparison,
    get_default_settings,
    set_default_settings,
)


def native(column: Any, pattern: str) -> tuple[str, Any, str]:
    return ("native", column, pattern)


class RecordingBackend(MemoryBackend):
    """Memory backend that claims native matching and records options."""

    supports_native_match = True

    def predicate(
        self, path: Any, operator: FilterOperator, value: Any, options: MatchOptions
    ) -> Any:
        return operator, value, options


class TestSettings:
    def test_defaults(self) -> None:
        settings = get_default_settings()
        assert settings.naming_policy is None
        assert settings.use_field_name_overrides
        assert settings.string_comparison is StringComparison.ORDINAL_IGNORE_CASE
        assert settings.ignore_case

    def test_settings_are_immutable(self) -> None:
        with pytest.raises(ValidationError):
            get_default_settings().use_field_name_overrides = False  # type: ignore[misc]

    def test_derived_copy(self) -> None:
        strict = get_default_settings().model_copy(
            update={"string_comparison": StringComparison.ORDINAL}
        )
        assert not strict.ignore_case
        assert get_default_settings().ignore_case

    def test_replacing_the_default(self) -> None:
        set_default_settings(PafisoSettings(naming_policy=CAMEL_CASE))
        assert resolve_field_path(Address, "zipCode").parts == ("zip_code",)


class TestCaseInsensitiveHook:
    @pytest.fixture(autouse=True)
    def _hook(self, clean_hook: None) -> None:
        register_case_insensitive_match_builder(native)

    def _build(
        self,
        field: str,
        raw: str,
        *,
        settings: PafisoSettings | None = None,
        case_sensitive: bool = False,
    ) -> MatchOptions:
        builder = PredicateBuilder(RecordingBackend(), settings)
        path = resolve_field_path(Product, field)
        _, _, options = builder.build(path, "Equals", raw, case_sensitive=case_sensitive)
        return options

    def test_hook_is_used_by_native_backends(self) -> None:
        options = self._build("name", "laptop")
        assert options.ignore_case
        assert options.native_match is native

    def test_hook_is_skipped_for_case_sensitive_filters(self) -> None:
        options = self._build("name", "laptop", case_sensitive=True)
        assert not options.ignore_case
        assert options.native_match is None

    def test_hook_can_be_disabled(self) -> None:
        settings = PafisoSettings(use_native_case_insensitive_match=False)
        options = self._build("name", "laptop", settings=settings)
        assert options.ignore_case
        assert options.native_match is None

    def test_non_string_values_compare_exactly(self) -> None:
        options = self._build("value", "5")
        assert not options.ignore_case

    def test_memory_backend_never_uses_the_hook(self, catalog: list[Product]) -> None:
        query = MemoryQuery(catalog)
        predicate = PredicateBuilder(MemoryBackend()).build(
            resolve_field_path(Product, "name"), "Equals", "LAPTOP"
        )
        assert [p.name for p in query.where(predicate)] == ["Laptop"]

    def test_re_registration_replaces(self, caplog: pytest.LogCaptureFixture) -> None:
        def other(column: Any, pattern: str) -> Any:
            return None

        with caplog.at_level(logging.INFO, logger="pafiso.hooks"):
            register_case_insensitive_match_builder(other)
        assert get_case_insensitive_match_builder() is other
        assert "Replacing case-insensitive match builder" in caplog.text


class Bag:
    def __init__(self, *items: Any) -> None:
        self.items = items


class BagBackend(MemoryBackend):
    def accepts(self, source: Any) -> bool:
        return isinstance(source, Bag)

    def wrap(self, source: Any, element_type: Any = None) -> MemoryQuery[Any]:
        return MemoryQuery(source.items, element_type)


class TestBackendRegistry:
    def test_sequences_use_the_memory_backend(self) -> None:
        assert isinstance(backend_for([1, 2]), MemoryBackend)

    def test_custom_backend(self) -> None:
        register_backend(BagBackend())
        try:
            assert isinstance(backend_for(Bag()), BagBackend)
            register_backend(BagBackend())
            assert isinstance(backend_for(Bag()), BagBackend)
        finally:
            unregister_backend(BagBackend)
        with pytest.raises(TypeError):
            backend_for(Bag())

    @pytest.mark.parametrize("source", ["text", {"a": 1}, 3])
    def test_unsupported_sources(self, source: Any) -> None:
        with pytest.raises(TypeError):
            backend_for(source)
