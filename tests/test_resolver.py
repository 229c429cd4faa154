"""Tests for naming policies, member introspection and field-path resolution."""

from __future__ import annotations

import datetime
from typing import Any

import pytest
from entities import Address, Article, Author, Customer, Invoice, Product, Status

from pafiso.exceptions import UnknownFieldError
from pafiso.introspection import (
    MemberInfo,
    get_members,
    is_entity_type,
    register_inspector,
    unregister_inspector,
)
from pafiso.naming import (
    CAMEL_CASE,
    KEBAB_CASE_LOWER,
    PASCAL_CASE,
    SNAKE_CASE_UPPER,
    split_words,
)
from pafiso.resolver import clear_cache, resolve_field_path
from pafiso.settings import PafisoSettings


class TestNamingPolicies:
    def test_split_words(self) -> None:
        assert split_words("unit_price") == ["unit", "price"]
        assert split_words("unitPrice") == ["unit", "Price"]
        assert split_words("HTTPServer2") == ["HTTP", "Server", "2"]

    @pytest.mark.parametrize(
        ("policy", "expected"),
        [
            (CAMEL_CASE, "unitPrice"),
            (PASCAL_CASE, "UnitPrice"),
            (SNAKE_CASE_UPPER, "UNIT_PRICE"),
            (KEBAB_CASE_LOWER, "unit-price"),
        ],
    )
    def test_convert_name(self, policy: Any, expected: str) -> None:
        assert policy.convert_name("unit_price") == expected


class TestIntrospection:
    def test_dataclass_members(self) -> None:
        members = get_members(Product)
        assert members is not None
        assert members["value"].type is int
        assert members["category"].nullable
        assert members["customer"].type is Customer
        assert members["tags"] == MemberInfo("tags", str, collection=True)

    def test_dataclass_aliases(self) -> None:
        members = get_members(Invoice)
        assert members is not None
        assert members["invoice_id"].alias == "id"
        assert members["reference"].alias == "ref"

    def test_pydantic_members(self) -> None:
        members = get_members(Article)
        assert members is not None
        assert members["status"].type is Status
        assert members["published_at"].type is datetime.datetime
        assert members["comments"].collection
        assert members["title_length"].type is int
        assert get_members(Author)["full_name"].alias == "displayName"  # type: ignore[index]

    def test_scalars_and_mappings_are_opaque(self) -> None:
        for opaque in (int, str, datetime.date, Status, dict, None):
            assert get_members(opaque) is None
        assert not is_entity_type(dict)

    def test_custom_inspector_takes_precedence(self) -> None:
        class Opaque:
            pass

        def inspector(entity_type: type) -> dict[str, MemberInfo] | None:
            if entity_type is Opaque:
                return {"code": MemberInfo("code", str)}
            return None

        register_inspector(inspector)
        try:
            assert resolve_field_path(Opaque, "CODE").value_type is str
        finally:
            unregister_inspector(inspector)
        assert get_members(Opaque) is None


class TestResolveFieldPath:
    def test_simple_field(self) -> None:
        path = resolve_field_path(Product, "value")
        assert path.parts == ("value",)
        assert path.value_type is int
        assert path.supports_comparison
        assert not path.supports_substring_match

    def test_case_insensitive_match(self) -> None:
        assert resolve_field_path(Product, "VALUE").parts == ("value",)

    def test_nested_path(self) -> None:
        path = resolve_field_path(Product, "customer.address.city")
        assert path.parts == ("customer", "address", "city")
        assert path.dotted == "customer.address.city"
        assert path.value_type is str
        assert path.entity_type is Product

    def test_naming_policy(self) -> None:
        settings = PafisoSettings(naming_policy=CAMEL_CASE)
        path = resolve_field_path(Address, "zipCode", settings)
        assert path.parts == ("zip_code",)

    def test_aliases_win_over_declared_names(self) -> None:
        assert resolve_field_path(Invoice, "id").parts == ("invoice_id",)
        assert resolve_field_path(Invoice, "REF").parts == ("reference",)
        assert resolve_field_path(Author, "displayName").parts == ("full_name",)

    def test_aliases_can_be_disabled(self) -> None:
        settings = PafisoSettings(use_field_name_overrides=False)
        with pytest.raises(UnknownFieldError):
            resolve_field_path(Invoice, "ref", settings)
        assert resolve_field_path(Invoice, "reference", settings).parts == ("reference",)

    def test_unknown_field_suggests(self) -> None:
        with pytest.raises(UnknownFieldError) as exc_info:
            resolve_field_path(Product, "vaule")
        err = exc_info.value
        assert err.entity_name == "Product"
        assert "value" in err.suggestions

    def test_unknown_nested_field_reports_owner(self) -> None:
        with pytest.raises(UnknownFieldError) as exc_info:
            resolve_field_path(Product, "customer.address.citty")
        assert exc_info.value.entity_name == "Address"
        assert exc_info.value.full_path == "customer.address.citty"

    def test_cannot_traverse_scalars(self) -> None:
        with pytest.raises(UnknownFieldError):
            resolve_field_path(Product, "name.length")

    def test_collection_leaf_capabilities(self) -> None:
        path = resolve_field_path(Product, "tags")
        assert path.leaf.collection
        assert path.supports_substring_match
        assert not path.supports_comparison
        assert not path.supports_ordering

    def test_entity_leaf_only_supports_null_checks(self) -> None:
        path = resolve_field_path(Product, "customer")
        assert path.leaf_is_entity
        assert path.supports_null_check
        assert not path.supports_comparison
        assert not path.supports_substring_match

    def test_through_collection_is_not_orderable(self) -> None:
        path = resolve_field_path(Article, "comments.email")
        assert path.traverses_collection
        assert path.supports_comparison
        assert not path.supports_ordering

    def test_untyped_paths(self) -> None:
        path = resolve_field_path(None, "a.b")
        assert path.parts == ("a", "b")
        assert not path.is_typed
        assert path.supports_comparison and path.supports_substring_match

    def test_empty_segment_raises(self) -> None:
        with pytest.raises(UnknownFieldError):
            resolve_field_path(None, "a..b")

    def test_resolution_is_memoized(self) -> None:
        first = resolve_field_path(Product, "customer.name")
        assert resolve_field_path(Product, "customer.name") is first
        clear_cache()
        assert resolve_field_path(Product, "customer.name") is not first
        assert resolve_field_path(Product, "customer.name") == first
