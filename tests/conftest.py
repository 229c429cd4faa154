"""Shared fixtures for pafiso tests."""

from __future__ import annotations

from collections.abc import Iterator

import pytest
from entities import Address, Customer, Product

import pafiso_sqlalchemy
from pafiso.hooks import clear_case_insensitive_match_builder
from pafiso.operators_memory import build_default_registry
from pafiso.settings import PafisoSettings, get_default_settings, set_default_settings


@pytest.fixture(autouse=True)
def _restore_defaults() -> Iterator[None]:
    """Every test starts from the shipped default settings."""
    previous = get_default_settings()
    yield
    set_default_settings(previous)


@pytest.fixture
def clean_hook() -> Iterator[None]:
    clear_case_insensitive_match_builder()
    yield
    clear_case_insensitive_match_builder()


@pytest.fixture
def sqla_adapter(clean_hook: None) -> Iterator[None]:
    """Register the SQLAlchemy adapter for one test."""
    pafiso_sqlalchemy.register()
    yield
    pafiso_sqlalchemy.unregister()


@pytest.fixture
def registry():
    """Default in-memory operator registry."""
    return build_default_registry()


@pytest.fixture
def settings() -> PafisoSettings:
    return PafisoSettings()


@pytest.fixture
def hundred_products() -> list[Product]:
    """100 products with values 10, 20, ..., 1000."""
    return [Product(name=f"Product {i:03d}", value=i * 10) for i in range(1, 101)]


@pytest.fixture
def catalog() -> list[Product]:
    return [
        Product(
            name="Laptop",
            value=1200,
            category="computers",
            customer=Customer("Alice", Address("Berlin", "10115")),
            tags=["portable", "Work"],
        ),
        Product(
            name="Desktop",
            value=900,
            category="computers",
            customer=Customer("bob", Address("Paris")),
            tags=["work"],
        ),
        Product(name="Mouse", value=25, category=None, customer=Customer("Carol")),
        Product(name="keyboard", value=45, category="accessories", customer=None),
        Product(name="Monitor 50%", value=300, category="displays", tags=["office"]),
    ]
