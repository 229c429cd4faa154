"""Mapped classes and seed data for the SQLAlchemy adapter tests."""

from __future__ import annotations

from sqlalchemy import ForeignKey, String
from sqlalchemy.dialects.postgresql import ARRAY
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship

# ---------------------------------------------------------------------------
# Models
# ---------------------------------------------------------------------------


class Base(DeclarativeBase):
    pass


class Customer(Base):
    __tablename__ = "customers"

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str]
    city: Mapped[str | None]
    products: Mapped[list[Product]] = relationship(back_populates="customer")


class Product(Base):
    __tablename__ = "products"

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(info={"alias": "title"})
    value: Mapped[int]
    category: Mapped[str | None]
    customer_id: Mapped[int | None] = mapped_column(ForeignKey("customers.id"))
    customer: Mapped[Customer | None] = relationship(
        back_populates="products", info={"alias": "owner"}
    )


class PostgresBase(DeclarativeBase):
    """Kept apart from ``Base``: SQLite cannot create PostgreSQL ``ARRAY`` columns."""


class Document(PostgresBase):
    __tablename__ = "documents"

    id: Mapped[int] = mapped_column(primary_key=True)
    tags: Mapped[list[str]] = mapped_column(ARRAY(String))


# ---------------------------------------------------------------------------
# Seed data
# ---------------------------------------------------------------------------


def build_catalog() -> list[Product]:
    """The five-item catalog used by the in-memory tests, as mapped rows."""
    return [
        Product(
            name="Laptop",
            value=1200,
            category="computers",
            customer=Customer(name="Alice", city="Berlin"),
        ),
        Product(
            name="Desktop",
            value=900,
            category="computers",
            customer=Customer(name="bob", city="Paris"),
        ),
        Product(name="Mouse", value=25, category=None, customer=Customer(name="Carol")),
        Product(name="keyboard", value=45, category="accessories"),
        Product(name="Monitor 50%", value=300, category="displays"),
    ]


def build_hundred_products() -> list[Product]:
    return [Product(name=f"Product {i:03d}", value=i * 10) for i in range(1, 101)]
