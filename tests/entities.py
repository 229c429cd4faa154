"""Entity types shared by the test modules."""

from __future__ import annotations

import datetime
from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Annotated, Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field

from pafiso.introspection import FieldAlias


@dataclass
class Address:
    city: str
    zip_code: Optional[str] = None


@dataclass
class Customer:
    name: str
    address: Optional[Address] = None


@dataclass
class Product:
    name: str
    value: int
    category: Optional[str] = None
    customer: Optional[Customer] = None
    tags: list[str] = field(default_factory=list)


class Status(Enum):
    DRAFT = "draft"
    PUBLISHED = "published"


class Author(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    full_name: str = Field(alias="displayName")
    email: Optional[str] = None


class Article(BaseModel):
    title: str
    status: Status = Status.DRAFT
    rating: float = 0.0
    price: Decimal = Decimal("0")
    published_at: Optional[datetime.datetime] = None
    author: Optional[Author] = None
    comments: list[Author] = []

    @computed_field  # type: ignore[prop-decorator]
    @property
    def title_length(self) -> int:
        return len(self.title)


@dataclass
class Invoice:
    invoice_id: Annotated[int, FieldAlias("id")]
    reference: str = field(default="", metadata={"alias": "ref"})
    is_paid: bool = False
