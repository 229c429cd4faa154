"""Search plans executed against an in-memory SQLite database."""

from __future__ import annotations

from collections.abc import Iterator

import pytest
from entities import Product as MemoryProduct
from sqla_models import Base, Customer, Product, build_catalog, build_hundred_products
from sqlalchemy import Engine, create_engine, select
from sqlalchemy.orm import Session

from pafiso.exceptions import UnknownFieldError
from pafiso.filter import Filter
from pafiso.operators import FilterOperator, SortOrder
from pafiso.paging import Paging
from pafiso.search import SearchParameters, paginate
from pafiso.sorting import Sorting
from pafiso_sqlalchemy import to_paged_list

pytestmark = pytest.mark.usefixtures("sqla_adapter")

# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def engine() -> Iterator[Engine]:
    eng = create_engine("sqlite://")
    Base.metadata.create_all(eng)
    yield eng
    eng.dispose()


@pytest.fixture
def session(engine: Engine) -> Iterator[Session]:
    with Session(engine) as sess:
        yield sess


@pytest.fixture
def catalog_db(session: Session) -> Session:
    session.add_all(build_catalog())
    session.commit()
    return session


@pytest.fixture
def hundred_db(session: Session) -> Session:
    session.add_all(build_hundred_products())
    session.commit()
    return session


def _names(session: Session, params: SearchParameters) -> list[str]:
    page = to_paged_list(session, params.apply(select(Product)), params.paging)
    return [p.name for p in page]


# ---------------------------------------------------------------------------
# Scenarios
# ---------------------------------------------------------------------------


class TestScenarios:
    def test_filter_and_page(self, hundred_db: Session) -> None:
        params = SearchParameters(
            filters=[Filter(field="value", operator=FilterOperator.GREATER_THAN, value="700")],
            paging=Paging.from_paging(0, 10),
        )
        page = to_paged_list(hundred_db, params.apply(select(Product)), params.paging)
        assert page.total_entries == 30
        assert len(page.entries) == 10
        assert all(p.value > 700 for p in page)

    def test_sort_descending_and_page(self, hundred_db: Session) -> None:
        params = SearchParameters(
            sortings=[Sorting(field="value", order=SortOrder.DESCENDING)],
            paging=Paging.from_paging(0, 10),
        )
        page = to_paged_list(hundred_db, params.apply(select(Product)), params.paging)
        assert page.entries[0].value == 1000
        assert page.entries[9].value == 910
        assert page.total_entries == 100

    def test_filter_sort_and_third_page(self, hundred_db: Session) -> None:
        params = SearchParameters(
            filters=[Filter(field="value", operator="LessThan", value="500")],
            sortings=[Sorting.parse("-value")],
            paging=Paging.from_paging(2, 5),
        )
        page = to_paged_list(hundred_db, params.apply(select(Product)), params.paging)
        assert page.total_entries == 49
        assert [p.value for p in page] == [390, 380, 370, 360, 350]
        assert page.page == 2

    def test_contains_ignores_case(self, catalog_db: Session) -> None:
        params = SearchParameters(filters=[Filter(field="name", operator="Contains", value="LAP")])
        assert _names(catalog_db, params) == ["Laptop"]

    def test_equals_null(self, catalog_db: Session) -> None:
        params = SearchParameters(filters=[Filter(field="category", operator="Equals")])
        assert _names(catalog_db, params) == ["Mouse"]


class TestMatching:
    def test_wildcards_match_literally(self, catalog_db: Session) -> None:
        params = SearchParameters(filters=[Filter(field="name", operator="Contains", value="%")])
        assert _names(catalog_db, params) == ["Monitor 50%"]

    def test_case_sensitive_contains(self, catalog_db: Session) -> None:
        params = SearchParameters(
            filters=[Filter(field="name", operator="Contains", value="lap", case_sensitive=True)]
        )
        assert _names(catalog_db, params) == []

    def test_case_sensitive_contains_matches_exact_case(self, catalog_db: Session) -> None:
        params = SearchParameters(
            filters=[Filter(field="name", operator="Contains", value="Lap", case_sensitive=True)]
        )
        assert _names(catalog_db, params) == ["Laptop"]

    def test_case_sensitive_not_contains(self, catalog_db: Session) -> None:
        params = SearchParameters(
            filters=[
                Filter(field="name", operator="NotContains", value="M", case_sensitive=True)
            ],
            sortings=[Sorting(field="name")],
        )
        assert _names(catalog_db, params) == ["Desktop", "Laptop", "keyboard"]

    def test_filter_through_relationship(self, catalog_db: Session) -> None:
        params = SearchParameters(
            filters=[Filter(field="customer.name", operator="Equals", value="BOB")]
        )
        assert _names(catalog_db, params) == ["Desktop"]

    def test_missing_relationship(self, catalog_db: Session) -> None:
        params = SearchParameters(
            filters=[Filter(field="customer", operator="Null")],
            sortings=[Sorting(field="name")],
        )
        assert _names(catalog_db, params) == ["Monitor 50%", "keyboard"]

    def test_filter_through_collection(self, catalog_db: Session) -> None:
        params = SearchParameters(
            filters=[Filter(field="products.value", operator=">=", value="900")],
            sortings=[Sorting(field="name")],
        )
        plan = params.apply(select(Customer))
        customers = to_paged_list(catalog_db, plan)
        assert [c.name for c in customers] == ["Alice", "bob"]

    def test_unknown_field(self, catalog_db: Session) -> None:
        params = SearchParameters(filters=[Filter(field="colour", operator="Equals", value="x")])
        with pytest.raises(UnknownFieldError):
            params.apply(select(Product))


class TestOrderingAndPaging:
    def test_order_through_relationship(self, catalog_db: Session) -> None:
        params = SearchParameters(sortings=[Sorting(field="customer.name"), Sorting(field="name")])
        assert _names(catalog_db, params) == [
            "Monitor 50%",
            "keyboard",
            "Laptop",
            "Mouse",
            "Desktop",
        ]

    def test_relationship_ordering_keeps_the_count(self, catalog_db: Session) -> None:
        params = SearchParameters(
            sortings=[Sorting.parse("-customer.city")],
            paging=Paging.from_paging(0, 2),
        )
        page = to_paged_list(catalog_db, params.apply(select(Product)), params.paging)
        assert page.total_entries == 5
        assert [p.name for p in page] == ["Desktop", "Laptop"]

    def test_second_page(self, catalog_db: Session) -> None:
        paging = Paging.from_paging(1, 2)
        params = SearchParameters(sortings=[Sorting(field="name")], paging=paging)
        page = to_paged_list(catalog_db, params.apply(select(Product)), paging)
        assert [p.name for p in page] == ["Monitor 50%", "Mouse"]
        assert page.page_count == 3
        assert page.has_next_page

    def test_skip_past_end(self, catalog_db: Session) -> None:
        params = SearchParameters(paging=Paging(skip=10, take=5))
        page = to_paged_list(catalog_db, params.apply(select(Product)), params.paging)
        assert page.total_entries == 5
        assert page.entries == ()


# ---------------------------------------------------------------------------
# Backend parity
# ---------------------------------------------------------------------------

PARITY_CASES = [
    SearchParameters(
        filters=[Filter(field="name", operator="Contains", value="TOP")],
        sortings=[Sorting(field="name")],
    ),
    SearchParameters(
        filters=[Filter(field="value", operator=">=", value="300")],
        sortings=[Sorting.parse("-value")],
    ),
    SearchParameters(
        filters=[Filter(field="category", operator="NotEquals", value="COMPUTERS")],
        sortings=[Sorting(field="name")],
    ),
    SearchParameters(
        filters=[Filter(field="customer.name", operator="Contains", value="a")],
        sortings=[Sorting(field="name")],
    ),
    SearchParameters(
        filters=[Filter(field="name", operator="NotContains", value="top")],
        sortings=[Sorting(field="name")],
    ),
    SearchParameters(
        filters=[Filter(field="name", operator="Contains", value="top", case_sensitive=True)],
        sortings=[Sorting(field="name")],
    ),
    SearchParameters(
        filters=[Filter(field="name", operator="NotContains", value="e", case_sensitive=True)],
        sortings=[Sorting(field="name")],
    ),
    SearchParameters(
        sortings=[Sorting(field="category"), Sorting(field="name")],
        paging=Paging(skip=1, take=3),
    ),
]


@pytest.mark.parametrize("params", PARITY_CASES, ids=str)
def test_sqlalchemy_matches_memory(
    params: SearchParameters,
    catalog_db: Session,
    catalog: list[MemoryProduct],
) -> None:
    expected = paginate(catalog, params)
    actual = to_paged_list(catalog_db, params.apply(select(Product)), params.paging)
    assert [p.name for p in actual] == [p.name for p in expected]
    assert actual.total_entries == expected.total_entries
