"""Tests for Paging windows and PagedList results."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from pafiso.exceptions import InvalidParametersError
from pafiso.paged_list import PagedList
from pafiso.paging import Paging


class TestPaging:
    def test_from_paging_is_zero_based(self) -> None:
        paging = Paging.from_paging(2, 5)
        assert (paging.skip, paging.take) == (10, 5)
        assert paging.page == 2
        assert paging.page_size == 5

    @pytest.mark.parametrize(("page", "size"), [(-1, 5), (0, 0)])
    def test_from_paging_rejects_invalid_input(self, page: int, size: int) -> None:
        with pytest.raises(ValueError):
            Paging.from_paging(page, size)

    def test_from_skip_take(self) -> None:
        assert Paging.from_skip_take(3, 0).take == 0
        with pytest.raises(ValueError):
            Paging.from_skip_take(-1, 5)

    def test_model_validation(self) -> None:
        with pytest.raises(ValidationError):
            Paging(skip=-1, take=5)

    def test_navigation(self) -> None:
        paging = Paging.from_paging(1, 10)
        assert (paging + 2).page == 3
        assert (paging - 5).skip == 0
        assert paging.next_page().previous_page() == paging

    def test_apply_windows_a_sequence(self) -> None:
        assert list(Paging(skip=2, take=3).apply(range(10))) == [2, 3, 4]

    def test_skip_past_end_is_empty(self) -> None:
        assert list(Paging(skip=50, take=3).apply(range(10))) == []

    def test_take_zero_is_empty(self) -> None:
        assert list(Paging(skip=0, take=0).apply(range(10))) == []

    def test_flat_encoding(self) -> None:
        paging = Paging.from_paging(1, 20)
        assert paging.to_dict() == {"skip": "20", "take": "20"}
        assert Paging.from_dict({"skip": "20", "take": "20"}) == paging
        assert Paging.from_dict({"skip": "20"}) is None

    @pytest.mark.parametrize("data", [{"skip": "x", "take": "1"}, {"skip": "-2", "take": "1"}])
    def test_from_dict_rejects_bad_numbers(self, data: dict[str, str]) -> None:
        with pytest.raises(InvalidParametersError):
            Paging.from_dict(data)

    def test_str(self) -> None:
        assert str(Paging.from_paging(2, 5)) == "Page 2 - Page size: 5"


class TestPagedList:
    def test_create_with_paging(self) -> None:
        page = PagedList.create(23, ["a", "b"], Paging.from_paging(2, 10))
        assert page.page == 2
        assert page.page_size == 10
        assert page.page_count == 3
        assert not page.has_next_page
        assert page.has_previous_page
        assert list(page) == ["a", "b"]
        assert page[1] == "b"
        assert len(page) == 2

    def test_create_without_paging(self) -> None:
        page = PagedList.create(3, [1, 2, 3])
        assert (page.page, page.page_size, page.page_count) == (0, 3, 1)
        assert not page.has_next_page

    def test_empty(self) -> None:
        page = PagedList.create(0, [])
        assert page.page_count == 0
        assert not page.has_previous_page

    def test_map(self) -> None:
        page = PagedList.create(10, [1, 2], Paging.from_paging(0, 2)).map(str)
        assert page.entries == ("1", "2")
        assert page.total_entries == 10
        assert page.has_next_page
