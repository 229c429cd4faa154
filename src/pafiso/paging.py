"""
Skip/take paging.

No maximum page size is enforced here; callers wanting a cap restrict
``take`` themselves before building a :class:`Paging`.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from .backend import backend_for
from .exceptions import InvalidParametersError


class Paging(BaseModel):
    """
    A skip-then-take window.

    ``page`` is 0-based: ``Paging.from_paging(2, 5)`` skips 10 and takes 5.
    A ``skip`` past the end yields an empty window, as does ``take=0``.
    """

    model_config = ConfigDict(frozen=True)

    skip: int = Field(default=0, ge=0)
    take: int = Field(ge=0)

    @classmethod
    def from_paging(cls, page: int, page_size: int) -> Paging:
        if page < 0 or page_size < 1:
            raise ValueError("Page size must be greater than 0 and page can't be less than 0")
        return cls(skip=page * page_size, take=page_size)

    @classmethod
    def from_skip_take(cls, skip: int, take: int) -> Paging:
        if skip < 0 or take < 0:
            raise ValueError("Skip and take can't be less than 0")
        return cls(skip=skip, take=take)

    @property
    def page(self) -> int:
        return self.skip // self.take if self.take else 0

    @property
    def page_size(self) -> int:
        return self.take

    def next_page(self, pages: int = 1) -> Paging:
        return Paging(skip=self.skip + self.take * pages, take=self.take)

    def previous_page(self, pages: int = 1) -> Paging:
        return Paging(skip=max(0, self.skip - self.take * pages), take=self.take)

    def __add__(self, pages: int) -> Paging:
        return self.next_page(pages)

    def __sub__(self, pages: int) -> Paging:
        return self.previous_page(pages)

    def apply(self, source: Any) -> Any:
        """Window *source* (an in-memory sequence or a backend query)."""
        backend = backend_for(source)
        return backend.window(backend.wrap(source), self.skip, self.take)

    # -- flat encoding -------------------------------------------------------

    def to_dict(self) -> dict[str, str]:
        return {"skip": str(self.skip), "take": str(self.take)}

    @classmethod
    def from_dict(cls, data: Mapping[str, str]) -> Paging | None:
        """Decode ``{"skip", "take"}``; ``None`` when either key is absent."""
        if "skip" not in data or "take" not in data:
            return None
        try:
            return cls.from_skip_take(int(data["skip"]), int(data["take"]))
        except ValueError as err:
            raise InvalidParametersError(f"Invalid paging: {err}", key="skip") from err

    def __str__(self) -> str:
        return f"Page {self.page} - Page size: {self.page_size}"
