"""Pagination types - the page envelope and the X-Pagination header contract."""

import math
from dataclasses import dataclass
from typing import Callable, Generic, TypeVar

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

T = TypeVar("T")
U = TypeVar("U")


@dataclass(slots=True)
class Page(Generic[T]):
    """One page of an ordered result set. Built per request, never stored."""

    items: list[T]
    current_page: int
    page_size: int
    total_count: int

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total_count / self.page_size) if self.page_size > 0 else 0

    @property
    def has_previous(self) -> bool:
        return self.current_page > 1

    @property
    def has_next(self) -> bool:
        return self.current_page < self.total_pages

    def map(self, fn: Callable[[T], U]) -> "Page[U]":
        """Same page metadata, projected items."""
        return Page(
            items=[fn(item) for item in self.items],
            current_page=self.current_page,
            page_size=self.page_size,
            total_count=self.total_count,
        )


class PaginationHeader(BaseModel):
    """Value of the X-Pagination response header (serialized as compact camelCase JSON)."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    previous_page_link: str | None = None
    next_page_link: str | None = None
    total_count: int
    page_size: int
    current_page: int
    total_pages: int

    def to_header(self) -> str:
        return self.model_dump_json(by_alias=True)


MAX_PAGE_NUMBER = 2**31 - 1


def normalize_paging(page_number: int, page_size: int, max_page_size: int) -> tuple[int, int]:
    """Clamp pageNumber to [1, MAX_PAGE_NUMBER] and pageSize to [1, max_page_size]."""
    # Upper bound keeps the computed OFFSET within what database drivers accept
    page_number = min(MAX_PAGE_NUMBER, max(1, page_number))
    page_size = min(max_page_size, max(1, page_size))
    return page_number, page_size
