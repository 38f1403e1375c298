"""
Paged search DTOs and the lazy paginated collection.
"""
from __future__ import annotations

from typing import Any, Callable, Generic, Iterator, TypeVar

from pydantic import BaseModel, Field

from core.logging_config import get_logger


logger = get_logger(__name__)

T = TypeVar("T")


class PageResult(BaseModel, Generic[T]):
    """One fetched page: its records plus the totals reported by the remote API."""

    items: list[T] = Field(default_factory=list)
    total_items: int = 0
    page_size: int = 0


PageFetcher = Callable[[dict[str, Any], int], PageResult[T]]


class PaginatedCollection(Generic[T]):
    """
    Finite, restartable, lazily fetched sequence bound to fixed search criteria.

    Each ``iter()`` starts again from page 1; one page is fetched per step and
    nothing is held open between pages, so callers can stop at any point.
    """

    def __init__(self, fetch_page: PageFetcher, criteria: dict[str, Any]) -> None:
        self._fetch_page = fetch_page
        self.criteria = dict(criteria)

    def pages(self) -> Iterator[PageResult[T]]:
        page = 1
        seen = 0
        while True:
            result = self._fetch_page(self.criteria, page)
            logger.debug(
                "paginated_collection_page",
                page=page,
                count=len(result.items),
                total_items=result.total_items,
            )
            yield result
            seen += len(result.items)
            if not result.items or seen >= result.total_items:
                return
            page += 1

    def __iter__(self) -> Iterator[T]:
        for result in self.pages():
            yield from result.items

    def first(self) -> T | None:
        return next(iter(self), None)
