import math
from dataclasses import dataclass
from typing import Sequence, Tuple

from .models import EntityRecord


def total_pages(count: int, page_size: int) -> int:
    """Number of pages for ``count`` items; never less than 1."""
    if page_size < 1:
        raise ValueError("page_size must be at least 1")
    return max(1, math.ceil(count / page_size))


def clamp_page(page_number: int, count: int, page_size: int) -> int:
    return min(max(1, page_number), total_pages(count, page_size))


@dataclass(frozen=True)
class Page:
    """One window onto a filtered result. ``number`` is 1-based."""

    number: int
    size: int
    total_pages: int
    total_items: int
    items: Tuple[EntityRecord, ...]

    @property
    def has_previous(self) -> bool:
        return self.number > 1

    @property
    def has_next(self) -> bool:
        return self.number < self.total_pages

    @property
    def offset(self) -> int:
        return (self.number - 1) * self.size


def paginate(results: Sequence[EntityRecord], page_number: int, page_size: int) -> Page:
    """Slice ``results`` at ``page_number``, clamped into the valid page range."""
    number = clamp_page(page_number, len(results), page_size)
    start = (number - 1) * page_size
    return Page(
        number=number,
        size=page_size,
        total_pages=total_pages(len(results), page_size),
        total_items=len(results),
        items=tuple(results[start:start + page_size]),
    )
