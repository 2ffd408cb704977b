"""Shared schema pieces: camelCase config and the pagination envelope."""

from math import ceil

from pydantic import BaseModel
from pydantic.alias_generators import to_camel

MAX_PAGE_LIMIT = 100

CAMEL_CONFIG = {
    "from_attributes": True,
    "alias_generator": to_camel,
    "populate_by_name": True,
}


def clamp_page(value: int) -> int:
    return max(1, value)


def clamp_limit(value: int) -> int:
    return min(max(1, value), MAX_PAGE_LIMIT)


def total_pages(total: int, limit: int) -> int:
    return ceil(total / limit) if limit else 0


class PageMeta(BaseModel):
    """Pagination metadata; mode specific keys ride along as extras."""

    page: int
    limit: int
    total: int
    total_pages: int

    model_config = {**CAMEL_CONFIG, "extra": "allow"}

    @classmethod
    def build(cls, page: int, limit: int, total: int, **extra) -> "PageMeta":
        return cls(page=page, limit=limit, total=total, total_pages=total_pages(total, limit), **extra)
