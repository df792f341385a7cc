"""
Page requests and pagination response headers.

Query contract (shared by every list endpoint):
- page: 0-based page index
- size: page size, defaults to DEFAULT_PAGE_SIZE, capped at MAX_PAGE_SIZE
- sort: repeatable, `property[,property...][,asc|desc]`

Response headers:
- X-Total-Count: size of the whole collection
- Link: next / prev / last / first page URLs
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field

from fastapi import HTTPException, Query, status
from starlette.datastructures import URL

from . import settings
from .db import BIGINT_MAX

SORT_DIRECTIONS = {"asc": "ASC", "desc": "DESC"}


@dataclass(frozen=True)
class PageRequest:
    page: int
    size: int
    # (column, direction) pairs, already resolved against an allowlist.
    sort: tuple[tuple[str, str], ...] = field(default_factory=tuple)

    @property
    def offset(self) -> int:
        return self.page * self.size


def parse_sort(values: list[str], sortable: Mapping[str, str]) -> tuple[tuple[str, str], ...]:
    """
    Resolve `sort` query values into (column, direction) pairs.

    `sortable` maps public property names to column names; any other
    property is rejected with 400.
    """
    orders: list[tuple[str, str]] = []
    for raw in values:
        parts = [p.strip() for p in (raw or "").split(",") if p.strip()]
        if not parts:
            continue

        direction = "ASC"
        if parts[-1].lower() in SORT_DIRECTIONS:
            direction = SORT_DIRECTIONS[parts.pop().lower()]

        for prop in parts:
            column = sortable.get(prop)
            if column is None:
                raise HTTPException(
                    status_code=status.HTTP_400_BAD_REQUEST,
                    detail=f"Unknown sort property: {prop}",
                )
            orders.append((column, direction))
    return tuple(orders)


def build_page_request(
    *,
    page: int | None,
    size: int | None,
    sort: list[str] | None,
    sortable: Mapping[str, str],
) -> PageRequest:
    page_index = page if page is not None and page > 0 else 0

    page_size = size if size is not None and size > 0 else settings.default_page_size()
    page_size = min(page_size, settings.max_page_size())

    # The offset is sent to the database as a bigint.
    if page_index * page_size > BIGINT_MAX:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Page index out of range: {page_index}",
        )

    return PageRequest(
        page=page_index,
        size=page_size,
        sort=parse_sort(sort or [], sortable),
    )


def pageable(sortable: Mapping[str, str]) -> Callable[..., PageRequest]:
    """
    Build a FastAPI dependency that reads page/size/sort from the query string.
    """

    def dependency(
        page: int | None = Query(default=None),
        size: int | None = Query(default=None),
        sort: list[str] = Query(default=[]),
    ) -> PageRequest:
        return build_page_request(page=page, size=size, sort=sort, sortable=sortable)

    return dependency


def _prepare_link(url: URL, page: int, size: int, rel: str) -> str:
    target = str(url.include_query_params(page=page, size=size))
    target = target.replace(",", "%2C").replace(";", "%3B")
    return f'<{target}>; rel="{rel}"'


def pagination_headers(url: URL, *, page_request: PageRequest, total: int) -> dict[str, str]:
    size = page_request.size
    number = page_request.page
    total_pages = (total + size - 1) // size if total > 0 else 0

    links: list[str] = []
    if number < total_pages - 1:
        links.append(_prepare_link(url, number + 1, size, "next"))
    if number > 0:
        links.append(_prepare_link(url, number - 1, size, "prev"))

    last_page = total_pages - 1 if total_pages > 0 else 0
    links.append(_prepare_link(url, last_page, size, "last"))
    links.append(_prepare_link(url, 0, size, "first"))

    return {
        "X-Total-Count": str(total),
        "Link": ",".join(links),
    }
