"""
Pagination strategies and the page button model.

Every list in the console is paged through a :class:`Paginator`.
:class:`ServerPaginator` asks the backend for each page and trusts the
metadata it returns; :class:`ClientPaginator` downloads the full set
once and slices it locally.  Only the user transaction history uses
the latter, because that endpoint is not paginated server side.

:class:`PaginationControl` turns metadata into the Previous / numbered
/ Next buttons rendered under a list.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

from ..schemas.common import ApiError, ApiResult, PaginationMeta


@dataclass
class PageResult:
    """One page of records plus its metadata."""

    items: List[Any]
    pagination: PaginationMeta
    error: Optional[ApiError] = None
    body: Any = None

    @property
    def ok(self) -> bool:
        return self.error is None


class Paginator:
    """Common interface of the pagination strategies."""

    def __init__(self, page_size: int = 10) -> None:
        self.page_size = page_size

    def fetch_page(self, page: int) -> PageResult:
        raise NotImplementedError

    def _failed(self, result: ApiResult) -> PageResult:
        return PageResult(
            items=[],
            pagination=PaginationMeta.zeroed(self.page_size),
            error=result.error,
            body=result.body,
        )


class ServerPaginator(Paginator):
    """Re-fetch every page from the backend.

    ``fetch`` receives the page number and performs the service call
    with whatever other parameters the caller has bound.
    """

    def __init__(self, fetch: Callable[[int], ApiResult], page_size: int = 10) -> None:
        super().__init__(page_size)
        self.fetch = fetch

    def fetch_page(self, page: int) -> PageResult:
        result = self.fetch(page)
        if not result.ok:
            return self._failed(result)
        raw = result.body.get("pagination") if isinstance(result.body, dict) else None
        return PageResult(
            items=result.items,
            pagination=PaginationMeta.from_payload(raw, self.page_size),
            body=result.body,
        )


class ClientPaginator(Paginator):
    """Slice a fully downloaded list into pages.

    The list is fetched on the first call and kept until :meth:`reset`.
    A failed download is not kept, so the next call tries again.
    """

    def __init__(self, load_all: Callable[[], ApiResult], page_size: int = 10) -> None:
        super().__init__(page_size)
        self.load_all = load_all
        self.records: Optional[List[Any]] = None
        self.body: Any = None

    def reset(self) -> None:
        self.records = None
        self.body = None

    def fetch_page(self, page: int) -> PageResult:
        if self.records is None:
            result = self.load_all()
            if not result.ok:
                return self._failed(result)
            self.records = result.items
            self.body = result.body
        page = max(page, 1)
        start = (page - 1) * self.page_size
        return PageResult(
            items=self.records[start:start + self.page_size],
            pagination=PaginationMeta.compute(len(self.records), page, self.page_size),
            body=self.body,
        )


def page_window(current: int, total_pages: int, radius: int = 2) -> List[Optional[int]]:
    """Page numbers to render, with ``None`` marking an ellipsis.

    Page 1, the last page and ``current +/- radius`` are always shown;
    each run of hidden pages collapses into one ellipsis.
    """
    visible = sorted(
        page
        for page in range(1, total_pages + 1)
        if page in (1, total_pages) or abs(page - current) <= radius
    )
    window: List[Optional[int]] = []
    previous = 0
    for page in visible:
        if page - previous > 1:
            window.append(None)
        window.append(page)
        previous = page
    return window


@dataclass
class PaginationControl:
    """Button model for the pager under a list."""

    current_page: int
    total_pages: int
    previous_enabled: bool
    next_enabled: bool
    range_text: str
    pages: List[Optional[int]] = field(default_factory=list)

    @property
    def visible(self) -> bool:
        return self.total_pages > 1

    @classmethod
    def from_meta(cls, meta: PaginationMeta, current_page: Optional[int] = None) -> "PaginationControl":
        current = current_page if current_page is not None else meta.page
        return cls(
            current_page=current,
            total_pages=meta.total_pages,
            previous_enabled=current > 1,
            next_enabled=meta.has_next_page,
            range_text=meta.range_text(),
            pages=page_window(current, meta.total_pages),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "current_page": self.current_page,
            "total_pages": self.total_pages,
            "previous_enabled": self.previous_enabled,
            "next_enabled": self.next_enabled,
            "range_text": self.range_text,
            "pages": self.pages,
            "visible": self.visible,
        }
