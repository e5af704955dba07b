"""
List page controllers.

Every list screen follows the same cycle: fetch a page for the current
search term and filters, then show the records, an empty panel or the
error.  Any parameter change fetches again from the server; nothing is
cached between fetches.  A new search term or filter value always
starts over from page 1.

The concrete lists differ only in the service call, the filters they
accept and the message shown when the call fails.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Optional, Tuple

from ..core.pagination import PaginationControl, ServerPaginator
from ..schemas.common import ApiResult, PaginationMeta
from ..services.contact_service import ContactService
from ..services.order_service import OrderService
from ..services.product_service import ProductService
from ..services.trustap_service import TrustapService
from ..services.user_service import UserService
from .base import Controller, ViewState


logger = logging.getLogger(__name__)


class ListController(Controller):
    """Search, filter and page through a server paginated list."""

    filter_names: Tuple[str, ...] = ()
    error_message = "Failed to fetch records"

    def __init__(self, fetch: Callable[..., ApiResult], page_size: int = 10) -> None:
        super().__init__()
        self.fetch = fetch
        self.page_size = page_size
        self.paginator = ServerPaginator(self._fetch_page, page_size)
        self.state = ViewState.IDLE
        self.items: List[Any] = []
        self.error: Optional[str] = None
        self.page = 1
        self.search_term = ""
        self.filters: Dict[str, Any] = {name: "" for name in self.filter_names}
        self.pagination = PaginationMeta.zeroed(page_size)
        self.scroll_to_top = False

    def _fetch_page(self, page: int) -> ApiResult:
        return self.fetch(page=page, limit=self.page_size, search=self.search_term, **self.filters)

    def load(self) -> ViewState:
        """Fetch the current page with the current parameters."""
        generation = self._begin()
        self.state = ViewState.LOADING
        self.error = None
        result = self.paginator.fetch_page(self.page)
        if not self._is_current(generation):
            logger.debug("Discarding stale response for page %s", self.page)
            return self.state
        if not result.ok:
            self.items = []
            self.pagination = PaginationMeta.zeroed(self.page_size)
            self.error = result.error.message if result.error and result.error.message else self.error_message
            self.state = ViewState.ERRORED
            return self.state
        self.items = result.items
        self.pagination = result.pagination
        self.state = ViewState.POPULATED if self.items else ViewState.EMPTY
        return self.state

    def search(self, term: str) -> ViewState:
        self.search_term = term
        self.page = 1
        self.scroll_to_top = False
        return self.load()

    def clear_search(self) -> ViewState:
        return self.search("")

    def set_filter(self, name: str, value: Any) -> ViewState:
        if name not in self.filters:
            raise ValueError(f"Unknown filter {name!r} for {type(self).__name__}")
        self.filters[name] = value
        self.page = 1
        self.scroll_to_top = False
        return self.load()

    def go_to_page(self, page: int) -> ViewState:
        if page < 1:
            raise ValueError("page must be >= 1")
        self.page = page
        self.scroll_to_top = True
        return self.load()

    def next_page(self) -> ViewState:
        if not self.pagination.has_next_page:
            return self.state
        return self.go_to_page(self.page + 1)

    def previous_page(self) -> ViewState:
        if self.page <= 1:
            return self.state
        return self.go_to_page(self.page - 1)

    @property
    def control(self) -> PaginationControl:
        return PaginationControl.from_meta(self.pagination, self.page)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "state": self.state.value,
            "items": self.items,
            "error": self.error,
            "page": self.page,
            "search": self.search_term,
            "filters": dict(self.filters),
            "pagination": self.pagination.to_wire(),
            "control": self.control.to_dict(),
            "scroll_to_top": self.scroll_to_top,
        }


class UsersList(ListController):
    filter_names = ("type",)
    error_message = "Failed to fetch users"

    def __init__(self, service: UserService, page_size: int = 10) -> None:
        super().__init__(service.list_users, page_size)


class ProductsList(ListController):
    filter_names = ("category_id",)
    error_message = "Failed to fetch products"

    def __init__(self, service: ProductService, page_size: int = 10) -> None:
        super().__init__(service.list_products, page_size)


class OrdersList(ListController):
    filter_names = ("status",)
    error_message = "Failed to fetch orders"

    def __init__(self, service: OrderService, page_size: int = 10) -> None:
        super().__init__(service.list_orders, page_size)


class ReturnRequestsList(ListController):
    filter_names = ("status",)
    error_message = "Failed to fetch return requests"

    def __init__(self, service: OrderService, page_size: int = 10) -> None:
        super().__init__(service.list_return_requests, page_size)


class ContactEnquiriesList(ListController):
    filter_names = ("status", "query_type")
    error_message = "Failed to fetch contact enquiries"

    def __init__(self, service: ContactService, page_size: int = 10) -> None:
        super().__init__(service.list_enquiries, page_size)


class TrustapTransactionsList(ListController):
    filter_names = ("status", "pay_status")
    error_message = "Failed to fetch Trustap transactions"

    def __init__(self, service: TrustapService, page_size: int = 10) -> None:
        super().__init__(service.list_transactions, page_size)
