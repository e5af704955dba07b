"""
User detail page.

Next to the profile the page shows five sub-collections, one per tab:
the user's products, orders, transactions, the reviews they received
and the reviews they gave.  Tabs are loaded lazily the first time they
are opened and each keeps its own page, so paging inside one tab never
moves another.

Sub-collections are secondary data: when one fails to load the tab
shows an empty list and the profile stays on screen.  Transactions come
from an unpaginated endpoint and are sliced locally in pages of ten.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from ..core.pagination import ClientPaginator, PaginationControl, Paginator, ServerPaginator
from ..schemas.common import PaginationMeta
from ..services.user_service import UserService
from ..utils.formatting import format_date
from ..utils.images import get_image_url
from .base import ViewState
from .details import DetailController


logger = logging.getLogger(__name__)

OVERVIEW = "overview"
TRANSACTIONS_PAGE_SIZE = 10

TAB_LABELS = {
    "products": "Products",
    "orders": "Orders",
    "transactions": "Transactions",
    "reviews_received": "Reviews Received",
    "reviews_given": "Reviews Given",
}


@dataclass
class TabState:
    name: str
    paginator: Paginator
    page: int = 1
    items: List[Any] = field(default_factory=list)
    pagination: PaginationMeta = field(default_factory=PaginationMeta.zeroed)
    loaded_page: Optional[int] = None
    error: Optional[str] = None

    @property
    def loaded(self) -> bool:
        return self.loaded_page == self.page

    @property
    def label(self) -> str:
        count = self.pagination.total or len(self.items)
        return f"{TAB_LABELS[self.name]} ({count})"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "label": self.label,
            "page": self.page,
            "items": self.items,
            "pagination": self.pagination.to_wire(),
            "control": PaginationControl.from_meta(self.pagination, self.page).to_dict(),
            "loaded": self.loaded,
            "error": self.error,
        }


class UserDetail(DetailController):
    error_message = "Failed to fetch user"
    back_to = "/users"

    def __init__(self, service: UserService, page_size: int = 10) -> None:
        super().__init__(service.get_user)
        self.service = service
        self.page_size = page_size
        self.active_tab = OVERVIEW
        self.tabs: Dict[str, TabState] = {}
        self.trustap_info: Optional[Dict[str, Any]] = None
        self.pending_balance: Any = 0

    def load(self, entity_id: Any = None) -> ViewState:
        previous_id = self.entity_id
        state = super().load(entity_id)
        if not self.tabs or self.entity_id != previous_id:
            self.open_tabs(self.entity_id)
        if state is ViewState.LOADED:
            self._load_trustap_info()
        return state

    def open_tabs(self, user_id: Any) -> None:
        """Set up the tabs of ``user_id`` without fetching the profile."""
        self.entity_id = user_id
        self.tabs = self._build_tabs(user_id)
        self.active_tab = OVERVIEW
        self.pending_balance = 0

    def _build_tabs(self, user_id: Any) -> Dict[str, TabState]:
        service = self.service
        return {
            "products": TabState(
                "products",
                ServerPaginator(lambda page: service.get_user_products(user_id, page=page), self.page_size),
            ),
            "orders": TabState(
                "orders",
                ServerPaginator(lambda page: service.get_user_orders(user_id, page=page), self.page_size),
            ),
            "transactions": TabState(
                "transactions",
                ClientPaginator(lambda: service.get_user_transactions(user_id), TRANSACTIONS_PAGE_SIZE),
            ),
            "reviews_received": TabState(
                "reviews_received",
                ServerPaginator(
                    lambda page: service.get_user_reviews_received(user_id, page=page), self.page_size
                ),
            ),
            "reviews_given": TabState(
                "reviews_given",
                ServerPaginator(
                    lambda page: service.get_user_reviews_given(user_id, page=page), self.page_size
                ),
            ),
        }

    def _load_trustap_info(self) -> None:
        result = self.service.get_user_trustap_info(self.entity_id)
        if self.closed:
            return
        if not result.ok:
            logger.warning("Trustap info unavailable for user %s: %s", self.entity_id, result.error)
            self.trustap_info = None
            return
        self.trustap_info = result.data

    def _tab(self, name: str) -> TabState:
        if not self.tabs:
            raise RuntimeError("load() the user before opening a tab")
        if name not in self.tabs:
            raise ValueError(f"Unknown tab {name!r}")
        return self.tabs[name]

    def select_tab(self, name: str) -> Optional[TabState]:
        """Switch tabs, fetching only if the tab's current page is not loaded."""
        if name == OVERVIEW:
            self.active_tab = OVERVIEW
            return None
        tab = self._tab(name)
        self.active_tab = name
        if not tab.loaded:
            self._load_tab(tab)
        return tab

    def change_tab_page(self, name: str, page: int) -> TabState:
        if page < 1:
            raise ValueError("page must be >= 1")
        tab = self._tab(name)
        tab.page = page
        self._load_tab(tab)
        return tab

    def _load_tab(self, tab: TabState) -> None:
        result = tab.paginator.fetch_page(tab.page)
        if self.closed:
            return
        tab.loaded_page = tab.page
        if not result.ok:
            logger.warning("Could not load %s for user %s: %s", tab.name, self.entity_id, result.error)
            tab.items = []
            tab.pagination = result.pagination
            tab.error = result.error.message if result.error else None
            return
        tab.items = result.items
        tab.pagination = result.pagination
        tab.error = None
        if tab.name == "transactions" and isinstance(result.body, dict):
            self.pending_balance = result.body.get("pending_balance", 0)

    def to_dict(self) -> Dict[str, Any]:
        view = super().to_dict()
        view.update(
            {
                "active_tab": self.active_tab,
                "tabs": {name: tab.to_dict() for name, tab in self.tabs.items()},
                "trustap_info": self.trustap_info,
                "pending_balance": self.pending_balance,
            }
        )
        if self.entity:
            view["profile_image_url"] = get_image_url(self.entity.get("profile_img"))
            view["joined"] = format_date(self.entity.get("created_at"))
        return view
