"""
Read models for the admin HTTP surface.

Each model mirrors the ``to_dict()`` of a controller.  Detail views
add display fields that depend on the resource (``image_urls`` on
products, ``can_approve_reject`` on return requests, ...), so they
accept extra keys.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict

from .common import PaginationMeta


class PaginationControlRead(BaseModel):
    current_page: int
    total_pages: int
    previous_enabled: bool
    next_enabled: bool
    range_text: str
    pages: List[Optional[int]]
    visible: bool


class ListView(BaseModel):
    """One page of a list screen with its search, filters and pager."""

    state: str
    items: List[Any]
    error: Optional[str] = None
    page: int
    search: str = ""
    filters: Dict[str, Any] = {}
    pagination: PaginationMeta
    control: PaginationControlRead
    scroll_to_top: bool = False


class DetailView(BaseModel):
    model_config = ConfigDict(extra="allow")

    state: str
    id: Any = None
    data: Any = None
    error: Optional[str] = None
    success: Optional[str] = None
    back_to: str


class TabView(BaseModel):
    """One sub-collection tab of the user page."""

    name: str
    label: str
    page: int
    items: List[Any]
    pagination: PaginationMeta
    control: PaginationControlRead
    loaded: bool
    error: Optional[str] = None


class UserDetailView(DetailView):
    active_tab: str
    tabs: Dict[str, TabView]
    trustap_info: Optional[Dict[str, Any]] = None
    pending_balance: Any = 0
    profile_image_url: Optional[str] = None
    joined: Optional[str] = None


class DashboardView(BaseModel):
    state: str
    stats: Dict[str, Any]
    error: Optional[str] = None


class OutcomeRead(BaseModel):
    """Result of a form submission or an action."""

    success: bool
    message: str
    redirect_to: Optional[str] = None
    redirect_after: float = 0.0
    data: Any = None


class ReplyOutcomeRead(OutcomeRead):
    enquiry: Optional[Dict[str, Any]] = None


class BulkUploadRead(BaseModel):
    user_id: Any = None
    uploading: bool
    error: Optional[str] = None
    result: Optional[Dict[str, Any]] = None


class MessageRead(BaseModel):
    message: str
