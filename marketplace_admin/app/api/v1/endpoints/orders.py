"""Order screens."""

from fastapi import APIRouter, Depends, Query

from marketplace_admin.app.api.deps import detail_view, get_client, list_view
from marketplace_admin.app.controllers.details import OrderDetail
from marketplace_admin.app.controllers.lists import OrdersList
from marketplace_admin.app.core.config import settings
from marketplace_admin.app.core.http import ApiClient
from marketplace_admin.app.schemas.views import DetailView, ListView
from marketplace_admin.app.services.order_service import OrderService


router = APIRouter()


@router.get("/", response_model=ListView)
def list_orders(
    page: int = Query(1, ge=1),
    search: str = "",
    status: str = "",
    client: ApiClient = Depends(get_client),
) -> dict:
    """List orders, optionally narrowed to one order status."""
    return list_view(OrdersList(OrderService(client), settings.page_size), page, search, status=status)


@router.get("/{order_id}", response_model=DetailView)
def get_order(order_id: int, client: ApiClient = Depends(get_client)) -> dict:
    """Order with its tracking information."""
    return detail_view(OrderDetail(OrderService(client)), order_id)
