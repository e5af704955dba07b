"""Trustap transactions list."""

from fastapi import APIRouter, Depends, Query

from marketplace_admin.app.api.deps import get_client, list_view
from marketplace_admin.app.controllers.lists import TrustapTransactionsList
from marketplace_admin.app.core.config import settings
from marketplace_admin.app.core.http import ApiClient
from marketplace_admin.app.schemas.views import ListView
from marketplace_admin.app.services.trustap_service import TrustapService


router = APIRouter()


@router.get("/", response_model=ListView)
def list_transactions(
    page: int = Query(1, ge=1),
    search: str = "",
    status: str = "",
    pay_status: str = "",
    client: ApiClient = Depends(get_client),
) -> dict:
    """List escrow transactions by claim ``status`` and ``pay_status``."""
    controller = TrustapTransactionsList(TrustapService(client), settings.page_size)
    return list_view(controller, page, search, status=status, pay_status=pay_status)
