"""
Return request screens.

Approval and rejection load the request first so the pending check and
the order id lookup work on fresh data.
"""

from fastapi import APIRouter, Depends, HTTPException, Query, status

from marketplace_admin.app.api.deps import detail_view, get_client, list_view, outcome_view
from marketplace_admin.app.controllers.base import ViewState
from marketplace_admin.app.controllers.details import ReturnRequestDetail
from marketplace_admin.app.controllers.lists import ReturnRequestsList
from marketplace_admin.app.core.config import settings
from marketplace_admin.app.core.http import ApiClient
from marketplace_admin.app.schemas.views import DetailView, ListView, OutcomeRead
from marketplace_admin.app.services.order_service import OrderService


router = APIRouter()


@router.get("/", response_model=ListView)
def list_return_requests(
    page: int = Query(1, ge=1),
    search: str = "",
    status: str = "",
    client: ApiClient = Depends(get_client),
) -> dict:
    """List return requests, optionally by status."""
    controller = ReturnRequestsList(OrderService(client), settings.page_size)
    return list_view(controller, page, search, status=status)


@router.get("/{return_request_id}", response_model=DetailView)
def get_return_request(return_request_id: int, client: ApiClient = Depends(get_client)) -> dict:
    return detail_view(ReturnRequestDetail(OrderService(client)), return_request_id)


def _loaded(client: ApiClient, return_request_id: int) -> ReturnRequestDetail:
    detail = ReturnRequestDetail(OrderService(client))
    state = detail.load(return_request_id)
    if state is ViewState.NOT_FOUND:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=detail.to_dict())
    if state is ViewState.ERRORED:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=detail.to_dict())
    return detail


@router.post("/{return_request_id}/approve", response_model=OutcomeRead)
def approve_return_request(return_request_id: int, client: ApiClient = Depends(get_client)) -> dict:
    """Approve a pending request; non-pending requests are refused."""
    return outcome_view(_loaded(client, return_request_id).approve())


@router.post("/{return_request_id}/reject", response_model=OutcomeRead)
def reject_return_request(return_request_id: int, client: ApiClient = Depends(get_client)) -> dict:
    return outcome_view(_loaded(client, return_request_id).reject())
