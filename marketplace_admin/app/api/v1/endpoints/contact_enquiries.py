"""Contact enquiry screens."""

from fastapi import APIRouter, Depends, HTTPException, Query, status

from marketplace_admin.app.api.deps import detail_view, get_client, list_view, outcome_view
from marketplace_admin.app.controllers.base import ViewState
from marketplace_admin.app.controllers.details import ContactEnquiryDetail
from marketplace_admin.app.controllers.lists import ContactEnquiriesList
from marketplace_admin.app.core.config import settings
from marketplace_admin.app.core.http import ApiClient
from marketplace_admin.app.schemas.support import EnquiryReply
from marketplace_admin.app.schemas.views import DetailView, ListView, ReplyOutcomeRead
from marketplace_admin.app.services.contact_service import ContactService


router = APIRouter()


@router.get("/", response_model=ListView)
def list_enquiries(
    page: int = Query(1, ge=1),
    search: str = "",
    status: str = "",
    query_type: str = "",
    client: ApiClient = Depends(get_client),
) -> dict:
    controller = ContactEnquiriesList(ContactService(client), settings.page_size)
    return list_view(controller, page, search, status=status, query_type=query_type)


@router.get("/{enquiry_id}", response_model=DetailView)
def get_enquiry(enquiry_id: int, client: ApiClient = Depends(get_client)) -> dict:
    return detail_view(ContactEnquiryDetail(ContactService(client)), enquiry_id)


@router.post("/{enquiry_id}/reply", response_model=ReplyOutcomeRead)
def reply_to_enquiry(
    enquiry_id: int,
    reply: EnquiryReply,
    client: ApiClient = Depends(get_client),
) -> dict:
    detail = ContactEnquiryDetail(ContactService(client))
    if detail.load(enquiry_id) is ViewState.NOT_FOUND:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=detail.to_dict())
    outcome = outcome_view(detail.send_reply(reply.reply_message, reply.subject))
    outcome["enquiry"] = detail.entity
    return outcome
