"""
User screens: list, detail with its tabs, and edit.
"""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from marketplace_admin.app.api.deps import get_client, list_view, outcome_view
from marketplace_admin.app.controllers.base import ViewState
from marketplace_admin.app.controllers.lists import UsersList
from marketplace_admin.app.controllers.user_detail import UserDetail
from marketplace_admin.app.controllers.user_form import UserForm
from marketplace_admin.app.core.config import settings
from marketplace_admin.app.core.http import ApiClient
from marketplace_admin.app.schemas.user import UserUpdate
from marketplace_admin.app.schemas.views import ListView, OutcomeRead, TabView, UserDetailView
from marketplace_admin.app.services.user_service import UserService


router = APIRouter()


@router.get("/", response_model=ListView)
def list_users(
    page: int = Query(1, ge=1),
    search: str = "",
    type: str = "",
    client: ApiClient = Depends(get_client),
) -> dict:
    return list_view(UsersList(UserService(client), settings.page_size), page, search, type=type)


@router.get("/{user_id}", response_model=UserDetailView)
def get_user(
    user_id: int,
    tab: Optional[str] = None,
    client: ApiClient = Depends(get_client),
) -> dict:
    """User profile; ``tab`` additionally loads the first page of that tab."""
    detail = UserDetail(UserService(client), settings.page_size)
    if detail.load(user_id) is ViewState.NOT_FOUND:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=detail.to_dict())
    if tab and detail.state is ViewState.LOADED:
        try:
            detail.select_tab(tab)
        except ValueError as exc:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))
    return detail.to_dict()


@router.get("/{user_id}/tabs/{tab}", response_model=TabView)
def get_user_tab(
    user_id: int,
    tab: str,
    page: int = Query(1, ge=1),
    client: ApiClient = Depends(get_client),
) -> dict:
    """One page of a user tab; the profile itself is not fetched."""
    detail = UserDetail(UserService(client), settings.page_size)
    detail.open_tabs(user_id)
    try:
        tab_state = detail.change_tab_page(tab, page)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))
    return tab_state.to_dict()


@router.patch("/{user_id}", response_model=OutcomeRead)
def update_user(user_id: int, payload: UserUpdate, client: ApiClient = Depends(get_client)) -> dict:
    form = UserForm(UserService(client), user_id)
    state = form.load()
    if state is ViewState.NOT_FOUND:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=form.to_dict())
    if state is ViewState.ERRORED:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=form.to_dict())
    form.update(payload.model_dump(exclude_unset=True))
    return outcome_view(form.submit())
