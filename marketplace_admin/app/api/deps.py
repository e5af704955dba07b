"""
Shared FastAPI dependencies and view helpers.

The :class:`ApiClient` and :class:`AuthSession` are created once by
``create_app`` and kept on ``app.state``; endpoints reach them through
the dependencies below.
"""

from typing import Any, Dict

from fastapi import Depends, HTTPException, Request, status

from ..controllers.base import FormOutcome, ViewState
from ..controllers.details import DetailController
from ..controllers.lists import ListController
from ..core.auth import AuthSession
from ..core.http import ApiClient


def get_client(request: Request) -> ApiClient:
    return request.app.state.api_client


def get_auth(request: Request) -> AuthSession:
    return request.app.state.auth


def require_login(auth: AuthSession = Depends(get_auth)) -> AuthSession:
    """Reject requests while no admin is logged in to the backend."""
    if not auth.is_authenticated:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Not authenticated")
    return auth


def list_view(controller: ListController, page: int, search: str, **filters: Any) -> Dict[str, Any]:
    """Load a list for the given parameters and return its view state.

    Failed fetches are part of the view state (``state == "errored"``)
    and are returned with status 200.
    """
    controller.search_term = search
    controller.page = page
    for name, value in filters.items():
        if value is not None:
            controller.filters[name] = value
    controller.load()
    return controller.to_dict()


def detail_view(controller: DetailController, entity_id: Any) -> Dict[str, Any]:
    if controller.load(entity_id) is ViewState.NOT_FOUND:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=controller.to_dict())
    return controller.to_dict()


def outcome_view(outcome: FormOutcome) -> Dict[str, Any]:
    if not outcome.success:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=outcome.to_dict())
    return outcome.to_dict()
