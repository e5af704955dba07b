"""Dashboard statistics endpoint."""

from fastapi import APIRouter, Depends

from marketplace_admin.app.api.deps import get_client
from marketplace_admin.app.controllers.dashboard import Dashboard
from marketplace_admin.app.core.http import ApiClient
from marketplace_admin.app.schemas.views import DashboardView
from marketplace_admin.app.services.dashboard_service import DashboardService


router = APIRouter()


@router.get("/", response_model=DashboardView)
def get_dashboard(client: ApiClient = Depends(get_client)) -> dict:
    """Headline counters; a failed fetch still returns zeroed stats."""
    dashboard = Dashboard(DashboardService(client))
    dashboard.load()
    return dashboard.to_dict()
