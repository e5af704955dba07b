"""Dashboard statistics."""

from ..core.http import ApiClient
from ..schemas.common import ApiResult


class DashboardService:
    def __init__(self, client: ApiClient) -> None:
        self.client = client

    def get_stats(self) -> ApiResult:
        return self.client.get("/v2/dashboard/stats")
