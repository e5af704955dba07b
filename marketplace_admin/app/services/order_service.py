"""Orders and the return requests raised against them."""

from typing import Any, Union

from ..core.http import ApiClient
from ..schemas.common import ApiResult


class OrderService:
    def __init__(self, client: ApiClient) -> None:
        self.client = client

    def list_orders(
        self,
        page: int = 1,
        limit: int = 10,
        search: str = "",
        status: Union[str, int] = "",
    ) -> ApiResult:
        return self.client.get("/v2/order", page=page, limit=limit, search=search, status=status)

    def get_order(self, order_id: Any) -> ApiResult:
        """Fetch one order including its tracking information."""
        return self.client.get(f"/v2/order/{order_id}")

    def list_return_requests(
        self,
        page: int = 1,
        limit: int = 10,
        search: str = "",
        status: Union[str, int] = "",
    ) -> ApiResult:
        return self.client.get(
            "/v2/chat/return-request", page=page, limit=limit, search=search, status=status
        )

    def get_return_request(self, return_request_id: Any) -> ApiResult:
        return self.client.get(f"/v2/chat/return-request/{return_request_id}")

    # Approval and rejection are keyed by the order, not by the return
    # request itself.
    def approve_return_request(self, order_id: Any) -> ApiResult:
        return self.client.post(f"/v2/chat/approve-return-request/{order_id}")

    def reject_return_request(self, order_id: Any) -> ApiResult:
        return self.client.post(f"/v2/chat/reject-return-request/{order_id}")
