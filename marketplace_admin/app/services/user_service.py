"""
Marketplace user endpoints used by the admin console.

Besides the paginated user list and the profile itself, the backend
exposes per-user sub-collections (products, orders, transactions and
reviews).  All of them are paginated server side except
:meth:`UserService.get_user_transactions`, which returns the whole
history in a single response together with the ``pending_balance``.
"""

from typing import Any, Dict, Union

from ..core.http import ApiClient
from ..schemas.common import ApiResult


class UserService:
    def __init__(self, client: ApiClient) -> None:
        self.client = client

    def list_users(
        self,
        page: int = 1,
        limit: int = 10,
        search: str = "",
        type: Union[str, int] = "",
    ) -> ApiResult:
        """List users; ``type`` narrows the list to buyers or sellers."""
        return self.client.get("/v2/user", page=page, limit=limit, search=search, type=type)

    def get_user(self, user_id: Any) -> ApiResult:
        return self.client.get("/v2/user/user-info", user_id=user_id)

    def update_user(self, user_id: Any, payload: Dict[str, Any]) -> ApiResult:
        return self.client.patch(f"/v2/user/{user_id}", payload)

    def get_user_products(self, user_id: Any, page: int = 1, status: Union[str, int] = 0) -> ApiResult:
        return self.client.get(f"/v2/user/{user_id}/products", page=page, status=status)

    def get_user_orders(
        self,
        user_id: Any,
        page: int = 1,
        type: Union[str, int] = 0,
        status: Union[str, int] = "",
    ) -> ApiResult:
        return self.client.get(f"/v2/user/{user_id}/orders", page=page, type=type, status=status)

    def get_user_transactions(self, user_id: Any) -> ApiResult:
        """Fetch the complete, unpaginated transaction history of a user."""
        return self.client.get(f"/v2/user/{user_id}/transactions")

    def get_user_trustap_info(self, user_id: Any) -> ApiResult:
        return self.client.get(f"/v2/user/{user_id}/trustap")

    def get_user_reviews_received(self, user_id: Any, page: int = 1) -> ApiResult:
        return self.client.get(f"/v2/user/{user_id}/reviews/received", page=page)

    def get_user_reviews_given(self, user_id: Any, page: int = 1) -> ApiResult:
        return self.client.get(f"/v2/user/{user_id}/reviews/given", page=page)
