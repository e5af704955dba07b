"""Trustap escrow transactions."""

from typing import Union

from ..core.http import ApiClient
from ..schemas.common import ApiResult


class TrustapService:
    def __init__(self, client: ApiClient) -> None:
        self.client = client

    def list_transactions(
        self,
        page: int = 1,
        limit: int = 10,
        search: str = "",
        status: Union[str, int] = "",
        pay_status: Union[str, int] = "",
    ) -> ApiResult:
        """List transactions, optionally filtered by claim and payment status."""
        return self.client.get(
            "/v2/trustap-transactions",
            page=page,
            limit=limit,
            search=search,
            status=status,
            pay_status=pay_status,
        )
