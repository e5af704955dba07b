"""Contact enquiries sent through the marketplace support form."""

from typing import Any, Dict, Union

from ..core.http import ApiClient
from ..schemas.common import ApiResult


class ContactService:
    def __init__(self, client: ApiClient) -> None:
        self.client = client

    def list_enquiries(
        self,
        page: int = 1,
        limit: int = 10,
        search: str = "",
        status: Union[str, int] = "",
        query_type: str = "",
    ) -> ApiResult:
        return self.client.get(
            "/v2/support/contact-enquiries",
            page=page,
            limit=limit,
            search=search,
            status=status,
            query_type=query_type,
        )

    def get_enquiry(self, enquiry_id: Any) -> ApiResult:
        return self.client.get(f"/v2/support/contact-enquiries/{enquiry_id}")

    def send_reply(self, enquiry_id: Any, reply: Dict[str, Any]) -> ApiResult:
        """Reply to an enquiry.

        Args:
            enquiry_id: Identifier of the enquiry.
            reply: Body with ``reply_message`` and an optional ``subject``.
        """
        return self.client.post(f"/v2/support/contact-enquiries/{enquiry_id}/reply", reply)
